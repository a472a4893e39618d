"""
Conftest: shared fixtures for all Meltdown test modules.

1. Synthetic test frames (gradient + bright block, never blank)
2. Seeded random generators so stochastic animators are reproducible
3. Headless pygame for the window-host tests
"""

import os
import sys

import numpy as np
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def _make_test_frame(width=160, height=120):
    """Generate a synthetic test frame (gradient, not blank)."""
    frame = np.zeros((height, width, 3), dtype=np.uint8)
    frame[:, :, 0] = np.linspace(0, 255, width, dtype=np.uint8)  # R gradient
    frame[:, :, 1] = np.linspace(0, 255, height, dtype=np.uint8)[:, np.newaxis]  # G gradient
    frame[height // 4:3 * height // 4, width // 4:3 * width // 4, 2] = 200
    return frame


@pytest.fixture
def test_frame():
    return _make_test_frame()


@pytest.fixture
def make_frame():
    return _make_test_frame


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def headless_sdl(monkeypatch):
    """Point SDL at its dummy drivers so pygame opens no real window."""
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
