"""
Meltdown — Pixelate Effect
Old-TV mosaic whose blocks grow as the phase runs.
"""

import numpy as np
from PIL import Image

BLOCK_START = 8
BLOCK_END = 40


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def block_size_for(progress: float, start: int = BLOCK_START, end: int = BLOCK_END) -> int:
    """Mosaic block edge for a given phase progress (never below 1)."""
    p = max(0.0, min(1.0, float(progress)))
    return max(1, int(lerp(start, end, p)))


def pixelate(frame: np.ndarray, progress: float = 0.0,
             block_start: int = BLOCK_START, block_end: int = BLOCK_END) -> np.ndarray:
    """Downsample then upsample with nearest neighbor for a blocky mosaic.

    Args:
        frame: (H, W, 3) uint8 RGB array.
        progress: Phase progress (0.0-1.0). Block size grows block_start -> block_end.

    Returns:
        Pixelated frame.
    """
    h, w = frame.shape[:2]
    block = block_size_for(progress, block_start, block_end)
    small_w = max(1, w // block)
    small_h = max(1, h // block)

    img = Image.fromarray(frame)
    small = img.resize((small_w, small_h), Image.Resampling.NEAREST)
    return np.array(small.resize((w, h), Image.Resampling.NEAREST))
