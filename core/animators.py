"""
Meltdown — Ambient Animators

Particle-like state advanced once per tick: floating captions, bouncing
markers, the carousel rotation angle and the per-column melt offsets.

Every animator takes an injected numpy Generator so runs are reproducible
under a fixed seed.
"""

import math
from dataclasses import dataclass

import numpy as np

# Captions
CAPTION_SPAWN_PROB = 0.04
CAPTION_SPEED_MIN = 1.0
CAPTION_SPEED_MAX = 3.0
CAPTION_EXIT_Y = -50.0
CAPTION_TEXT_WIDTH = 200   # keep spawns from starting off the right edge

# Markers
MARKER_START_COUNT = 10
MARKER_CAP = 200
MARKER_CLONE_PROB = 0.02
MARKER_MAX_SPEED = 4.0
MARKER_CLONE_SPREAD = 20

# Rotation (degrees per tick)
ROTATION_BASE_RATE = 6.0
ROTATION_PROGRESS_RATE = 18.0

# Melt
MELT_MIN_DELTA = -4
MELT_SNAP_PROB = 0.003


@dataclass
class Caption:
    x: float
    y: float
    speed: float


@dataclass
class Marker:
    x: float
    y: float
    vx: float
    vy: float


class CaptionField:
    """Captions that spawn below the bottom edge and drift upward."""

    def __init__(self, rng: np.random.Generator, spawn_prob=CAPTION_SPAWN_PROB):
        self.rng = rng
        self.spawn_prob = spawn_prob
        self.captions: list[Caption] = []

    def __len__(self):
        return len(self.captions)

    def spawn(self, display_size) -> Caption:
        w, h = display_size
        caption = Caption(
            x=float(self.rng.integers(0, max(1, w - CAPTION_TEXT_WIDTH))),
            y=float(h + self.rng.integers(5, 80)),
            speed=CAPTION_SPEED_MIN + self.rng.random() * (CAPTION_SPEED_MAX - CAPTION_SPEED_MIN),
        )
        self.captions.append(caption)
        return caption

    def tick(self, display_size):
        """Maybe spawn one caption, move all up, drop those past the top margin."""
        if self.rng.random() < self.spawn_prob:
            self.spawn(display_size)

        for caption in self.captions:
            caption.y -= caption.speed
        self.captions = [c for c in self.captions if c.y >= CAPTION_EXIT_Y]

    def clear(self):
        self.captions.clear()


def advance_rotation(angle: float, progress: float) -> float:
    """Carousel angle step: a base rate that speeds up as the phase progresses."""
    return angle + ROTATION_BASE_RATE + ROTATION_PROGRESS_RATE * progress


class MarkerSwarm:
    """Bouncing X markers for the final phase.

    Positions are never clamped: a velocity component reflects when the
    updated position is past a bound on that axis while still moving away
    from the display, so a marker may sit one step outside before it comes
    back. Markers left outside by a shrinking display head straight back in.
    """

    def __init__(self, rng: np.random.Generator, cap=MARKER_CAP,
                 clone_prob=MARKER_CLONE_PROB):
        self.rng = rng
        self.cap = cap
        self.clone_prob = clone_prob
        self.markers: list[Marker] = []

    def __len__(self):
        return len(self.markers)

    def _random_velocity(self):
        span = MARKER_MAX_SPEED * 2
        return (float(self.rng.random() * span - MARKER_MAX_SPEED),
                float(self.rng.random() * span - MARKER_MAX_SPEED))

    def reset(self, display_size, count=MARKER_START_COUNT):
        w, h = display_size
        self.markers = []
        for _ in range(count):
            vx, vy = self._random_velocity()
            self.markers.append(Marker(
                x=float(self.rng.integers(0, max(1, w))),
                y=float(self.rng.integers(0, max(1, h))),
                vx=vx, vy=vy,
            ))

    def tick(self, display_size):
        w, h = display_size
        # Clones made this tick start moving on the next one
        for marker in list(self.markers):
            marker.x += marker.vx
            marker.y += marker.vy
            # Only turn around when heading further out
            if (marker.x < 0 and marker.vx < 0) or (marker.x > w and marker.vx > 0):
                marker.vx = -marker.vx
            if (marker.y < 0 and marker.vy < 0) or (marker.y > h and marker.vy > 0):
                marker.vy = -marker.vy

            if len(self.markers) < self.cap and self.rng.random() < self.clone_prob:
                vx, vy = self._random_velocity()
                dx = float(self.rng.integers(-MARKER_CLONE_SPREAD, MARKER_CLONE_SPREAD))
                dy = float(self.rng.integers(-MARKER_CLONE_SPREAD, MARKER_CLONE_SPREAD))
                # Clones always spawn on screen
                self.markers.append(Marker(
                    x=min(max(0.0, marker.x + dx), float(w)),
                    y=min(max(0.0, marker.y + dy), float(h)),
                    vx=vx, vy=vy,
                ))

    def positions(self) -> list[tuple[float, float]]:
        return [(m.x, m.y) for m in self.markers]

    def clear(self):
        self.markers.clear()


def column_count(display_width: int, column_width: int) -> int:
    """Number of melt columns covering the display width."""
    return max(1, math.ceil(max(0, display_width) / max(1, column_width)))


class MeltOffsets:
    """Per-column vertical displacement for the melt phase."""

    def __init__(self, rng: np.random.Generator, snap_prob=MELT_SNAP_PROB):
        self.rng = rng
        self.snap_prob = snap_prob
        self.column_width = 1
        self.values = np.zeros(1, dtype=np.int32)

    def __len__(self):
        return len(self.values)

    def reset(self, display_width: int, column_width: int):
        """Resize to the current display and zero every column."""
        self.column_width = max(1, int(column_width))
        self.values = np.zeros(column_count(display_width, self.column_width), dtype=np.int32)

    def update(self, max_delta: int, floor_height: int, min_delta=MELT_MIN_DELTA):
        """One drip step: random drift per column, floored at -floor_height.

        A few columns snap back to zero each step.
        """
        n = len(self.values)
        lo, hi = int(min_delta), int(max_delta)
        if hi < lo:
            lo, hi = hi, lo
        change = self.rng.integers(lo, hi + 1, size=n)
        self.values = np.maximum(-int(floor_height), self.values + change).astype(np.int32)
        snap = self.rng.random(n) < self.snap_prob
        self.values[snap] = 0
