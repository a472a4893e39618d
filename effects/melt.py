"""
Meltdown — Melt Effect
Vertical column strips slide down (or up) independently, like the screen
is dripping off the monitor.
"""

import numpy as np
import cv2

SPLASH_COLOR = (255, 220, 160)
SPLASH_OPACITY = 60 / 255.0


def melt(frame: np.ndarray, offsets=None, column_width: int = 4,
         splashes: int = 30, rng=None) -> np.ndarray:
    """Shift each column of the frame by its melt offset.

    Args:
        frame: (H, W, 3) uint8 RGB array (the working buffer).
        offsets: Per-column vertical displacement in pixels. Positive drips
                 down, negative pulls up. None or empty = no displacement.
        column_width: Width of each column strip in pixels.
        splashes: Number of translucent warm ellipses splattered on top.
        rng: numpy Generator for splash placement. None = no splashes.

    Returns:
        Melted frame. Pixels uncovered by a shifted column are black.
    """
    h, w = frame.shape[:2]
    column_width = max(1, int(column_width))
    if offsets is None or len(offsets) == 0:
        result = frame.copy()
    else:
        result = np.zeros_like(frame)
        for col, dy in enumerate(offsets):
            x0 = col * column_width
            if x0 >= w:
                break
            x1 = min(x0 + column_width, w)
            dy = int(dy)
            if dy >= h:
                continue  # whole strip is below the view

            # Clip source and destination by the same amount
            dst_y0 = max(0, dy)
            src_y0 = dst_y0 - dy
            n = min(h - dst_y0, h - src_y0)
            if n <= 0:
                continue
            result[dst_y0:dst_y0 + n, x0:x1] = frame[src_y0:src_y0 + n, x0:x1]

    if rng is not None and splashes > 0:
        result = _splash(result, splashes, rng)
    return result


def _splash(frame, count, rng):
    h, w = frame.shape[:2]
    overlay = frame.copy()
    for _ in range(count):
        cx = int(rng.integers(0, max(1, w)))
        cy = int(rng.integers(0, max(1, h)))
        rw = int(rng.integers(20, 120))
        rh = int(rng.integers(10, 60))
        cv2.ellipse(overlay, (cx, cy), (rw // 2, rh // 2), 0, 0, 360, SPLASH_COLOR, -1)

    # Only blend where an ellipse landed
    mask = np.any(overlay != frame, axis=2)
    blended = frame.astype(np.float32) * (1 - SPLASH_OPACITY) + overlay.astype(np.float32) * SPLASH_OPACITY
    result = frame.copy()
    result[mask] = np.clip(blended[mask], 0, 255).astype(np.uint8)
    return result
