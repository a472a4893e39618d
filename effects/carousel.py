"""
Meltdown — Rotating Duplicates Effect
A ring of screen thumbnails spinning around the center, each one pulsing
in size as it goes round.
"""

import math

import numpy as np
import cv2

RADIUS_FRACTION = 0.35
THUMB_DIVISOR = 6
MIN_THUMB = 8


def _paste(canvas, tile, x, y):
    """Paste tile with its top-left at (x, y), clipped to the canvas."""
    ch, cw = canvas.shape[:2]
    th, tw = tile.shape[:2]
    x0, y0 = max(0, x), max(0, y)
    x1, y1 = min(cw, x + tw), min(ch, y + th)
    if x1 <= x0 or y1 <= y0:
        return
    canvas[y0:y1, x0:x1] = tile[y0 - y:y1 - y, x0 - x:x1 - x]


def rotating_duplicates(frame: np.ndarray, angle: float = 0.0,
                        duplicate_count: int = 28) -> np.ndarray:
    """Draw copies of a frame thumbnail evenly spaced on a circle.

    Args:
        frame: (H, W, 3) uint8 RGB array.
        angle: Shared rotation angle in degrees.
        duplicate_count: Number of copies around the ring.

    Returns:
        Frame with the carousel drawn on a black background.
    """
    h, w = frame.shape[:2]
    count = max(1, int(duplicate_count))
    thumb_w = max(MIN_THUMB, w // THUMB_DIVISOR)
    thumb_h = max(MIN_THUMB, h // THUMB_DIVISOR)
    thumb = cv2.resize(frame, (thumb_w, thumb_h), interpolation=cv2.INTER_AREA)

    result = np.zeros_like(frame)
    radius = min(w, h) * RADIUS_FRACTION
    cx, cy = w / 2.0, h / 2.0

    for i in range(count):
        a = angle + i * (360.0 / count)
        rad = math.radians(a)
        # Thumbnail center on the ring
        x = cx + radius * math.cos(rad)
        y = cy + radius * math.sin(rad)

        scale = 0.7 + 0.6 * abs(math.sin(math.radians(a + angle)))
        dw = max(1, int(thumb_w * scale))
        dh = max(1, int(thumb_h * scale))
        tile = cv2.resize(thumb, (dw, dh), interpolation=cv2.INTER_LINEAR)
        _paste(result, tile, int(x) - dw // 2, int(y) - dh // 2)

    return result
