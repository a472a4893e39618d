"""
Meltdown — Red Square Markers Effect
A red square swallowing the screen from the center while X markers
bounce around on top.
"""

import numpy as np
import cv2

FILL_COLOR = (200, 0, 0)
FILL_OPACITY = 220 / 255.0
MARKER_COLOR = (255, 0, 0)
CROSS_COLOR = (255, 255, 255)
MARKER_SIZE = 28
CROSS_INSET = 4
CROSS_THICKNESS = 3


def grow_rect(w: int, h: int, progress: float) -> tuple[int, int, int, int]:
    """Centered (x, y, width, height) rectangle scaled by progress."""
    p = max(0.0, min(1.0, float(progress)))
    return (int(w * (0.5 - 0.5 * p)), int(h * (0.5 - 0.5 * p)), int(w * p), int(h * p))


def red_square_markers(frame: np.ndarray, progress: float = 0.0,
                       markers=(), marker_size: int = MARKER_SIZE) -> np.ndarray:
    """Grow a translucent red square and stamp X markers over the frame.

    Args:
        frame: (H, W, 3) uint8 RGB array.
        progress: Phase progress (0.0-1.0). 0 = no square, 1 = full frame.
        markers: Iterable of (x, y) marker centers in pixels.
        marker_size: Edge length of each marker square.

    Returns:
        Frame with square and markers drawn.
    """
    h, w = frame.shape[:2]
    result = frame.copy()

    x, y, rw, rh = grow_rect(w, h, progress)
    if rw > 0 and rh > 0:
        x0, y0 = max(0, x), max(0, y)
        x1, y1 = min(w, x + rw), min(h, y + rh)
        region = result[y0:y1, x0:x1].astype(np.float32)
        fill = np.array(FILL_COLOR, dtype=np.float32)
        result[y0:y1, x0:x1] = np.clip(
            region * (1 - FILL_OPACITY) + fill * FILL_OPACITY, 0, 255
        ).astype(np.uint8)

    size = max(1, int(marker_size))
    half = size // 2
    for mx, my in markers:
        left, top = int(mx) - half, int(my) - half
        right, bottom = left + size, top + size
        cv2.rectangle(result, (left, top), (right - 1, bottom - 1), MARKER_COLOR, -1)
        cv2.line(result, (left + CROSS_INSET, top + CROSS_INSET),
                 (right - CROSS_INSET, bottom - CROSS_INSET), CROSS_COLOR, CROSS_THICKNESS)
        cv2.line(result, (left + CROSS_INSET, bottom - CROSS_INSET),
                 (right - CROSS_INSET, top + CROSS_INSET), CROSS_COLOR, CROSS_THICKNESS)

    return result
