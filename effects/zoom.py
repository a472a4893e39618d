"""
Meltdown — Zoom Lag Effect
Slow push-in about the center with a washed-out tint creeping over it.
"""

import numpy as np
import cv2

MAX_ZOOM = 1.6
TINT_COLOR = (255, 255, 200)


def zoom_lag(frame: np.ndarray, progress: float = 0.0,
             max_zoom: float = MAX_ZOOM) -> np.ndarray:
    """Scale the frame about its center and lay a tint over it.

    Args:
        frame: (H, W, 3) uint8 RGB array.
        progress: Phase progress (0.0-1.0). Zoom goes 1.0 -> max_zoom,
                  tint opacity goes 60/255 -> 180/255.
        max_zoom: Zoom factor reached at progress 1.0.

    Returns:
        Zoomed, tinted frame.
    """
    h, w = frame.shape[:2]
    p = max(0.0, min(1.0, float(progress)))
    zoom = 1.0 + (max(1.0, float(max_zoom)) - 1.0) * p

    sw = max(w, int(round(w * zoom)))
    sh = max(h, int(round(h * zoom)))
    if sw == w and sh == h:
        zoomed = frame.astype(np.float32)
    else:
        scaled = cv2.resize(frame, (sw, sh), interpolation=cv2.INTER_LINEAR)
        ox = (sw - w) // 2
        oy = (sh - h) // 2
        zoomed = scaled[oy:oy + h, ox:ox + w].astype(np.float32)

    alpha = (60 + 120 * p) / 255.0
    tint = np.array(TINT_COLOR, dtype=np.float32)
    result = zoomed * (1 - alpha) + tint * alpha
    return np.clip(result, 0, 255).astype(np.uint8)
