"""
Meltdown — Image Acquisition
Full-screen grab or image file decode, both handed back as (H, W, 3) uint8 RGB.
Capture only reads pixels; nothing on screen is modified.
"""

import numpy as np
from PIL import Image, ImageGrab, UnidentifiedImageError

from core.safety import preflight_image, SafetyError


class CaptureError(Exception):
    """Raised when the screen can't be grabbed."""
    pass


def capture_screen() -> np.ndarray:
    """Grab the primary screen.

    Raises:
        CaptureError: If the platform grabber fails (no display, no permission).
    """
    try:
        shot = ImageGrab.grab()
    except OSError as e:
        raise CaptureError(f"Screen capture failed: {e}") from e
    return np.array(shot.convert("RGB"))


def load_image(path: str) -> np.ndarray:
    """Decode an image file after the safety preflight.

    Raises:
        SafetyError: If the file fails preflight or can't be decoded.
        FileNotFoundError: If the file doesn't exist.
    """
    info = preflight_image(path)
    try:
        with Image.open(info["path"]) as img:
            return np.array(img.convert("RGB"))
    except (UnidentifiedImageError, OSError) as e:
        raise SafetyError(f"Could not decode image {path}: {e}") from e
