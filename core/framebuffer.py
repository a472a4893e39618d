"""
Meltdown — FrameBuffer Provider
Holds the source image and derives a display-sized working buffer from it.
"""

import numpy as np
from PIL import Image

from core.safety import clamp_size

BACKGROUND = (0, 0, 0)


def to_rgb_array(image) -> np.ndarray:
    """Normalize a PIL image or numpy raster to a contiguous (H, W, 3) uint8 RGB array.

    Alpha is dropped, grayscale is expanded.
    """
    if isinstance(image, Image.Image):
        return np.array(image.convert("RGB"))

    arr = np.asarray(image)
    if arr.dtype != np.uint8:
        arr = np.clip(arr, 0, 255).astype(np.uint8)
    if arr.ndim == 2:
        arr = np.stack([arr] * 3, axis=-1)
    elif arr.ndim == 3 and arr.shape[2] == 4:
        arr = arr[:, :, :3]
    elif arr.ndim != 3 or arr.shape[2] != 3:
        raise ValueError(f"Unsupported image shape: {arr.shape}")
    return np.ascontiguousarray(arr)


def background_frame(size, color=BACKGROUND) -> np.ndarray:
    """Solid (H, W, 3) frame of the given (width, height)."""
    w, h = clamp_size(size)
    frame = np.empty((h, w, 3), dtype=np.uint8)
    frame[:] = color
    return frame


def resize_to_display(image: np.ndarray, size) -> np.ndarray:
    """High-quality (bicubic) resize of an RGB array to (width, height)."""
    w, h = clamp_size(size)
    if image.shape[1] == w and image.shape[0] == h:
        return image.copy()
    img = Image.fromarray(image)
    return np.array(img.resize((w, h), Image.Resampling.BICUBIC))


class FrameBufferProvider:
    """Source image + working buffer pair.

    The working buffer always matches the last display size handed in
    and is never None: with no source it is a solid background.
    """

    def __init__(self, display_size, background=BACKGROUND):
        self.background = background
        self.display_size = clamp_size(display_size)
        self._source = None
        self._working = background_frame(self.display_size, background)

    @property
    def source(self):
        return self._source

    @property
    def working(self) -> np.ndarray:
        return self._working

    @property
    def has_source(self) -> bool:
        return self._source is not None

    def set_source(self, image):
        """Replace the source wholesale and rebuild the working buffer."""
        self._source = to_rgb_array(image).copy()
        self._rebuild()

    def handle_resize(self, new_size):
        """Rebuild the working buffer for a new display size."""
        self.display_size = clamp_size(new_size)
        self._rebuild()

    def clear(self):
        """Replace the working buffer with a blank background (source is kept)."""
        self._working = background_frame(self.display_size, self.background)

    def _rebuild(self):
        if self._source is None:
            self._working = background_frame(self.display_size, self.background)
        else:
            self._working = resize_to_display(self._source, self.display_size)
