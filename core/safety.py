"""
Meltdown — Safety & Resource Guards
Preflight checks run before any image file is decoded, plus the numeric
clamps every renderer leans on so a zero-sized window never divides by zero.
"""

import os
from pathlib import Path

# --- Configurable Limits ---
MAX_FILE_MB = 100          # Maximum input image size
MAX_DIMENSION = 16384      # Largest accepted display/source edge, in pixels
ALLOWED_EXTENSIONS = {".png", ".jpg", ".jpeg", ".bmp", ".gif"}


class SafetyError(Exception):
    """Raised when a preflight check fails."""
    pass


def preflight_image(input_path: str) -> dict:
    """Run all safety checks before loading an image file.

    Args:
        input_path: Path to the image file.

    Returns:
        dict with file metadata (path, size_mb, extension).

    Raises:
        SafetyError: If any check fails.
        FileNotFoundError: If input doesn't exist.
    """
    input_path = str(input_path)
    real_path = os.path.realpath(input_path)

    # 1. File exists
    if not os.path.isfile(real_path):
        raise FileNotFoundError(f"Image not found: {input_path}")

    # 2. File size check
    size_bytes = os.path.getsize(real_path)
    size_mb = size_bytes / (1024 * 1024)
    if size_mb > MAX_FILE_MB:
        raise SafetyError(
            f"Image is {size_mb:.0f}MB, exceeds {MAX_FILE_MB}MB limit."
        )

    # 3. File extension check
    ext = Path(real_path).suffix.lower()
    if ext not in ALLOWED_EXTENSIONS:
        raise SafetyError(
            f"File type '{ext}' not allowed. "
            f"Supported: {', '.join(sorted(ALLOWED_EXTENSIONS))}"
        )

    return {
        "path": real_path,
        "size_mb": size_mb,
        "extension": ext,
    }


def clamp_int(value, lo: int, hi: int) -> int:
    """Coerce to int and clamp into [lo, hi]."""
    return max(lo, min(hi, int(value)))


def clamp_size(size) -> tuple[int, int]:
    """Normalize a (width, height) pair to at least 1x1 and at most MAX_DIMENSION."""
    w, h = size
    return clamp_int(w, 1, MAX_DIMENSION), clamp_int(h, 1, MAX_DIMENSION)


def parse_size(text: str) -> tuple[int, int]:
    """Parse a 'WxH' string from the CLI.

    Raises:
        SafetyError: If the string is malformed or out of range.
    """
    parts = text.lower().replace(" ", "").split("x")
    if len(parts) != 2:
        raise SafetyError(f"Size must be 'WIDTHxHEIGHT'. Got: '{text}'")
    try:
        w, h = int(parts[0]), int(parts[1])
    except ValueError:
        raise SafetyError(f"Non-numeric size: '{text}'")
    if w < 1 or h < 1 or w > MAX_DIMENSION or h > MAX_DIMENSION:
        raise SafetyError(f"Size out of range (1-{MAX_DIMENSION}): '{text}'")
    return w, h
