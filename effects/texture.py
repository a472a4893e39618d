"""
Meltdown — Texture & Noise Effects
TV static laid over the frame.
"""

import numpy as np

STATIC_BLOCK = 4


def static_noise(frame: np.ndarray, block_size: int = STATIC_BLOCK,
                 opacity: float = 1.0, rng=None) -> np.ndarray:
    """Cover the frame with a grid of random gray blocks, fresh every call.

    Args:
        frame: (H, W, 3) uint8 RGB array.
        block_size: Edge of each noise block in pixels.
        opacity: 0.0 (frame only) to 1.0 (noise fully covers the frame).
        rng: numpy Generator. None = a fresh unseeded one.

    Returns:
        Static-covered frame.
    """
    h, w = frame.shape[:2]
    block_size = max(1, int(block_size))
    opacity = max(0.0, min(1.0, float(opacity)))
    if rng is None:
        rng = np.random.default_rng()

    rows = -(-h // block_size)
    cols = -(-w // block_size)
    grid = rng.integers(0, 256, size=(rows, cols), dtype=np.uint8)
    # Expand each cell to a block, then crop partial blocks at the edges
    gray = np.repeat(np.repeat(grid, block_size, axis=0), block_size, axis=1)[:h, :w]
    noise = np.repeat(gray[:, :, np.newaxis], 3, axis=2)

    if opacity >= 1.0:
        return noise
    result = frame.astype(np.float32) * (1 - opacity) + noise.astype(np.float32) * opacity
    return np.clip(result, 0, 255).astype(np.uint8)
