"""
Meltdown — Text Overlays
Floating captions drawn on every frame, and the small status HUD the
window host puts in the corner.
"""

from functools import lru_cache

import numpy as np
from PIL import Image, ImageDraw, ImageFont

CAPTION_TEXT = "moggado pelo jodismiu"
CAPTION_FILL = (255, 255, 255, 220)
CAPTION_FONT_SIZE = 16
HUD_FONT_SIZE = 14

_FONT_CANDIDATES = (
    "segoeuib.ttf",
    "DejaVuSans-Bold.ttf",
    "/System/Library/Fonts/Helvetica.ttc",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
)


@lru_cache(maxsize=8)
def get_font(size: int):
    """First available bold TrueType font, falling back to Pillow's default."""
    for name in _FONT_CANDIDATES:
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue
    return ImageFont.load_default()


def _composite(frame: np.ndarray, overlay: Image.Image) -> np.ndarray:
    base = Image.fromarray(frame).convert("RGBA")
    composited = Image.alpha_composite(base, overlay)
    return np.array(composited.convert("RGB"))


def draw_captions(frame: np.ndarray, positions, text: str = CAPTION_TEXT,
                  font_size: int = CAPTION_FONT_SIZE) -> np.ndarray:
    """Draw the caption text at each (x, y) position.

    Positions outside the frame are simply clipped. With no positions the
    frame is returned as a copy without touching Pillow.
    """
    positions = list(positions)
    if not positions:
        return frame.copy()

    h, w = frame.shape[:2]
    overlay = Image.new("RGBA", (w, h), (0, 0, 0, 0))
    draw = ImageDraw.Draw(overlay)
    font = get_font(font_size)
    for x, y in positions:
        draw.text((float(x), float(y)), text, fill=CAPTION_FILL, font=font)
    return _composite(frame, overlay)


def draw_hud(frame: np.ndarray, phase: int, paused: bool = False,
             finished: bool = False) -> np.ndarray:
    """Phase label in the top-left corner."""
    h, w = frame.shape[:2]
    overlay = Image.new("RGBA", (w, h), (0, 0, 0, 0))
    draw = ImageDraw.Draw(overlay)
    font = get_font(HUD_FONT_SIZE)

    label = "Fim" if finished else f"Fase: {phase}"
    if paused and not finished:
        label += "  [PAUSED]"
    bbox = draw.textbbox((10, 10), label, font=font)
    draw.rectangle((bbox[0] - 4, bbox[1] - 4, bbox[2] + 4, bbox[3] + 4), fill=(0, 0, 0, 140))
    draw.text((10, 10), label, fill=(255, 255, 255, 255), font=font)
    return _composite(frame, overlay)
