"""
Meltdown — Effects Registry
One renderer per phase, behind a uniform interface.
Every effect is a function: (frame: np.ndarray, **params) -> np.ndarray
and never mutates the frame it is handed.
"""

import numpy as np

from effects.melt import melt
from effects.zoom import zoom_lag
from effects.carousel import rotating_duplicates
from effects.texture import static_noise
from effects.pixelate import pixelate
from effects.markers import red_square_markers
from effects.overlay import draw_captions, draw_hud, CAPTION_TEXT

# Master registry: name -> (function, default_params, description)
EFFECTS = {
    "melt": {
        "fn": melt,
        "phase": 0,
        "params": {"offsets": None, "column_width": 4, "splashes": 30, "rng": None},
        "description": "Column strips drip vertically by per-column offsets, with warm splashes",
    },
    "zoomlag": {
        "fn": zoom_lag,
        "phase": 1,
        "params": {"progress": 0.0, "max_zoom": 1.6},
        "description": "Slow center push-in with a tint that thickens over the phase",
    },
    "carousel": {
        "fn": rotating_duplicates,
        "phase": 2,
        "params": {"angle": 0.0, "duplicate_count": 28},
        "description": "Ring of pulsing thumbnails spinning around the center",
    },
    "static": {
        "fn": static_noise,
        "phase": 3,
        "params": {"block_size": 4, "opacity": 1.0, "rng": None},
        "description": "TV static: random gray blocks regenerated every frame",
    },
    "pixelate": {
        "fn": pixelate,
        "phase": 4,
        "params": {"progress": 0.0, "block_start": 8, "block_end": 40},
        "description": "Nearest-neighbor mosaic with blocks growing 8 -> 40 px",
    },
    "markers": {
        "fn": red_square_markers,
        "phase": 5,
        "params": {"progress": 0.0, "markers": (), "marker_size": 28},
        "description": "Red square grows from the center under bouncing X markers",
    },
}

# Phase index -> effect name
PHASE_EFFECTS = tuple(
    name for name, _ in sorted(EFFECTS.items(), key=lambda item: item[1]["phase"])
)


def get_effect(name: str):
    """Get an effect by name. Returns (fn, default_params).

    Raises ValueError if effect doesn't exist.
    """
    if name not in EFFECTS:
        available = ", ".join(sorted(EFFECTS.keys()))
        raise ValueError(f"Unknown effect: {name}. Available: {available}")
    entry = EFFECTS[name]
    return entry["fn"], entry["params"].copy()


def effect_for_phase(index: int) -> str:
    """Effect name drawn during phase `index`."""
    if not 0 <= index < len(PHASE_EFFECTS):
        raise ValueError(f"No effect for phase {index} (0-{len(PHASE_EFFECTS) - 1})")
    return PHASE_EFFECTS[index]


def list_effects() -> list[dict]:
    """List all effects in phase order with descriptions."""
    results = []
    for name in PHASE_EFFECTS:
        entry = EFFECTS[name]
        results.append({
            "name": name,
            "phase": entry["phase"],
            "description": entry["description"],
            "params": {k: v for k, v in entry["params"].items() if k != "rng"},
        })
    return results


def apply_effect(frame: np.ndarray, effect_name: str, **params) -> np.ndarray:
    """Apply a named effect to a frame, filling unspecified params with defaults.

    Unknown keyword arguments are rejected so a typo never silently falls
    back to a default.
    """
    fn, defaults = get_effect(effect_name)
    unknown = set(params) - set(defaults)
    if unknown:
        raise ValueError(f"Unknown params for {effect_name}: {', '.join(sorted(unknown))}")
    merged = {**defaults, **params}
    return fn(frame, **merged)


__all__ = [
    "EFFECTS", "PHASE_EFFECTS", "CAPTION_TEXT",
    "get_effect", "effect_for_phase", "list_effects", "apply_effect",
    "draw_captions", "draw_hud",
]
