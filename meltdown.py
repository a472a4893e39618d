#!/usr/bin/env python3
"""
Meltdown — Simulated Screen Melt CLI

Plays six timed melt phases over a screen grab (or an image file) in a
window, then drops a text file and opens it.

Usage:
    # Grab the screen and melt it
    python meltdown.py

    # Melt an image instead
    python meltdown.py --image photo.png

    # Render a single phase as a still (no window)
    python meltdown.py --still out.png --image photo.png --phase 2 --at 0.5

    # List the phase effects
    python meltdown.py --list-effects
"""

import argparse
import logging
import sys
from pathlib import Path

import numpy as np
from PIL import Image

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from core.phases import PHASE_DURATIONS_MS
from core.safety import SafetyError, parse_size

__version__ = "0.1.0"

TICK_MS = 33


def render_still(image, phase: int, at: float, size, seed=None) -> np.ndarray:
    """Render phase `phase` as it would look at progress `at`.

    Ticks are simulated from the phase start so stateful phases (melt,
    carousel, markers) have something to show.
    """
    from core.sequence import MeltSequence

    if not 0 <= phase < len(PHASE_DURATIONS_MS):
        raise SafetyError(f"Phase must be 0-{len(PHASE_DURATIONS_MS) - 1}, got {phase}")
    at = max(0.0, min(0.999, float(at)))

    seq = MeltSequence(size, seed=seed, handoff=None)
    if image is not None:
        seq.buffers.set_source(image)
    seq.start_phase(phase, 0.0)

    end = at * PHASE_DURATIONS_MS[phase]
    now = 0.0
    while now + TICK_MS <= end:
        now += TICK_MS
        seq.on_tick(now)
    return seq.render(end)


def cmd_still(args):
    """Write one rendered frame to disk."""
    from core.capture import load_image

    size = parse_size(args.size)
    image = load_image(args.image) if args.image else None
    frame = render_still(image, args.phase, args.at, size, seed=args.seed)
    out = Path(args.still)
    Image.fromarray(frame).save(out)
    print(f"  Saved: {out} (phase {args.phase} at {args.at:.2f}, {size[0]}x{size[1]})")


def cmd_list_effects(args):
    from effects import list_effects

    for fx in list_effects():
        seconds = PHASE_DURATIONS_MS[fx["phase"]] / 1000
        print(f"  {fx['phase']}  {fx['name']:10s} {seconds:4.0f}s  {fx['description']}")


def cmd_play(args):
    """Open the live window."""
    from core.performer import MeltPlayer

    if args.image:
        from core.safety import preflight_image
        preflight_image(args.image)

    player = MeltPlayer(
        image_path=args.image,
        size=parse_size(args.size),
        fps=args.fps,
        seed=args.seed,
        fullscreen=args.fullscreen,
    )
    player.run()
    if player.sequence.finished:
        print("  Sequence complete.")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Meltdown — simulated screen melt",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # Mode
    parser.add_argument("--list-effects", action="store_true",
                        help="List the phase effects and exit")
    parser.add_argument("--still", type=str, default=None,
                        help="Render one phase to this PNG instead of opening a window")

    # Input
    parser.add_argument("--image", type=str, default=None,
                        help="Image file to melt (default: grab the screen)")

    # Window options
    parser.add_argument("--size", type=str, default="1280x800",
                        help="Window or still size WIDTHxHEIGHT (default: 1280x800)")
    parser.add_argument("--fullscreen", action="store_true",
                        help="Open full screen")
    parser.add_argument("--fps", type=int, default=30,
                        help="Tick rate (default: 30)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed (default: random)")

    # Still options
    parser.add_argument("--phase", type=int, default=0,
                        help="Phase to render with --still (0-5)")
    parser.add_argument("--at", type=float, default=0.5,
                        help="Phase progress to render with --still (0.0-1.0)")

    parser.add_argument("--log-level", type=str, default="WARNING",
                        help="Logging level (default: WARNING)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    args = parser.parse_args(argv)

    level = logging.getLevelName(args.log_level.upper())
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.list_effects:
            cmd_list_effects(args)
        elif args.still:
            cmd_still(args)
        else:
            cmd_play(args)
    except (SafetyError, FileNotFoundError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
