"""
Meltdown — Melt Sequence

The host-facing core: one object that owns the scheduler, the frame
buffers and every animator, and exposes the handful of calls a window
host needs (tick, paint, resize, skip, pause, new source).

Loop contract per tick (single-threaded, ~30Hz):
  1. on_tick(now):  captions, phase-specific state, timeout check
  2. on_paint(now): render the current phase, then auto-advance if expired

Nothing here reads a clock or touches a UI toolkit; `now` is always passed in
(milliseconds, any monotonic origin).
"""

import logging

import numpy as np

from core.animators import CaptionField, MarkerSwarm, MeltOffsets, advance_rotation
from core.finalizer import SequenceFinalizer, write_and_open
from core.framebuffer import FrameBufferProvider
from core.phases import (
    PHASE_DURATIONS_MS, PHASE_PRESETS, PhaseScheduler,
    PHASE_MELT, PHASE_ZOOMLAG, PHASE_CAROUSEL, PHASE_STATIC, PHASE_PIXELATE, PHASE_MARKERS,
)
from effects import apply_effect, draw_captions, effect_for_phase

logger = logging.getLogger(__name__)


class MeltSequence:
    """Six-phase melt sequence over a source image.

    Args:
        display_size: (width, height) of the drawing area.
        seed: Seed for every random choice (animators and per-frame noise).
        durations_ms: Phase duration table.
        handoff: Final text writer/opener, called once at the end.
        splashes: Draw the decorative splashes during the melt phase.
    """

    def __init__(self, display_size, seed=None, durations_ms=PHASE_DURATIONS_MS,
                 handoff=write_and_open, splashes=True):
        # Separate streams so repaint count never changes the animation
        anim_seed, render_seed = np.random.SeedSequence(seed).spawn(2)
        self.rng = np.random.default_rng(anim_seed)
        self.render_rng = np.random.default_rng(render_seed)
        self.splashes = splashes

        self.buffers = FrameBufferProvider(display_size)
        self.caption_field = CaptionField(self.rng)
        self.marker_swarm = MarkerSwarm(self.rng)
        self.melt_offsets = MeltOffsets(self.rng)
        self.rotation_angle = 0.0
        self.running = True

        self.finalizer = SequenceFinalizer(on_stop=self._stop, handoff=handoff)
        self.scheduler = PhaseScheduler(
            durations_ms, PHASE_PRESETS,
            on_enter=self._on_phase_enter,
            on_finish=self.finalizer.run,
        )
        self.melt_offsets.reset(self.display_size[0], self.scheduler.column_width)

    # --- Read-only views ---

    @property
    def display_size(self) -> tuple[int, int]:
        return self.buffers.display_size

    @property
    def working(self) -> np.ndarray:
        return self.buffers.working

    @property
    def phase(self) -> int:
        return self.scheduler.index

    @property
    def paused(self) -> bool:
        return self.scheduler.paused

    @property
    def finished(self) -> bool:
        return self.scheduler.finished

    @property
    def offsets(self) -> np.ndarray:
        return self.melt_offsets.values

    @property
    def captions(self):
        return self.caption_field.captions

    @property
    def markers(self):
        return self.marker_swarm.markers

    def progress(self, now: float) -> float:
        return self.scheduler.progress(now)

    # --- Phase control ---

    def start(self, now: float):
        """Begin the sequence at phase 0."""
        self.start_phase(0, now)

    def start_phase(self, index: int, now: float) -> bool:
        return self.scheduler.start_phase(index, now)

    def skip(self, now: float) -> bool:
        return self.scheduler.skip(now)

    def toggle_pause(self, now: float) -> bool:
        paused = self.scheduler.toggle_pause(now)
        logger.debug("Pause %s at phase %d", "on" if paused else "off", self.phase)
        return paused

    def _on_phase_enter(self, index: int):
        logger.info("Phase %d (%s) started", index, PHASE_PRESETS[index].name)
        self.melt_offsets.reset(self.display_size[0], self.scheduler.column_width)
        if self.scheduler.preset.init_markers:
            self.marker_swarm.reset(self.display_size)

    def _stop(self):
        self.running = False
        self.buffers.clear()
        self.caption_field.clear()
        self.marker_swarm.clear()

    # --- Host events ---

    def set_source(self, image, now: float) -> bool:
        """New source image: rebuild the working buffer and restart at phase 0.

        Returns:
            False if the sequence had already finished (image ignored).
        """
        if self.finished:
            logger.info("Sequence already finished; new source ignored")
            return False
        self.buffers.set_source(image)
        self.start_phase(0, now)
        return True

    def on_resize(self, new_size):
        """Rebuild the working buffer and melt columns for a new display size."""
        self.buffers.handle_resize(new_size)
        if self.finished:
            self.buffers.clear()
        self.melt_offsets.reset(self.display_size[0], self.scheduler.column_width)

    def on_tick(self, now: float) -> bool:
        """Advance ambient and phase state by one tick.

        Returns:
            True when the host should request a redraw.
        """
        if not self.running or self.paused or self.finished:
            return False

        self.caption_field.tick(self.display_size)

        phase = self.phase
        if phase == PHASE_MELT:
            self.melt_offsets.update(self.scheduler.max_drop_speed, self.working.shape[0])
        elif phase == PHASE_CAROUSEL:
            self.rotation_angle = advance_rotation(self.rotation_angle, self.progress(now))
        elif phase == PHASE_MARKERS:
            self.marker_swarm.tick(self.display_size)

        self.scheduler.tick(now)
        return True

    def on_paint(self, now: float) -> np.ndarray:
        """Render the current frame, then auto-advance if the phase expired."""
        if self.finished:
            return self.working.copy()

        frame = self.render(now)

        if not self.paused and self.scheduler.is_expired(now):
            self.start_phase(self.phase + 1, now)
        return frame

    def render(self, now: float) -> np.ndarray:
        """Pure draw of the current state: phase effect plus captions."""
        phase = self.phase
        progress = self.progress(now)
        name = effect_for_phase(phase)

        if phase == PHASE_MELT:
            params = {
                "offsets": self.melt_offsets.values,
                "column_width": self.melt_offsets.column_width,
                "rng": self.render_rng if self.splashes else None,
            }
        elif phase in (PHASE_ZOOMLAG, PHASE_PIXELATE):
            params = {"progress": progress}
        elif phase == PHASE_CAROUSEL:
            params = {"angle": self.rotation_angle,
                      "duplicate_count": self.scheduler.duplicate_count}
        elif phase == PHASE_STATIC:
            params = {"rng": self.render_rng}
        else:
            params = {"progress": progress, "markers": self.marker_swarm.positions()}

        frame = apply_effect(self.working, name, **params)
        return draw_captions(frame, [(c.x, c.y) for c in self.captions])
