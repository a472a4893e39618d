"""
Meltdown — Phase Scheduler

Six fixed visual phases played strictly in order. Each phase has a duration
and a parameter preset; when the last phase expires (or is skipped) the
scheduler calls its finish hook once and parks in a terminal state.

All timestamps are milliseconds supplied by the caller, never read from a
global clock.
"""

from dataclasses import dataclass


# Phase durations in ms: 10s, 15s, 20s, 25s, 30s, 35s
PHASE_DURATIONS_MS = (10000, 15000, 20000, 25000, 30000, 35000)

PHASE_MELT = 0
PHASE_ZOOMLAG = 1
PHASE_CAROUSEL = 2
PHASE_STATIC = 3
PHASE_PIXELATE = 4
PHASE_MARKERS = 5


@dataclass(frozen=True)
class PhasePreset:
    """Parameters assigned on phase entry.

    None means "leave the current value alone", so a field carries over
    from whichever earlier phase last set it.
    """
    name: str
    column_width: int | None = None
    max_drop_speed: int | None = None
    duplicate_count: int | None = None
    init_markers: bool = False


PHASE_PRESETS = (
    PhasePreset("melt", column_width=4, max_drop_speed=18),
    PhasePreset("zoomlag", column_width=3, max_drop_speed=8),
    PhasePreset("carousel", column_width=4, duplicate_count=28),
    PhasePreset("static", column_width=2, max_drop_speed=4),
    PhasePreset("pixelate", column_width=6),
    PhasePreset("markers", init_markers=True),
)


class PhaseScheduler:
    """Finite state machine over the phase table.

    State:
        index: Active phase (0-5), or len(durations) once finished.
        start_time: Timestamp (ms) the active phase started.
        duration_ms: Duration of the active phase.

    Pausing skips tick-driven checks but does not shift start_time, so
    the wall-clock time spent paused is still charged to the phase once
    it resumes.
    """

    def __init__(self, durations_ms=PHASE_DURATIONS_MS, presets=PHASE_PRESETS,
                 on_enter=None, on_finish=None):
        if len(presets) < len(durations_ms):
            raise ValueError("Every phase duration needs a matching preset")
        self.durations_ms = tuple(int(d) for d in durations_ms)
        self.presets = tuple(presets)
        self.on_enter = on_enter
        self.on_finish = on_finish

        self.index = 0
        self.start_time = None
        self.duration_ms = self.durations_ms[0]
        self.paused = False
        self.finished = False
        self._paused_at = None

        # Live parameters (seeded from the first preset, then carried)
        self.column_width = 4
        self.max_drop_speed = 18
        self.duplicate_count = 28

    @property
    def phase_count(self) -> int:
        return len(self.durations_ms)

    @property
    def preset(self) -> PhasePreset:
        return self.presets[min(self.index, self.phase_count - 1)]

    def start_phase(self, index: int, now: float) -> bool:
        """Enter phase `index` at time `now`.

        Returns:
            True if a phase was entered, False if the sequence finished
            (or had already finished).
        """
        if self.finished:
            return False
        if index >= self.phase_count:
            self._finish()
            return False

        self.index = max(0, int(index))
        self.start_time = float(now)
        self.duration_ms = self.durations_ms[self.index]

        preset = self.presets[self.index]
        if preset.column_width is not None:
            self.column_width = preset.column_width
        if preset.max_drop_speed is not None:
            self.max_drop_speed = preset.max_drop_speed
        if preset.duplicate_count is not None:
            self.duplicate_count = preset.duplicate_count

        if self.on_enter is not None:
            self.on_enter(self.index)
        return True

    def _finish(self):
        # Terminal transition runs exactly once
        self.finished = True
        self.index = self.phase_count
        if self.on_finish is not None:
            self.on_finish()

    def progress(self, now: float) -> float:
        """Normalized [0, 1] progress of the active phase.

        While paused, reports the progress frozen at pause time.
        """
        if self.finished:
            return 1.0
        if self.start_time is None:
            return 0.0
        if self.paused and self._paused_at is not None:
            now = self._paused_at
        elapsed = float(now) - self.start_time
        return max(0.0, min(1.0, elapsed / max(1, self.duration_ms)))

    def is_expired(self, now: float) -> bool:
        return self.progress(now) >= 1.0

    def tick(self, now: float) -> bool:
        """Auto-advance when the active phase has run its full duration.

        Returns:
            True if a transition happened (including into finished).
        """
        if self.paused or self.finished or self.start_time is None:
            return False
        if self.is_expired(now):
            self.start_phase(self.index + 1, now)
            return True
        return False

    def skip(self, now: float) -> bool:
        """Jump to the next phase regardless of progress. Never wraps."""
        if self.finished:
            return False
        self.start_phase(self.index + 1, now)
        return True

    def toggle_pause(self, now: float) -> bool:
        """Flip the paused flag. Returns the new state."""
        self.paused = not self.paused
        self._paused_at = float(now) if self.paused else None
        return self.paused
