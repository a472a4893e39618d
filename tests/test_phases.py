"""
Phase scheduler tests.

Verifies:
1. Progress is clamped to [0, 1] and never decreases while running
2. Timeout and skip transitions are strictly sequential
3. The terminal transition fires the finish hook exactly once
4. Pause freezes checks without shifting the phase start time
5. Presets set only their listed fields; the rest carry over
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.phases import PhaseScheduler, PHASE_DURATIONS_MS, PHASE_PRESETS


class Counter:
    def __init__(self):
        self.calls = 0

    def __call__(self, *args):
        self.calls += 1


class TestProgress:

    def test_zero_before_start(self):
        sched = PhaseScheduler()
        assert sched.progress(5000) == 0.0

    def test_clamped_and_monotonic(self):
        sched = PhaseScheduler()
        sched.start_phase(0, 1000)
        values = [sched.progress(t) for t in range(0, 30000, 250)]
        assert all(0.0 <= v <= 1.0 for v in values)
        assert all(b >= a for a, b in zip(values, values[1:]))
        assert values[0] == 0.0
        assert values[-1] == 1.0

    def test_halfway(self):
        sched = PhaseScheduler()
        sched.start_phase(1, 0)
        assert sched.progress(7500) == pytest.approx(0.5)


class TestTransitions:

    def test_duration_table(self):
        assert PHASE_DURATIONS_MS == (10000, 15000, 20000, 25000, 30000, 35000)
        assert len(PHASE_PRESETS) == 6

    def test_tick_at_duration_advances(self):
        sched = PhaseScheduler()
        sched.start_phase(0, 0)
        assert sched.progress(10000) == 1.0
        assert sched.tick(10000) is True
        assert sched.index == 1
        assert sched.start_time == 10000
        assert sched.duration_ms == 15000

    def test_tick_before_duration_stays(self):
        sched = PhaseScheduler()
        sched.start_phase(0, 0)
        assert sched.tick(9999) is False
        assert sched.index == 0

    def test_skip_ignores_progress(self):
        sched = PhaseScheduler()
        sched.start_phase(0, 0)
        sched.skip(1)
        assert sched.index == 1
        assert sched.progress(1) == 0.0

    def test_skip_past_last_finishes_without_wrap(self):
        done = Counter()
        sched = PhaseScheduler(on_finish=done)
        sched.start_phase(0, 0)
        for _ in range(6):
            sched.skip(0)
        assert sched.finished
        assert done.calls == 1
        assert sched.skip(0) is False
        assert sched.index == 6
        assert done.calls == 1

    def test_negative_index_clamps(self):
        sched = PhaseScheduler()
        sched.start_phase(-3, 0)
        assert sched.index == 0

    def test_on_enter_receives_index(self):
        entered = []
        sched = PhaseScheduler(on_enter=entered.append)
        sched.start_phase(0, 0)
        sched.tick(10000)
        sched.skip(10001)
        assert entered == [0, 1, 2]


class TestFinish:

    def test_start_past_end_finishes_once(self):
        done = Counter()
        sched = PhaseScheduler(on_finish=done)
        sched.start_phase(6, 0)
        sched.start_phase(6, 0)
        assert done.calls == 1
        assert sched.finished

    def test_finished_ignores_tick_and_restart(self):
        done = Counter()
        sched = PhaseScheduler(on_finish=done)
        sched.start_phase(6, 0)
        assert sched.tick(10 ** 9) is False
        assert sched.start_phase(0, 0) is False
        assert sched.progress(0) == 1.0
        assert done.calls == 1

    def test_timeout_through_all_phases(self):
        done = Counter()
        sched = PhaseScheduler(on_finish=done)
        sched.start_phase(0, 0)
        now = 0
        for duration in PHASE_DURATIONS_MS:
            now += duration
            sched.tick(now)
        assert sched.finished
        assert done.calls == 1

    def test_mismatched_presets_rejected(self):
        with pytest.raises(ValueError):
            PhaseScheduler(durations_ms=(1, 2, 3), presets=PHASE_PRESETS[:2])


class TestPause:

    def test_tick_skipped_while_paused(self):
        sched = PhaseScheduler()
        sched.start_phase(0, 0)
        sched.toggle_pause(2000)
        assert sched.tick(50000) is False
        assert sched.index == 0

    def test_progress_frozen_while_paused(self):
        sched = PhaseScheduler()
        sched.start_phase(0, 0)
        sched.toggle_pause(2000)
        assert sched.progress(2000) == pytest.approx(0.2)
        assert sched.progress(9000) == pytest.approx(0.2)

    def test_resume_keeps_original_start(self):
        # Time spent paused still counts once the phase resumes
        sched = PhaseScheduler()
        sched.start_phase(0, 0)
        sched.toggle_pause(2000)
        sched.toggle_pause(20000)
        assert sched.start_time == 0
        assert sched.progress(20000) == 1.0
        assert sched.tick(20000) is True
        assert sched.index == 1

    def test_toggle_returns_state(self):
        sched = PhaseScheduler()
        assert sched.toggle_pause(0) is True
        assert sched.toggle_pause(0) is False


class TestPresets:

    def test_listed_fields_applied(self):
        sched = PhaseScheduler()
        sched.start_phase(0, 0)
        assert (sched.column_width, sched.max_drop_speed) == (4, 18)
        sched.start_phase(1, 0)
        assert (sched.column_width, sched.max_drop_speed) == (3, 8)
        sched.start_phase(2, 0)
        assert (sched.column_width, sched.duplicate_count) == (4, 28)
        sched.start_phase(3, 0)
        assert (sched.column_width, sched.max_drop_speed) == (2, 4)

    def test_unlisted_fields_carry_over(self):
        sched = PhaseScheduler()
        sched.start_phase(3, 0)
        sched.start_phase(4, 0)
        assert sched.column_width == 6
        assert sched.max_drop_speed == 4
        sched.start_phase(5, 0)
        assert sched.column_width == 6
        assert sched.preset.init_markers
