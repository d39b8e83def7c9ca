"""Tests for the fatigue decay model."""

from datetime import timedelta

import pytest

from conftest import NOW
from services.fatigue import (
    FATIGUE_WINDOW_DAYS,
    effective_recovery_hours,
    entry_fatigue,
    muscle_fatigue,
    rir_factor,
    sets_factor,
)
from services.models import MuscleFatigueEntry, MuscleRole


def stimulus(hours_ago, set_count=3, avg_rir=2.0, role=MuscleRole.PRIMARY):
    return MuscleFatigueEntry(time=NOW - timedelta(hours=hours_ago), role=role,
                              set_count=set_count, avg_rir=avg_rir, exercise_label='Test')


class TestFactors:
    """Test the individual fatigue modifiers."""

    def test_rir_factor(self):
        assert rir_factor(0) == 1
        assert rir_factor(2) == pytest.approx(0.9)
        assert rir_factor(4) == pytest.approx(0.8)

    def test_sets_factor_has_diminishing_returns(self):
        assert sets_factor(1) == pytest.approx(0.5 + 1 / 6)
        assert sets_factor(3) == pytest.approx(0.5 + 2 / 6)
        assert sets_factor(7) == pytest.approx(1.0)
        assert sets_factor(20) == 1.0

    def test_effective_recovery_hours(self):
        assert effective_recovery_hours(72, MuscleRole.PRIMARY, 0.4, 1.0) == 72
        assert effective_recovery_hours(72, MuscleRole.SECONDARY, 0.5, 1.0) == 36
        assert effective_recovery_hours(72, MuscleRole.PRIMARY, 0.4, 1.2) == pytest.approx(60)
        assert effective_recovery_hours(72, MuscleRole.PRIMARY, 0.4, 0) == 0


class TestMuscleFatigue:
    """Test fatigue aggregation for a single muscle."""

    def test_single_primary_session(self):
        """Three sets at RIR 2, 24h into a 72h recovery leaves half the fatigue."""
        fatigue = muscle_fatigue([stimulus(24)], NOW, 72, 0.4, 1.0)
        assert fatigue == pytest.approx(0.5)

    def test_secondary_recovers_faster(self):
        entry = stimulus(24, role=MuscleRole.SECONDARY)
        assert entry_fatigue(entry, NOW, 72, 0.5, 1.0) == pytest.approx(0.25)

    def test_takes_max_not_sum(self):
        fresh_light = stimulus(0, set_count=1, avg_rir=0)
        older_heavy = stimulus(36, set_count=10, avg_rir=0)

        fatigue = muscle_fatigue([fresh_light, older_heavy], NOW, 72, 0.4, 1.0)

        assert fatigue == pytest.approx(2 / 3)

    def test_frequent_training_never_exceeds_one(self):
        entries = [stimulus(h, set_count=12, avg_rir=0) for h in range(0, 48, 4)]
        assert muscle_fatigue(entries, NOW, 72, 0.4, 1.0) == pytest.approx(1.0)

    def test_decays_monotonically(self):
        entry = stimulus(0)
        previous = 1.0
        for hours in range(0, 100, 6):
            fatigue = muscle_fatigue([entry], NOW + timedelta(hours=hours), 72, 0.4, 1.0)
            assert fatigue <= previous
            previous = fatigue
        assert previous == 0

    def test_entries_outside_window_are_ignored(self):
        old = stimulus(FATIGUE_WINDOW_DAYS * 24 + 1)
        # Would still be fatiguing with a very long recovery time
        assert muscle_fatigue([old], NOW, 500, 0.4, 1.0) == 0

    def test_future_entry_counts_as_just_trained(self):
        entry = stimulus(-5, avg_rir=0, set_count=7)
        assert muscle_fatigue([entry], NOW, 72, 0.4, 1.0) == pytest.approx(1.0)

    def test_zero_recovery_time_saturates(self):
        fatigue = muscle_fatigue([stimulus(10)], NOW, 0, 0.4, 1.0)
        assert fatigue == pytest.approx(0.75)

    def test_better_sleep_means_less_fatigue(self):
        poor = muscle_fatigue([stimulus(24)], NOW, 72, 0.4, 0.6)
        good = muscle_fatigue([stimulus(24)], NOW, 72, 0.4, 1.3)
        assert good < poor
