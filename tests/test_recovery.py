"""Tests for the recovery engine."""

from datetime import date, timedelta, timezone

from conftest import NOW, exercise, session_ago, working_sets
from services import (
    AnalyticsConfig,
    SleepEntry,
    TrainingDay,
    compute_recovery,
    default_config,
    summarize_recovery,
    training_day_readiness,
)
from services.catalog import ALL_MUSCLES
from services.models import RecoveryStatus, recovery_status
from services.recovery import hours_remaining, recovery_percent


class TestComputeRecovery:
    """Test per-muscle recovery snapshots."""

    def setup_method(self):
        self.config = default_config()

    def test_no_history_is_fully_recovered(self):
        snapshots = compute_recovery([], [], NOW, self.config)

        assert set(snapshots) == set(ALL_MUSCLES)
        for snapshot in snapshots.values():
            assert snapshot.recovery_percent == 100
            assert snapshot.hours_remaining == 0
            assert snapshot.last_trained_time is None
            assert snapshot.status == RecoveryStatus.READY

    def test_primary_muscle_halfway(self):
        """Flys 24h ago: chest at 50% with 36h to go."""
        sessions = [session_ago(24, exercise('ex3', working_sets(3, rir=2)))]

        snapshots = compute_recovery(sessions, [], NOW, self.config)

        chest = snapshots['chest']
        assert chest.recovery_percent == 50
        assert chest.hours_remaining == 36
        assert chest.last_exercise_label == 'Dumbbell Flys'
        assert chest.status == RecoveryStatus.RECOVERING
        assert snapshots['biceps'].recovery_percent == 100

    def test_secondary_muscle_with_custom_multiplier(self):
        """Close grip bench hits chest as secondary: 36h effective recovery."""
        config = default_config(secondary_recovery_multiplier=0.5)
        sessions = [session_ago(24, exercise('ex32', working_sets(3, rir=2)))]

        chest = compute_recovery(sessions, [], NOW, config)['chest']

        assert chest.recovery_percent == 75
        assert chest.hours_remaining == 18

    def test_recovery_stays_in_bounds(self):
        sessions = [
            session_ago(h, exercise('ex1', working_sets(10, rir=0)), exercise('ex33', working_sets(8, rir=0)))
            for h in (0, 2, 30, 100)
        ]
        for snapshot in compute_recovery(sessions, [], NOW, self.config).values():
            assert 0 <= snapshot.recovery_percent <= 100
            assert snapshot.hours_remaining >= 0
            assert (snapshot.hours_remaining == 0) == (snapshot.recovery_percent == 100)

    def test_same_inputs_same_output(self):
        sessions = [session_ago(12, exercise('ex8', working_sets(4)))]
        first = compute_recovery(sessions, [], NOW, self.config)
        second = compute_recovery(sessions, [], NOW, self.config)
        assert first == second

    def test_sleep_shifts_recovery(self):
        sessions = [session_ago(24, exercise('ex3', working_sets(3)))]
        good = [SleepEntry(date=date(2024, 3, 12), hours_slept=9.5, quality=5)]
        poor = [SleepEntry(date=date(2024, 3, 12), hours_slept=5, quality=1)]

        baseline = compute_recovery(sessions, [], NOW, self.config)['chest'].recovery_percent
        rested = compute_recovery(sessions, good, NOW, self.config)['chest'].recovery_percent
        tired = compute_recovery(sessions, poor, NOW, self.config)['chest'].recovery_percent

        assert tired < baseline < rested

    def test_defaults_to_standard_tables(self):
        sessions = [session_ago(24, exercise('ex3', working_sets(3)))]
        assert compute_recovery(sessions, [], NOW)['chest'].recovery_percent == 50


class TestRecoveryHelpers:

    def test_recovery_percent_rounds_half_up(self):
        assert recovery_percent(0.375) == 63
        assert recovery_percent(0) == 100
        assert recovery_percent(1) == 0

    def test_hours_remaining(self):
        assert hours_remaining(100, 72) == 0
        assert hours_remaining(50, 72) == 36
        assert hours_remaining(99, 48) == 1

    def test_status_thresholds(self):
        assert recovery_status(80) == RecoveryStatus.READY
        assert recovery_status(79) == RecoveryStatus.RECOVERING
        assert recovery_status(50) == RecoveryStatus.RECOVERING
        assert recovery_status(49) == RecoveryStatus.TIRED


class TestRecoveryViews:
    """Test the summary and training day readiness views."""

    def setup_method(self):
        self.config = default_config()
        sessions = [session_ago(24, exercise('ex3', working_sets(3)))]
        self.snapshots = compute_recovery(sessions, [], NOW, self.config)

    def test_summary_over_all_muscles(self):
        summary = summarize_recovery(self.snapshots)

        assert summary.average_recovery == 97  # (16 * 100 + 50) / 17
        assert summary.ready_count == len(ALL_MUSCLES) - 1
        assert summary.recovering_count == 1
        assert summary.tired_count == 0

    def test_summary_over_enabled_muscles(self):
        summary = summarize_recovery(self.snapshots, ['chest', 'biceps', 'not-a-muscle'])
        assert summary.average_recovery == 75
        assert summary.ready_count == 1

    def test_summary_with_nothing_enabled(self):
        summary = summarize_recovery(self.snapshots, [])
        assert summary.average_recovery == 100
        assert summary.ready_count == summary.recovering_count == summary.tired_count == 0

    def test_training_day_readiness(self):
        days = [TrainingDay(name='Push', exercise_ids=('ex1', 'ex3'), id='d1'),
                TrainingDay(name='Arms', exercise_ids=('ex23',))]

        push, arms = training_day_readiness(days, self.snapshots, self.config.catalog.muscle_involvement)

        assert push.id == 'd1'
        assert [m.muscle for m in push.muscles] == ['chest', 'triceps', 'shoulders']
        assert push.average_recovery == 83
        assert push.recovering_muscles == ['chest']
        assert push.ready_muscles == ['triceps', 'shoulders']
        assert arms.average_recovery == 100

    def test_readiness_respects_enabled_muscles(self):
        days = [TrainingDay(name='Push', exercise_ids=('ex1',))]

        (push,) = training_day_readiness(days, self.snapshots, self.config.catalog.muscle_involvement,
                                         enabled_muscles=['chest'])

        assert [m.muscle for m in push.muscles] == ['chest']
        assert push.average_recovery == 50

    def test_empty_training_day(self):
        days = [TrainingDay(name='Rest', exercise_ids=('unknown',))]
        (rest,) = training_day_readiness(days, self.snapshots, self.config.catalog.muscle_involvement)
        assert rest.muscles == ()
        assert rest.average_recovery == 100


class TestMisconfiguredTables:
    """A muscle without a base recovery time still reports time to go."""

    def setup_method(self):
        self.config = AnalyticsConfig(catalog=default_config().catalog, base_recovery_hours={'chest': 0})

    def test_zero_base_keeps_hours_consistent(self):
        sessions = [session_ago(10, exercise('ex3', working_sets(3)))]

        snapshots = compute_recovery(sessions, [], NOW, self.config)

        chest = snapshots['chest']
        assert chest.recovery_percent == 25
        assert chest.hours_remaining == 1
        for snapshot in snapshots.values():
            assert (snapshot.hours_remaining == 0) == (snapshot.recovery_percent == 100)

    def test_hours_remaining_floor(self):
        assert hours_remaining(25, 0) == 1
        assert hours_remaining(100, 0) == 0


class TestMixedTimezones:
    """Naive timestamps are read as UTC on either side of the comparison."""

    def test_naive_sessions_with_aware_now(self):
        naive_now = NOW.replace(tzinfo=None)
        sessions = [session_ago(24, exercise('ex3', working_sets(3)), now=naive_now)]

        chest = compute_recovery(sessions, [], NOW)['chest']

        assert chest.recovery_percent == 50
        assert chest.last_trained_time == NOW - timedelta(hours=24)

    def test_aware_sessions_with_naive_now(self):
        sessions = [session_ago(24, exercise('ex3', working_sets(3)))]
        assert compute_recovery(sessions, [], NOW.replace(tzinfo=None))['chest'].recovery_percent == 50

    def test_other_offsets_compare_by_instant(self):
        berlin = timezone(timedelta(hours=1))
        sessions = [session_ago(24, exercise('ex3', working_sets(3)), now=NOW.astimezone(berlin))]
        assert compute_recovery(sessions, [], NOW)['chest'].recovery_percent == 50

    def test_mixed_history(self):
        sessions = [
            session_ago(48, exercise('ex1', working_sets(3)), now=NOW.replace(tzinfo=None)),
            session_ago(24, exercise('ex3', working_sets(3))),
        ]
        chest = compute_recovery(sessions, [], NOW)['chest']
        assert chest.last_exercise_label == 'Dumbbell Flys'
