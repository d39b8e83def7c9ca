"""Tests for the development data generator."""

import random
from datetime import datetime, timedelta, timezone

from sqlalchemy import text

from seed_test_data import generate_sleep_log, generate_workouts

PLUS_FIVE = timezone(timedelta(hours=5))

# Thursday 22:00 in UTC+5 is 17:00 UTC, before the 18:00 training slot
THURSDAY_EVENING = datetime(2024, 3, 14, 22, 0, tzinfo=PLUS_FIVE)
# 01:00 on the 13th in UTC+5 is still the evening of the 12th in UTC
AFTER_MIDNIGHT = datetime(2024, 3, 13, 1, 0, tzinfo=PLUS_FIVE)


class TestSeedData:

    def setup_method(self):
        random.seed(7)

    def test_workouts_written_in_utc(self, db_engine):
        workouts, sets = generate_workouts(db_engine, num_weeks=2, now=THURSDAY_EVENING)

        with db_engine.connect() as conn:
            latest = conn.execute(text("SELECT MAX(start_time) FROM workouts")).scalar()
            stored_sets = conn.execute(text("SELECT COUNT(*) FROM workout_sets")).scalar()

        assert workouts > 0
        assert stored_sets == sets
        assert str(latest) <= "2024-03-14 17:00:00"

    def test_sleep_log_ends_on_utc_date(self, db_engine):
        nights = generate_sleep_log(db_engine, num_weeks=1, now=AFTER_MIDNIGHT)

        with db_engine.connect() as conn:
            last_night = conn.execute(text("SELECT MAX(sleep_date) FROM sleep_log")).scalar()

        assert str(last_night) == '2024-03-12'
        assert nights == 8
