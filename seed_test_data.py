"""
Test Data Generator for the Recovery Analytics
Populates the database with realistic sample workouts and sleep

Run with: python seed_test_data.py
"""

import random
import sys
from datetime import datetime, timedelta, timezone

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from database import create_tables, engine

# Push/Pull/Legs split using the built-in exercise catalog ids
WORKOUT_SPLIT = {
    0: ('Push Day', ['ex1', 'ex2', 'ex16', 'ex17', 'ex29']),   # Monday
    1: ('Pull Day', ['ex8', 'ex10', 'ex13', 'ex21', 'ex23']),  # Tuesday
    3: ('Leg Day', ['ex33', 'ex40', 'ex36', 'ex39', 'ex42', 'ex44']),  # Thursday
    4: ('Push Day', ['ex1', 'ex6', 'ex20', 'ex28']),           # Friday
    5: ('Pull Day', ['ex9', 'ex11', 'ex19', 'ex24']),          # Saturday
}

# Starting working weights (will progressively increase)
STARTING_WEIGHTS = {
    'ex1': 60, 'ex2': 50, 'ex6': 10, 'ex8': 5, 'ex9': 55, 'ex10': 60,
    'ex11': 26, 'ex13': 50, 'ex16': 40, 'ex17': 10, 'ex19': 8, 'ex20': 16,
    'ex21': 20, 'ex23': 12, 'ex24': 14, 'ex28': 25, 'ex29': 25, 'ex33': 80,
    'ex36': 45, 'ex39': 35, 'ex40': 70, 'ex42': 60, 'ex44': 10,
}


def _utc_wall_clock(now: datetime = None) -> datetime:
    """Naive UTC time; the analytics read naive timestamps as UTC"""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc).replace(tzinfo=None)
    return now


def clear_existing_data(bind: Engine):
    """Clear existing workout and sleep data"""
    with bind.begin() as conn:
        print("Clearing existing workout data...")
        conn.execute(text("DELETE FROM workout_sets"))
        conn.execute(text("DELETE FROM workouts"))
        conn.execute(text("DELETE FROM sleep_log"))
    print("✓ Existing data cleared")


def generate_workouts(bind: Engine, num_weeks: int = 4, now: datetime = None):
    """
    Generate workout data over a period of weeks.

    Simulates a Push/Pull/Legs split with progressive overload, a warm-up
    set per exercise and RIR dropping towards the last set.
    """
    now = _utc_wall_clock(now)
    current_weights = dict(STARTING_WEIGHTS)
    current_date = (now - timedelta(weeks=num_weeks)).replace(hour=18, minute=0, second=0, microsecond=0)

    workouts_created = 0
    sets_created = 0

    with bind.begin() as conn:
        while current_date <= now:
            day_of_week = current_date.weekday()

            # Random chance to skip a workout (life happens)
            if day_of_week in WORKOUT_SPLIT and random.random() >= 0.1:
                workout_name, exercise_ids = WORKOUT_SPLIT[day_of_week]
                workouts_created += 1
                workout_id = workouts_created
                duration = timedelta(minutes=random.randint(50, 80))

                conn.execute(text("""
                    INSERT INTO workouts (id, name, start_time, end_time)
                    VALUES (:id, :name, :start_time, :end_time)
                """), {
                    "id": workout_id,
                    "name": workout_name,
                    "start_time": current_date.strftime('%Y-%m-%d %H:%M:%S'),
                    "end_time": (current_date + duration).strftime('%Y-%m-%d %H:%M:%S'),
                })

                for exercise_id in exercise_ids:
                    base_weight = current_weights[exercise_id]
                    num_sets = random.randint(3, 4)

                    for set_number in range(0, num_sets + 1):
                        is_warmup = set_number == 0
                        if is_warmup:
                            weight = base_weight * 0.5
                            reps = random.randint(10, 12)
                            rir = None
                        else:
                            weight = base_weight * random.uniform(0.95, 1.05)
                            reps = random.randint(6, 12)
                            rir = max(0, 3 - set_number + random.choice([0, 1]))

                        sets_created += 1
                        conn.execute(text("""
                            INSERT INTO workout_sets
                            (id, workout_id, exercise_id, set_number, weight, reps, rir,
                             completed, is_warmup, is_assisted)
                            VALUES (:id, :workout_id, :exercise_id, :set_number, :weight, :reps, :rir,
                                    :completed, :is_warmup, :is_assisted)
                        """), {
                            "id": sets_created,
                            "workout_id": workout_id,
                            "exercise_id": exercise_id,
                            "set_number": set_number,
                            "weight": round(weight, 1),
                            "reps": reps,
                            "rir": rir,
                            "completed": random.random() > 0.05,
                            "is_warmup": is_warmup,
                            "is_assisted": False,
                        })

            # Progressive overload: increase weights slightly each week
            if day_of_week == 5:
                for exercise_id in current_weights:
                    current_weights[exercise_id] = round(current_weights[exercise_id] * random.uniform(1.01, 1.025), 1)

            current_date += timedelta(days=1)

    return workouts_created, sets_created


def generate_sleep_log(bind: Engine, num_weeks: int = 4, now: datetime = None):
    """One night per day, most of them decent"""
    now = _utc_wall_clock(now)
    current_date = (now - timedelta(weeks=num_weeks)).date()

    entries = 0
    with bind.begin() as conn:
        while current_date <= now.date():
            hours = round(random.uniform(5.5, 9.0), 1)
            quality = min(5, max(1, int(round(hours - 3 + random.uniform(-1, 1)))))
            conn.execute(text("""
                INSERT INTO sleep_log (sleep_date, hours_slept, quality)
                VALUES (:sleep_date, :hours_slept, :quality)
            """), {"sleep_date": current_date.isoformat(), "hours_slept": hours, "quality": quality})
            entries += 1
            current_date += timedelta(days=1)

    return entries


def main():
    print("\n🏋️ Recovery Analytics - Test Data Generator")
    print("="*50)

    try:
        create_tables(engine)
        print("✓ Connected to database")
    except SQLAlchemyError as e:
        print(f"❌ Database connection failed: {e}")
        sys.exit(1)

    # Ask for confirmation
    print("\n⚠️  This will DELETE existing workout and sleep data and create new test data.")
    response = input("Continue? (y/n): ").strip().lower()

    if response != 'y':
        print("Cancelled.")
        sys.exit(0)

    try:
        clear_existing_data(engine)

        print("\nGenerating 4 weeks of workout data...")
        workouts, sets = generate_workouts(engine, num_weeks=4)
        print(f"✓ Created {workouts} workouts with {sets} sets")

        print("Generating sleep log...")
        nights = generate_sleep_log(engine, num_weeks=4)
        print(f"✓ Created {nights} sleep entries")
    except SQLAlchemyError as e:
        print(f"\n❌ Error: {e}")
        sys.exit(1)

    print("\n✅ Test data generated successfully!")
    print("\nYou can now test:")
    print("  • http://localhost:8000/docs (Swagger UI)")
    print("  • http://localhost:8000/recovery")
    print("  • http://localhost:8000/volume/weekly")
    print("  • http://localhost:8000/balance?time_range=month")


if __name__ == "__main__":
    main()
