"""
Database Configuration
Handles the read-only connection to the tracker database using SQLAlchemy
"""

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from config import Config

# Tables the analytics read; created only for local development and tests,
# production reads the tracker's own schema
SCHEMA_STATEMENTS = [
    """
    CREATE TABLE IF NOT EXISTS workouts (
        id INTEGER PRIMARY KEY,
        name VARCHAR(100),
        start_time TIMESTAMP NOT NULL,
        end_time TIMESTAMP
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS workout_sets (
        id INTEGER PRIMARY KEY,
        workout_id INTEGER NOT NULL REFERENCES workouts(id),
        exercise_id VARCHAR(50) NOT NULL,
        set_number INTEGER NOT NULL,
        weight NUMERIC(6, 1),
        reps INTEGER,
        rir NUMERIC(3, 1),
        completed BOOLEAN DEFAULT TRUE,
        is_warmup BOOLEAN DEFAULT FALSE,
        is_assisted BOOLEAN DEFAULT FALSE
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS sleep_log (
        sleep_date DATE PRIMARY KEY,
        hours_slept NUMERIC(4, 1) NOT NULL,
        quality INTEGER NOT NULL
    )
    """,
]


def build_engine(url: str) -> Engine:
    """
    Create the SQLAlchemy engine.

    - pool_pre_ping: Tests connections before using them
    - pool_size / max_overflow: only for server databases, SQLite ignores pooling
    """
    if url.startswith("sqlite"):
        # In-memory databases live per connection; share a single one
        if url in ("sqlite://", "sqlite:///:memory:"):
            return create_engine(url, connect_args={"check_same_thread": False}, poolclass=StaticPool)
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(url, pool_pre_ping=True, pool_size=5, max_overflow=10)


def create_tables(bind: Engine) -> None:
    with bind.begin() as conn:
        for statement in SCHEMA_STATEMENTS:
            conn.execute(text(statement))


engine = build_engine(Config.DATABASE_URL)

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """
    Dependency that provides a database session.
    Use with FastAPI's Depends() for automatic cleanup.

    Usage:
        @app.get("/items")
        def get_items(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
