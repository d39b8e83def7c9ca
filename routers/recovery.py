"""
Recovery Router
API endpoints for per-muscle recovery and training-day readiness
"""

import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from config import Config
from database import get_db
from services import (
    compute_recovery,
    sleep_recovery_multiplier,
    summarize_recovery,
    training_day_readiness,
)
from services.models import SleepEntry, TrainingDay, WorkoutSession

from .common import analytics_config, database_errors, resolve_now
from .queries import load_sessions, load_sleep_entries
from .schemas import RecoveryRequest, readiness_to_dict, snapshot_to_dict, summary_to_dict

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/recovery", tags=["Recovery"])


def build_recovery_response(sessions: List[WorkoutSession],
                            sleep_entries: List[SleepEntry],
                            now: datetime,
                            enabled_muscles: Optional[List[str]] = None,
                            training_days: Optional[List[TrainingDay]] = None):
    config = analytics_config()
    snapshots = compute_recovery(sessions, sleep_entries, now, config)

    shown = enabled_muscles if enabled_muscles is not None else list(config.tracked_muscles)
    readiness = training_day_readiness(training_days or [], snapshots,
                                       config.catalog.muscle_involvement, enabled_muscles)

    return {
        "now": now.isoformat(),
        "sleep_multiplier": round(sleep_recovery_multiplier(sleep_entries, now), 3),
        "muscles": [snapshot_to_dict(snapshots[m]) for m in shown if m in snapshots],
        "summary": summary_to_dict(summarize_recovery(snapshots, enabled_muscles)),
        "training_days": [readiness_to_dict(r) for r in readiness],
    }


@router.post("")
async def calculate_recovery(request: RecoveryRequest):
    """
    Calculate muscle recovery from a snapshot of workouts and sleep.

    Returns for every muscle:
    - Recovery percentage (0-100)
    - Hours until fully recovered
    - When it was last trained, and with which exercise

    Plus an overall summary and readiness for any training days sent along.
    """
    now = resolve_now(request.now)
    return build_recovery_response(
        request.domain_sessions(),
        [s.to_domain() for s in request.sleep_entries],
        now,
        enabled_muscles=request.enabled_muscles,
        training_days=[d.to_domain() for d in request.training_days],
    )


@router.get("")
async def get_recovery(
    muscles: Optional[List[str]] = Query(default=None, description="Only report these muscles"),
    db: Session = Depends(get_db)
):
    """
    Current muscle recovery from the logged workouts and sleep.

    - **muscles**: Muscles to display (all tracked muscles when omitted)
    """
    now = resolve_now()
    with database_errors():
        sessions = load_sessions(db, now, days=Config.ANALYTICS_LOOKBACK_DAYS)
        sleep_entries = load_sleep_entries(db, now, days=Config.ANALYTICS_LOOKBACK_DAYS)

    logger.info("Recovery requested over %d sessions, %d sleep entries", len(sessions), len(sleep_entries))
    return build_recovery_response(sessions, sleep_entries, now, enabled_muscles=muscles)
