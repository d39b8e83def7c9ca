"""
Volume Router
API endpoints for weekly training volume against volume landmarks
"""

import logging
from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_db
from services import compute_weekly_volume, prioritize_volume, week_bounds
from services.models import VolumeStatus, WorkoutSession

from .common import analytics_config, database_errors, resolve_now
from .queries import load_sessions
from .schemas import SnapshotRequest, volume_to_dict

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/volume", tags=["Volume"])

# Two calendar weeks, plus slack for a Sunday "now"
VOLUME_LOOKBACK_DAYS = 15


def build_volume_response(sessions: List[WorkoutSession], now: datetime):
    records = compute_weekly_volume(sessions, now, analytics_config())
    ordered = prioritize_volume(records)
    week_start, _ = week_bounds(now)

    return {
        "now": now.isoformat(),
        "week_start": week_start.isoformat(),
        "muscles": [volume_to_dict(r) for r in ordered],
        "summary": {
            "under": len([r for r in ordered if r.status == VolumeStatus.UNDER]),
            "optimal": len([r for r in ordered if r.status == VolumeStatus.OPTIMAL]),
            "over": len([r for r in ordered if r.status == VolumeStatus.OVER]),
        },
    }


@router.post("/weekly")
async def calculate_weekly_volume(request: SnapshotRequest):
    """
    Classify this week's training volume per muscle.

    Effective sets count primary sets fully and secondary sets at half
    weight; warm-up sets are not counted. Muscles are listed undertrained
    first, then overtrained, then on target.
    """
    now = resolve_now(request.now)
    return build_volume_response(request.domain_sessions(), now)


@router.get("/weekly")
async def get_weekly_volume(db: Session = Depends(get_db)):
    """This week's volume per muscle from the logged workouts"""
    now = resolve_now()
    with database_errors():
        sessions = load_sessions(db, now, days=VOLUME_LOOKBACK_DAYS)

    logger.info("Weekly volume requested over %d sessions", len(sessions))
    return build_volume_response(sessions, now)
