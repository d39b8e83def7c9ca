"""
Balance Router
API endpoints for the muscle balance score
"""

import logging
from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from database import get_db
from services import compute_balance_score, filter_sessions_by_range
from services.balance import TIME_RANGES
from services.models import WorkoutSession

from .common import analytics_config, database_errors, resolve_now
from .queries import load_sessions
from .schemas import BalanceRequest, balance_to_dict

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/balance", tags=["Balance"])

# Lookback for time_range=all when reading from the database
ALL_TIME_DAYS = 3650


def build_balance_response(sessions: List[WorkoutSession], time_range: str, now: datetime):
    try:
        selected = filter_sessions_by_range(sessions, time_range, now)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    report = compute_balance_score(selected, analytics_config())
    response = balance_to_dict(report, time_range)
    response["workouts_analyzed"] = len(selected)
    return response


@router.post("")
async def calculate_balance(request: BalanceRequest):
    """
    Score how evenly training is spread across body regions.

    Each exercise counts only for its main target muscle. Returns a score
    from 0-100, or null when no workouts were sent.
    """
    now = resolve_now(request.now)
    return build_balance_response(request.domain_sessions(), request.time_range, now)


@router.get("")
async def get_balance(
    time_range: str = Query(default="month", description=f"One of {', '.join(TIME_RANGES)}"),
    db: Session = Depends(get_db)
):
    """
    Muscle balance over the logged workouts.

    - **time_range**: week (this calendar week), month (this calendar month) or all
    """
    if time_range not in TIME_RANGES:
        raise HTTPException(status_code=400, detail=f"time_range must be one of {', '.join(TIME_RANGES)}")

    now = resolve_now()
    days = ALL_TIME_DAYS if time_range == "all" else 31
    with database_errors():
        sessions = load_sessions(db, now, days=days)

    logger.info("Balance requested over %d sessions (%s)", len(sessions), time_range)
    return build_balance_response(sessions, time_range, now)
