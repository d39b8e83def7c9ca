"""
Shared Router Helpers
Configuration, clock and database error handling for the endpoints
"""

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from functools import lru_cache
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError

from config import Config
from services import AnalyticsConfig, default_config

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def analytics_config() -> AnalyticsConfig:
    """Static tables, built once per process"""
    return default_config(secondary_recovery_multiplier=Config.SECONDARY_RECOVERY_MULTIPLIER)


def resolve_now(now: Optional[datetime] = None) -> datetime:
    """The request's reference time, or the current UTC time"""
    return now or datetime.now(timezone.utc)


@contextmanager
def database_errors():
    """Report an unreachable or broken tracker database as 503"""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error("Tracker database query failed: %s", exc)
        raise HTTPException(status_code=503, detail="Workout database unavailable") from exc
