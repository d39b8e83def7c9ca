"""
Sleep Recovery Modifier
Scales recovery speed by recent sleep

Quality 1 maps to 0.7x, quality 5 to 1.2x; short or long nights adjust
that further. Values above 1 mean faster recovery.
"""

import logging
from datetime import datetime, time, timedelta
from typing import Iterable, List

from .models import SleepEntry
from .numeric import clamp

logger = logging.getLogger(__name__)

SLEEP_WINDOW_DAYS = 3
NEUTRAL_MULTIPLIER = 1.0
MIN_MULTIPLIER = 0.6
MAX_MULTIPLIER = 1.3


def recent_sleep(entries: Iterable[SleepEntry], now: datetime,
                 days: int = SLEEP_WINDOW_DAYS) -> List[SleepEntry]:
    """Entries whose night (taken at midnight) lies within the window"""
    cutoff = now - timedelta(days=days)
    return [
        e for e in entries
        if datetime.combine(e.date, time.min, tzinfo=now.tzinfo) >= cutoff
    ]


def sleep_recovery_multiplier(entries: Iterable[SleepEntry], now: datetime) -> float:
    """
    Derive the recovery speed multiplier from the last three days of sleep.

    Returns:
        Value in [0.6, 1.3]; 1.0 when there is no recent sleep data
    """
    recent = recent_sleep(entries, now)
    if not recent:
        return NEUTRAL_MULTIPLIER

    avg_quality = sum(e.quality for e in recent) / len(recent)
    avg_hours = sum(e.hours_slept for e in recent) / len(recent)

    multiplier = 0.7 + (avg_quality - 1) * 0.125

    if avg_hours < 6:
        multiplier *= 0.85
    elif avg_hours < 7:
        multiplier *= 0.95
    elif avg_hours > 9:
        multiplier *= 1.05

    multiplier = clamp(multiplier, MIN_MULTIPLIER, MAX_MULTIPLIER)
    logger.debug("Sleep multiplier %.3f from %d nights (quality %.2f, %.2fh)",
                 multiplier, len(recent), avg_quality, avg_hours)
    return multiplier
