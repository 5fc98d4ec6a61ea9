"""Interval classification for tomorrow.io timelines.

The timelines API does not tag an interval as "current" or "daily"; the kind
is implied by which fields are populated. Daily summaries carry both
``temperatureMax`` and ``temperatureMin``, current samples only carry the
instantaneous ``temperature``.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Iterable, List, Optional

from agro_weather.weather.models import RawInterval

logger = logging.getLogger(__name__)

TEMPERATURE = "temperature"
TEMPERATURE_MAX = "temperatureMax"
TEMPERATURE_MIN = "temperatureMin"


class IntervalKind(str, Enum):
    """Kind of record an interval represents."""
    CURRENT = "current"
    DAILY = "daily"
    UNCLASSIFIED = "unclassified"


@dataclass
class Classification:
    """Intervals sorted by kind."""
    current_candidate: Optional[RawInterval] = None
    daily_candidates: List[RawInterval] = field(default_factory=list)


def _has(interval: RawInterval, name: str) -> bool:
    return interval.values.get(name) is not None


def classify_interval(interval: RawInterval) -> IntervalKind:
    """Decide which kind of record an interval represents.

    An interval with both a maximum and a minimum temperature is a daily
    summary even if it also carries an instantaneous temperature.

    Args:
        interval: Upstream interval

    Returns:
        IntervalKind for the interval
    """
    if _has(interval, TEMPERATURE_MAX) and _has(interval, TEMPERATURE_MIN):
        return IntervalKind.DAILY
    if _has(interval, TEMPERATURE):
        return IntervalKind.CURRENT
    return IntervalKind.UNCLASSIFIED


def pick_current(candidates: List[RawInterval], now: datetime) -> Optional[RawInterval]:
    """Pick the current-conditions interval among candidates.

    Prefers the latest interval starting at or before ``now``. When every
    candidate lies in the future the first one in returned order wins.

    Args:
        candidates: Current candidates in upstream order
        now: Reference instant (timezone-aware)

    Returns:
        Chosen interval, or None if there are no candidates
    """
    if not candidates:
        return None

    past = [interval for interval in candidates if interval.start_time <= now]
    if past:
        # max() keeps the first of equal start times
        return max(past, key=lambda interval: interval.start_time)

    logger.debug("No current candidate precedes now, using first in returned order")
    return candidates[0]


def classify(intervals: Iterable[RawInterval], now: datetime) -> Classification:
    """Split upstream intervals into a current candidate and daily candidates.

    Args:
        intervals: Upstream intervals in any order
        now: Reference instant used for the current tie-break

    Returns:
        Classification with at most one current candidate
    """
    current_candidates = []
    daily_candidates = []
    unclassified = 0

    for interval in intervals:
        kind = classify_interval(interval)
        if kind is IntervalKind.DAILY:
            daily_candidates.append(interval)
        elif kind is IntervalKind.CURRENT:
            current_candidates.append(interval)
        else:
            unclassified += 1

    if unclassified:
        logger.debug(f"Ignoring {unclassified} intervals without temperature fields")

    return Classification(
        current_candidate=pick_current(current_candidates, now),
        daily_candidates=daily_candidates
    )
