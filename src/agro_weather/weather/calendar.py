"""Calendar alignment of daily forecast records."""

import logging
from datetime import date, timedelta
from typing import Dict, Iterable, List

from agro_weather.weather.models import DailyForecast
from agro_weather.weather.sentinels import sentinel_daily

logger = logging.getLogger(__name__)


def forecast_dates(today: date, days: int) -> List[date]:
    """Return ``days`` consecutive dates starting at ``today``."""
    return [today + timedelta(days=offset) for offset in range(days)]


def align(records: Iterable[DailyForecast], today: date, days: int) -> List[DailyForecast]:
    """Align daily records onto consecutive calendar days starting today.

    Records dated before today or after the window are dropped, duplicate
    dates keep the first record after sorting, and missing days are padded
    with sentinel records.

    Args:
        records: Mapped daily records in any order
        today: First date of the window
        days: Window length

    Returns:
        Exactly ``days`` records, ``result[i].date == today + i``
    """
    by_date: Dict[str, DailyForecast] = {}
    for record in sorted(records, key=lambda record: record.date):
        by_date.setdefault(record.date, record)

    aligned = []
    missing = []
    for target in forecast_dates(today, days):
        record = by_date.get(target.isoformat())
        if record is None:
            missing.append(target.isoformat())
            record = sentinel_daily(target)
        aligned.append(record)

    if missing:
        logger.warning(f"Padding forecast: no upstream data for {', '.join(missing)}")

    return aligned
