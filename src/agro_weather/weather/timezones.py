"""Reference time zone resolution."""

import logging
import zoneinfo
from functools import lru_cache

from timezonefinder import TimezoneFinder

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def load_zone(timezone_str: str) -> zoneinfo.ZoneInfo:
    """Load an IANA time zone, falling back to UTC for unknown names."""
    try:
        return zoneinfo.ZoneInfo(timezone_str)
    except (zoneinfo.ZoneInfoNotFoundError, ValueError) as e:
        logger.warning(f"Unknown time zone '{timezone_str}', using UTC: {e}")
        return zoneinfo.ZoneInfo("UTC")


class TimezoneResolver:
    """Finds the local time zone of a coordinate."""

    def __init__(self):
        self.tf = TimezoneFinder()
        logger.info("TimezoneResolver initialized with timezonefinder")

    def get_timezone(self, lat: float, lon: float) -> str:
        """Get timezone for coordinates.

        Args:
            lat: Latitude
            lon: Longitude

        Returns:
            Timezone string (e.g., "Asia/Kolkata") or "UTC" if not found
        """
        try:
            timezone = self.tf.timezone_at(lng=lon, lat=lat)
        except Exception as e:
            logger.error(f"Error getting timezone for ({lat}, {lon}): {e}")
            return "UTC"

        if timezone:
            logger.debug(f"Found timezone '{timezone}' for ({lat}, {lon})")
            return timezone

        logger.warning(f"No timezone found for ({lat}, {lon}), defaulting to UTC")
        return "UTC"
