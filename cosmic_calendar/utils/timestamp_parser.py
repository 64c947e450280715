"""
Timestamp Parser Utility for the Cosmic Calendar
================================================

Parses the textual dates found in event data files into Python datetime
objects. All calendar dates are timezone-naive; an explicit offset in the
source text is converted to UTC and then dropped.

Supported Formats:
- ISO 8601 strings (with or without time, fractional seconds or offset)
- "YYYY-MM-DD HH:MM:SS" strings
- Python datetime objects
"""

import datetime
import logging
from typing import Optional, Union

# Configure logger
logger = logging.getLogger(__name__)


class TimestampParser:
    """
    Unified date parser for event records.

    Every method is static; the class only groups the parsing rules.
    """

    STRING_FORMATS = [
        "%Y-%m-%dT%H:%M:%S.%fZ",      # 2024-12-31T23:58:00.000Z
        "%Y-%m-%dT%H:%M:%SZ",          # 2024-12-31T23:58:00Z
        "%Y-%m-%dT%H:%M:%S.%f",        # 2024-12-31T23:58:00.000
        "%Y-%m-%dT%H:%M:%S",           # 2024-12-31T23:58:00
        "%Y-%m-%dT%H:%M",              # 2024-12-31T23:58
        "%Y-%m-%d %H:%M:%S.%f",        # 2024-12-31 23:58:00.000
        "%Y-%m-%d %H:%M:%S",           # 2024-12-31 23:58:00
        "%Y-%m-%d %H:%M",              # 2024-12-31 23:58
        "%Y-%m-%d",                    # 2024-12-31
    ]

    @staticmethod
    def parse_timestamp(timestamp: Union[str, datetime.datetime, None]) -> Optional[datetime.datetime]:
        """
        Parse a date from text or a datetime and return a naive datetime.

        Args:
            timestamp: Date as a string, a datetime, or None

        Returns:
            datetime.datetime: Parsed date, or None if it cannot be parsed

        Examples:
            >>> TimestampParser.parse_timestamp("2024-12-31T23:58:00")
            datetime.datetime(2024, 12, 31, 23, 58)

            >>> TimestampParser.parse_timestamp("2024-01-01")
            datetime.datetime(2024, 1, 1, 0, 0)
        """
        if timestamp is None:
            return None

        if isinstance(timestamp, datetime.datetime):
            return TimestampParser._to_naive(timestamp)

        if isinstance(timestamp, str):
            if not timestamp.strip():
                return None
            return TimestampParser._parse_string_timestamp(timestamp)

        logger.debug(f"Unsupported timestamp type: {type(timestamp).__name__}")
        return None

    @staticmethod
    def _parse_string_timestamp(timestamp_str: str) -> Optional[datetime.datetime]:
        timestamp_str = timestamp_str.strip()

        # fromisoformat covers most ISO 8601 variants, including offsets
        try:
            dt = datetime.datetime.fromisoformat(timestamp_str.replace('Z', '+00:00'))
            return TimestampParser._to_naive(dt)
        except ValueError:
            pass

        for fmt in TimestampParser.STRING_FORMATS:
            try:
                return datetime.datetime.strptime(timestamp_str, fmt)
            except ValueError:
                continue

        logger.debug(f"Failed to parse string timestamp: {timestamp_str}")
        return None

    @staticmethod
    def _to_naive(dt: datetime.datetime) -> datetime.datetime:
        """
        Drop timezone information, converting to UTC first when present.

        Args:
            dt: Datetime object

        Returns:
            datetime.datetime: Timezone-naive datetime
        """
        if dt.tzinfo is None:
            return dt
        return dt.astimezone(datetime.timezone.utc).replace(tzinfo=None)
