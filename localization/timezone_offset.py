"""Timezone tagging for time strings coming out of the calendar picker.

The picker emits local wall-clock strings such as "2024-06-15 10:30:00".
Anything that later parses them as UTC can land on the wrong day, so the
string gets a " GMT+HHMM" suffix describing the zone it was picked in.
"""

from __future__ import annotations

from datetime import tzinfo
from typing import Any, Optional, Union

from dateutil import parser as date_parser

from .platform_formatter import PlatformFormatter

OFFSET_MARKER = "GMT"


class TimezoneOffsetCodec:
    """Appends a GMT offset to a time string, exactly once."""

    def __init__(
        self,
        formatter: Optional[PlatformFormatter] = None,
        tz: Optional[Union[str, tzinfo]] = None,
    ):
        self.formatter = formatter or PlatformFormatter()
        # None means the machine's zone, looked up on every call
        self.tz = tz

    @staticmethod
    def format_offset(offset_minutes: int) -> str:
        """Build the "GMT-0500" tag from a UTC-minus-local offset (300)."""
        sign = "+" if offset_minutes < 0 else "-"
        hours, minutes = divmod(abs(offset_minutes), 60)
        return f"{OFFSET_MARKER}{sign}{hours:02d}{minutes:02d}"

    def tag_with_offset(self, time_string: Any) -> Any:
        """
        Add timezone offset to a time string from the picker.

        Args:
            time_string: Time string from the picker.

        Returns:
            Time string with timezone offset, or the input unchanged when it
            is not a string, already tagged or not a date.
        """
        if not isinstance(time_string, str) or OFFSET_MARKER in time_string:
            return time_string  # No string we can work with

        try:
            parsed = date_parser.parse(time_string)
            # Converting an explicit offset can leave datetime's range
            offset = self.formatter.timezone_offset_minutes(parsed, self.tz)
        except (ValueError, OverflowError):
            return time_string  # No string we can work with

        return f"{time_string} {self.format_offset(offset)}"


# Global instance
_codec: Optional[TimezoneOffsetCodec] = None


def tag_with_offset(time_string: Any, tz: Optional[Union[str, tzinfo]] = None) -> Any:
    """Global function to tag a time string with the local offset."""
    global _codec
    if tz is not None:
        return TimezoneOffsetCodec(tz=tz).tag_with_offset(time_string)
    if _codec is None:
        _codec = TimezoneOffsetCodec()
    return _codec.tag_with_offset(time_string)
