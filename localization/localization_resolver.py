"""Month/weekday names and calendar-picker date patterns for a locale."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple

from .locale_detector import LocaleDetector
from .platform_formatter import DatePart, PlatformFormatter

logger = logging.getLogger(__name__)

# Picker grammar: part type -> token
PATTERN_TOKENS = {
    "year": "Y",
    "month": "m",
    "day": "d",
}

# Hours, minutes, seconds in the picker's own format grammar
TIME_PATTERN_SUFFIX = "H:i:s"

REFERENCE_DATE = date(2000, 1, 1)

# 2000-01-03 was a Monday
FIRST_MONDAY = date(2000, 1, 3)


@dataclass(frozen=True)
class LocalizedNames:
    """Everything the calendar picker needs to render in one locale."""

    months: Tuple[str, ...]
    weekdays: Tuple[str, ...]
    date_pattern: str
    date_time_pattern: str

    def __post_init__(self):
        if len(self.months) != 12 or len(self.weekdays) != 7:
            raise ValueError(
                f"Expected 12 months and 7 weekdays, got "
                f"{len(self.months)} and {len(self.weekdays)}"
            )


class LocalizationResolver:
    """Maps a locale's own date formatting onto the picker's d/m/Y grammar."""

    def __init__(
        self,
        formatter: Optional[PlatformFormatter] = None,
        locale_detector: Optional[LocaleDetector] = None,
    ):
        self.formatter = formatter or PlatformFormatter()
        self.locale_detector = locale_detector or LocaleDetector()

    def _locale(self, locale_tag: Optional[str]) -> str:
        return locale_tag or self.locale_detector.detect_system_locale()

    @staticmethod
    def parts_to_pattern(parts) -> str:
        """Swap year/month/day parts for tokens, keep everything else verbatim."""
        tokens = []
        for part in parts:
            if isinstance(part, DatePart):
                part_type, value = part.type, part.value
            else:
                part_type, value = part
            tokens.append(PATTERN_TOKENS.get(part_type, value))
        return "".join(tokens)

    def resolve_pattern(self, locale_tag: Optional[str] = None) -> str:
        """Return the date pattern for a locale, e.g. "d/m/Y" for en_GB."""
        locale_tag = self._locale(locale_tag)
        parts = self.formatter.format_parts(locale_tag, REFERENCE_DATE)
        pattern = self.parts_to_pattern(parts)
        logger.debug("Date pattern for %s: %s", locale_tag, pattern)
        return pattern

    def resolve_date_time_pattern(self, locale_tag: Optional[str] = None) -> str:
        return f"{self.resolve_pattern(locale_tag)} {TIME_PATTERN_SUFFIX}"

    def resolve_names(self, locale_tag: Optional[str] = None) -> LocalizedNames:
        """
        Get local names of months and weekdays plus the format strings.

        Months are January-first and weekdays Monday-first whatever the
        locale's own first day of the week is.

        Args:
            locale_tag: Locale tag; the ambient locale when omitted.

        Returns:
            LocalizedNames: months, weekdays, date and date-time pattern.
        """
        locale_tag = self._locale(locale_tag)

        months = tuple(
            self.formatter.format_field(locale_tag, date(2000, month, 1), "LLLL")
            for month in range(1, 13)
        )
        weekdays = tuple(
            self.formatter.format_field(
                locale_tag, date(2000, 1, FIRST_MONDAY.day + offset), "cccc"
            )
            for offset in range(7)
        )

        date_pattern = self.resolve_pattern(locale_tag)
        return LocalizedNames(
            months=months,
            weekdays=weekdays,
            date_pattern=date_pattern,
            date_time_pattern=f"{date_pattern} {TIME_PATTERN_SUFFIX}",
        )


# Global instance
_resolver: Optional[LocalizationResolver] = None


def _default_resolver() -> LocalizationResolver:
    global _resolver
    if _resolver is None:
        _resolver = LocalizationResolver()
    return _resolver


def resolve_pattern(locale_tag: Optional[str] = None) -> str:
    """Global function to get a date pattern."""
    return _default_resolver().resolve_pattern(locale_tag)


def resolve_date_time_pattern(locale_tag: Optional[str] = None) -> str:
    """Global function to get a date-time pattern."""
    return _default_resolver().resolve_date_time_pattern(locale_tag)


def resolve_names(locale_tag: Optional[str] = None) -> LocalizedNames:
    """Global function to get localized names and patterns."""
    return _default_resolver().resolve_names(locale_tag)
