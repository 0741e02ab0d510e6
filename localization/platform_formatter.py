"""Locale-aware formatting primitives backed by Babel's CLDR data.

Everything the resolver and the offset codec need from "the platform" goes
through `PlatformFormatter`, so tests can hand in a fake with the same three
methods instead of relying on real locale data or the machine's timezone.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo
from typing import List, Optional, Union

import pytz
import tzlocal
from babel import Locale, UnknownLocaleError
from babel.dates import DateTimeFormat, match_skeleton, tokenize_pattern

from .locale_detector import LocaleDetector

logger = logging.getLogger(__name__)

# CLDR field letters -> part types
_PART_TYPES = {
    "G": "era",
    "y": "year",
    "Y": "year",
    "u": "year",
    "M": "month",
    "L": "month",
    "d": "day",
    "E": "weekday",
    "c": "weekday",
    "e": "weekday",
}

# Numeric year, 2-digit month, 2-digit day
NUMERIC_DATE_SKELETON = "yMMdd"


@dataclass(frozen=True)
class DatePart:
    """One typed chunk of a formatted date, e.g. ("month", "06")."""

    type: str
    value: str


class PlatformFormatter:
    """Default formatter: Babel for locale data, pytz/tzlocal for zones."""

    DEFAULT_LOCALE = LocaleDetector.DEFAULT_LOCALE

    def __init__(self, default_locale: Optional[str] = None):
        self.locale_detector = LocaleDetector()
        self.default_locale = default_locale or self.DEFAULT_LOCALE

    # ----------------------------------------------------------------------
    # Locale lookup
    # ----------------------------------------------------------------------
    def resolve_locale(self, locale_tag: Optional[str]) -> Locale:
        """Return a Babel locale, falling back to the default one."""
        tag = self.locale_detector.normalize_locale(locale_tag or self.default_locale)
        try:
            return Locale.parse(tag)
        except (UnknownLocaleError, ValueError) as exc:
            logger.debug(
                "Locale %r unavailable (%s), using %s", locale_tag, exc, self.default_locale
            )
            return Locale.parse(self.default_locale)

    def _pattern_for_skeleton(self, locale: Locale, skeleton: str) -> str:
        skeletons = locale.datetime_skeletons
        key = skeleton if skeleton in skeletons else match_skeleton(skeleton, skeletons)
        if key is None:
            found = locale.date_formats["short"]
        else:
            found = skeletons[key]
        # CLDR data holds DateTimePattern objects
        return getattr(found, "pattern", found)

    # ----------------------------------------------------------------------
    # Formatting
    # ----------------------------------------------------------------------
    def format_parts(
        self,
        locale_tag: Optional[str],
        value: Union[date, datetime],
        skeleton: str = NUMERIC_DATE_SKELETON,
    ) -> List[DatePart]:
        """Format `value` for the locale and return the typed parts in order.

        CLDR skeleton matching only picks the closest available pattern, so
        numeric month and day fields are widened to two digits and the year
        to its full numeric form afterwards.
        """
        locale = self.resolve_locale(locale_tag)
        pattern = self._pattern_for_skeleton(locale, skeleton)
        formatter = DateTimeFormat(value, locale)

        parts: List[DatePart] = []
        for kind, token in tokenize_pattern(pattern):
            if kind == "chars":
                parts.append(DatePart("literal", token))
                continue

            char, width = token
            if char in ("M", "L", "d") and width <= 2:
                width = 2
            elif char in ("y", "Y", "u"):
                width = 1

            part_type = _PART_TYPES.get(char, "literal")
            parts.append(DatePart(part_type, formatter[char * width]))

        return parts

    def format_field(
        self, locale_tag: Optional[str], value: Union[date, datetime], field: str
    ) -> str:
        """Format a single CLDR field, e.g. "LLLL" or "cccc"."""
        locale = self.resolve_locale(locale_tag)
        return DateTimeFormat(value, locale)[field]

    # ----------------------------------------------------------------------
    # Timezones
    # ----------------------------------------------------------------------
    def timezone_offset_minutes(
        self, instant: datetime, tz: Optional[Union[str, tzinfo]] = None
    ) -> int:
        """Minutes between UTC and local time at `instant`.

        Positive when the zone is behind UTC (UTC-5 gives 300).
        """
        zone = self._resolve_zone(tz)

        if instant.tzinfo is None:
            if hasattr(zone, "localize"):
                aware = zone.localize(instant)
            else:
                aware = instant.replace(tzinfo=zone)
        else:
            aware = instant.astimezone(zone)

        offset = aware.utcoffset() or timedelta(0)
        return -int(offset.total_seconds() // 60)

    @staticmethod
    def _resolve_zone(tz: Optional[Union[str, tzinfo]]) -> tzinfo:
        if tz is None:
            return tzlocal.get_localzone()
        if isinstance(tz, str):
            return pytz.timezone(tz)
        return tz
