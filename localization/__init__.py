"""Localization package for the date-time field.

Locale-aware date patterns and month/weekday names for the calendar
picker, timezone tagging of picked time strings, and translated picker
labels.
"""

from .i18n_manager import LocalizationManager
from .locale_detector import LocaleDetector
from .localization_resolver import LocalizationResolver, LocalizedNames
from .platform_formatter import DatePart, PlatformFormatter
from .timezone_offset import TimezoneOffsetCodec, tag_with_offset

__all__ = [
    "DatePart",
    "LocaleDetector",
    "LocalizationManager",
    "LocalizationResolver",
    "LocalizedNames",
    "PlatformFormatter",
    "TimezoneOffsetCodec",
    "tag_with_offset",
]
