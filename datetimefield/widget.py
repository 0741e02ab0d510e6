"""Date-time field: a text field driven by an external calendar picker.

The field keeps only a string. Picker labels, month/weekday names and the
format come from the active locale; every value the picker commits is
tagged with the local GMT offset so it parses back to the picked day.
"""

from __future__ import annotations

import logging
from copy import deepcopy
from typing import Any, Callable, Dict, List, Optional

from calendar_loader import CalendarScriptLoader
from localization import (
    LocalizationManager,
    LocalizationResolver,
    TimezoneOffsetCodec,
)
from settings_store import get_setting

from .text_field import TextField

logger = logging.getLogger(__name__)


def deep_merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Return `base` with `overrides` merged in, nested dicts merged too."""
    merged = deepcopy(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class DateTimeField:
    """Wraps a `TextField` and wires it to the calendar picker.

    The picker's `days` option receives weekday names Monday-first; the host
    must set the picker's first-day-of-week option to match.

    A `loader` is shared between fields and owned by the host, which calls
    `CalendarScriptLoader.shutdown()` when the editor goes away; `remove()`
    only detaches this field from it.
    """

    title = "DateTime"

    def __init__(
        self,
        field: Optional[Dict[str, Any]] = None,
        params: Optional[str] = None,
        set_value: Optional[Callable[[Dict[str, Any], Any], None]] = None,
        *,
        text_field: Optional[TextField] = None,
        locale_tag: Optional[str] = None,
        loader: Optional[CalendarScriptLoader] = None,
        attach_calendar: Optional[Callable[[Dict[str, Any]], Any]] = None,
        codec: Optional[TimezoneOffsetCodec] = None,
        resolver: Optional[LocalizationResolver] = None,
        translations: Optional[LocalizationManager] = None,
    ):
        self.field = field if field is not None else {}
        self.params = params
        self.set_value = set_value
        self.usable = self.field.get("type") == "text"

        if not self.usable:
            logger.warning("The %s widget needs to be used with a text field", self.title)
            return

        # Callbacks to call when parameters change
        self.changes: List[Callable[[Any], None]] = []
        self.container: Optional[List[Any]] = None
        self.calendar: Any = None
        self.attach_calendar = attach_calendar
        self.loader = loader
        self.removed = False

        self.text_field = text_field or TextField(self.field, params, set_value)
        self.codec = codec or TimezoneOffsetCodec(tz=get_setting("timezone"))
        self.resolver = resolver or LocalizationResolver()

        self.locale_tag = self.resolver.locale_detector.normalize_locale(
            locale_tag
            or get_setting("locale")
            or self.resolver.locale_detector.detect_system_locale()
        )
        self.translations = translations or LocalizationManager(self.locale_tag)

        # Browser-style locale strings for months, weekdays, etc.
        self.localization = self.resolver.resolve_names(self.locale_tag)
        self.picker_options = self._build_picker_options()

        if loader is not None and not loader.is_available:
            loader.load(self.init_calendar)
        else:
            self.init_calendar()

        # Relay changes
        self.text_field.changes.append(lambda _params: self.handle_field_change())

    def _build_picker_options(self) -> Dict[str, Any]:
        defaults = {
            "direction": True,  # Only today and future dates
            "days": list(self.localization.weekdays),
            "months": list(self.localization.months),
            "show_select_today": self.translations.get_translation("today"),
            "lang_clear_date": self.translations.get_translation("clearDate"),
            "format": self.localization.date_time_pattern,
        }
        # Semantics may customise the picker
        custom = (self.field.get("datetime") or {}).get("zebraOptions") or {}
        options = deep_merge(defaults, custom)
        options.update(
            on_close=self.handle_date_changed,
            on_select=self.handle_date_changed,
            on_clear=self.handle_date_changed,
        )
        return options

    @property
    def value(self) -> str:
        return self.text_field.value

    def init_calendar(self) -> None:
        """Hand the picker options to the calendar implementation."""
        if self.attach_calendar is None or self.removed:
            return
        self.calendar = self.attach_calendar(self.picker_options)

    def append_to(self, container: List[Any]) -> None:
        """Append field to a container."""
        self.container = container
        container.append(self)

    def remove(self) -> None:
        """Remove self from its container; the shared loader keeps running."""
        if self.container is not None and self in self.container:
            self.container.remove(self)
        self.container = None
        self.removed = True

    def validate(self) -> bool:
        """
        Validate current value.

        Returns:
            bool: True, if current value is valid, else False.
        """
        self.text_field.value = self.codec.tag_with_offset(self.text_field.value)
        return self.text_field.validate()

    def handle_date_changed(self, *_args: Any) -> None:
        """Picker selected, cleared or closed."""
        if self.text_field.value != "":
            self.text_field.value = self.codec.tag_with_offset(self.text_field.value)

        # Trigger storing the value
        self.text_field.commit()

    def handle_field_change(self) -> None:
        self.params = self.text_field.params
        for change in self.changes:
            change(self.params)
