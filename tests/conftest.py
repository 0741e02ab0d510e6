from __future__ import annotations

from datetime import date, datetime
from typing import Dict, List, Sequence, Tuple

import pytest

import settings_store


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep every test away from the real per-user settings file."""
    settings_file = tmp_path / "settings.json"
    monkeypatch.setattr(settings_store, "settings_path", lambda: settings_file)
    return settings_file


class FakeFormatter:
    """Deterministic stand-in for PlatformFormatter."""

    def __init__(
        self,
        parts: Sequence[Tuple[str, str]] = (),
        months: Sequence[str] = (),
        weekdays_sunday_first: Sequence[str] = (),
        offset_minutes: int = 0,
    ):
        self.parts = list(parts)
        self.months = list(months)
        self.weekdays_sunday_first = list(weekdays_sunday_first)
        self.offset_minutes = offset_minutes
        self.calls: Dict[str, List] = {"parts": [], "field": [], "offset": []}

    def format_parts(self, locale_tag, value, skeleton="yMMdd"):
        self.calls["parts"].append((locale_tag, value))
        return list(self.parts)

    def format_field(self, locale_tag, value: date, field: str) -> str:
        self.calls["field"].append((locale_tag, value, field))
        if field == "LLLL":
            return self.months[value.month - 1]
        # isoweekday: Monday=1 .. Sunday=7 -> Sunday-first index
        return self.weekdays_sunday_first[value.isoweekday() % 7]

    def timezone_offset_minutes(self, instant: datetime, tz=None) -> int:
        self.calls["offset"].append((instant, tz))
        return self.offset_minutes


@pytest.fixture
def fake_formatter_factory():
    return FakeFormatter
