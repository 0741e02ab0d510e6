from __future__ import annotations

import pytest

import localization.locale_detector as locale_detector
from localization import LocaleDetector


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("en-US", "en_US"),
        ("en_gb", "en_GB"),
        ("de_DE.UTF-8", "de_DE"),
        ("ca_ES@valencia", "ca_ES"),
        ("sr-latn-rs", "sr_Latn_RS"),
        ("FR", "fr"),
        ("es-419", "es_419"),
        ("", "en_GB"),
        (None, "en_GB"),
        ("C", "en_GB"),
    ],
)
def test_normalize_locale(raw, expected):
    assert LocaleDetector().normalize_locale(raw) == expected


@pytest.fixture
def clean_env(monkeypatch):
    for var in LocaleDetector.ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(locale_detector.locale, "getlocale", lambda *a: (None, None))
    monkeypatch.setattr(locale_detector.tzlocal, "get_localzone_name", lambda: "Etc/Unknown")


def test_detects_from_environment(clean_env, monkeypatch):
    monkeypatch.setenv("LANG", "de_DE.UTF-8")
    assert LocaleDetector().detect_system_locale() == "de_DE"


def test_posix_environment_is_skipped(clean_env, monkeypatch):
    monkeypatch.setenv("LC_ALL", "C.UTF-8")
    monkeypatch.setenv("LANG", "fr_FR.UTF-8")
    assert LocaleDetector().detect_system_locale() == "fr_FR"


def test_language_list_uses_first_entry(clean_env, monkeypatch):
    monkeypatch.setenv("LANGUAGE", "pt_BR:pt:en")
    assert LocaleDetector().detect_system_locale() == "pt_BR"


def test_detects_from_process_locale(clean_env, monkeypatch):
    monkeypatch.setattr(locale_detector.locale, "getlocale", lambda *a: ("it_IT", "UTF-8"))
    assert LocaleDetector().detect_system_locale() == "it_IT"


def test_detects_from_timezone(clean_env, monkeypatch):
    monkeypatch.setattr(locale_detector.tzlocal, "get_localzone_name", lambda: "Asia/Tokyo")
    assert LocaleDetector().detect_system_locale() == "ja_JP"


def test_timezone_failure_falls_back_to_default(clean_env, monkeypatch, caplog):
    def boom():
        raise RuntimeError("no zone")

    monkeypatch.setattr(locale_detector.tzlocal, "get_localzone_name", boom)
    assert LocaleDetector().detect_system_locale() == "en_GB"
    assert "Could not determine locale from timezone" in caplog.text


def test_detection_is_cached(clean_env, monkeypatch):
    detector = LocaleDetector()
    monkeypatch.setenv("LANG", "nl_NL.UTF-8")
    assert detector.detect_system_locale() == "nl_NL"

    monkeypatch.setenv("LANG", "sv_SE.UTF-8")
    assert detector.detect_system_locale() == "nl_NL"


def test_custom_timezone_map():
    detector = LocaleDetector(timezone_map={"Pacific/Auckland": "en_NZ"})
    assert detector.get_locale_from_timezone("Pacific/Auckland") == "en_NZ"
    assert detector.get_locale_from_timezone("Asia/Tokyo") is None
