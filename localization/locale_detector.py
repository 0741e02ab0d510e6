"""
Locale Detection for the date-time field

Turns whatever the host hands us ("en-US", "de", "en_GB.UTF-8",
"sr-Latn-RS") into a canonical tag Babel understands, and works out the
ambient locale when the caller does not supply one.
"""

import locale
import logging
import os
from typing import Dict, Optional

import tzlocal

logger = logging.getLogger(__name__)

# IANA timezone -> locale, used when no language setting is available
TZ_LOCALE_MAP: Dict[str, str] = {
    # Europe
    "Europe/London": "en_GB",
    "Europe/Dublin": "en_IE",
    "Europe/Berlin": "de_DE",
    "Europe/Vienna": "de_AT",
    "Europe/Zurich": "de_CH",
    "Europe/Paris": "fr_FR",
    "Europe/Madrid": "es_ES",
    "Europe/Rome": "it_IT",
    "Europe/Lisbon": "pt_PT",
    "Europe/Amsterdam": "nl_NL",
    "Europe/Stockholm": "sv_SE",
    "Europe/Oslo": "nb_NO",
    "Europe/Copenhagen": "da_DK",
    "Europe/Helsinki": "fi_FI",
    "Europe/Warsaw": "pl_PL",
    "Europe/Prague": "cs_CZ",
    "Europe/Moscow": "ru_RU",
    # Americas
    "America/New_York": "en_US",
    "America/Chicago": "en_US",
    "America/Denver": "en_US",
    "America/Los_Angeles": "en_US",
    "America/Toronto": "en_CA",
    "America/Mexico_City": "es_MX",
    "America/Sao_Paulo": "pt_BR",
    # Asia / Pacific
    "Asia/Tokyo": "ja_JP",
    "Asia/Seoul": "ko_KR",
    "Asia/Shanghai": "zh_CN",
    "Asia/Taipei": "zh_TW",
    "Asia/Kolkata": "hi_IN",
    "Australia/Sydney": "en_AU",
}


class LocaleDetector:
    """Normalizes locale tags and detects the ambient locale."""

    DEFAULT_LOCALE = "en_GB"

    ENV_VARS = ("LC_ALL", "LC_TIME", "LANG", "LANGUAGE")

    def __init__(self, timezone_map: Optional[Dict[str, str]] = None):
        self._system_locale: Optional[str] = None
        self._timezone_map = TZ_LOCALE_MAP if timezone_map is None else timezone_map

    def normalize_locale(self, locale_str: Optional[str]) -> str:
        """
        Normalize a locale string to "ll", "ll_RR" or "ll_Ssss_RR".

        Args:
            locale_str: Raw locale string (BCP 47 or POSIX style)

        Returns:
            str: Normalized locale code
        """
        if not locale_str:
            return self.DEFAULT_LOCALE

        # Remove encoding and modifier suffixes
        cleaned = locale_str.strip().split(".")[0].split("@")[0]
        cleaned = cleaned.replace("-", "_")
        if not cleaned or cleaned.upper() in ("C", "POSIX"):
            return self.DEFAULT_LOCALE

        parts = [p for p in cleaned.split("_") if p]
        normalized = [parts[0].lower()]
        for part in parts[1:]:
            if len(part) == 4 and part.isalpha():
                normalized.append(part.title())  # script, e.g. Latn
            else:
                normalized.append(part.upper())
        return "_".join(normalized)

    def get_locale_from_timezone(self, tz_id: Optional[str] = None) -> Optional[str]:
        """Return the locale mapped to `tz_id` (or the machine's zone)."""
        try:
            tz_name = tz_id or tzlocal.get_localzone_name()
        except Exception as e:
            logger.warning("Could not determine locale from timezone: %s", e)
            return None
        return self._timezone_map.get(tz_name)

    def detect_system_locale(self) -> str:
        """
        Detect the ambient locale.

        Returns:
            str: Detected locale code or DEFAULT_LOCALE as fallback
        """
        if self._system_locale:
            return self._system_locale

        detected = None

        # Method 1: environment variables
        for env_var in self.ENV_VARS:
            env_locale = (os.environ.get(env_var) or "").split(":")[0]
            # "C" and "POSIX" say nothing about the user's language
            if env_locale and env_locale.split(".")[0].upper() not in ("C", "POSIX"):
                detected = self.normalize_locale(env_locale)
                break

        # Method 2: Python locale module
        if not detected:
            try:
                system_locale = locale.getlocale()[0]
                if system_locale and system_locale.upper() not in ("C", "POSIX"):
                    detected = self.normalize_locale(system_locale)
            except ValueError as e:
                logger.warning("Failed to read process locale: %s", e)

        # Method 3: timezone
        if not detected:
            detected = self.get_locale_from_timezone()

        self._system_locale = detected or self.DEFAULT_LOCALE
        logger.debug("Ambient locale resolved to %s", self._system_locale)
        return self._system_locale
