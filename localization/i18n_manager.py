import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .locale_detector import LocaleDetector


logger = logging.getLogger(__name__)


class LocalizationManager:
    """Translated labels for the calendar picker ("today", "clearDate")."""

    FALLBACK_LANGUAGE = "en"

    def __init__(
        self,
        default_locale: Optional[str] = None,
        translations_dir: Optional[Union[str, Path]] = None,
    ):
        # Normalise things like "en-gb" / "en_GB.UTF-8" -> "en_GB"
        self.locale_detector = LocaleDetector()

        if default_locale:
            normalized_locale = self.locale_detector.normalize_locale(default_locale)
        else:
            normalized_locale = self.locale_detector.detect_system_locale()

        self._current_locale = normalized_locale

        # Where translations live
        self.translations_dir = (
            Path(translations_dir)
            if translations_dir
            else Path(__file__).parent / "translations"
        )

        # Cache: { locale: translation_dict }
        self._translations_cache: Dict[str, Dict[str, Any]] = {}

        self.set_locale(self._current_locale)

    @property
    def current_locale(self) -> str:
        return self._current_locale

    # ----------------------------------------------------------------------
    # Load translation JSON
    # ----------------------------------------------------------------------
    def _load_locale_translations(self, locale_code: str) -> bool:
        if locale_code in self._translations_cache:
            return True

        path = self.translations_dir / f"{locale_code}.json"
        if not path.exists():
            return False

        try:
            with open(path, "r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Failed to load locale %s: %s", locale_code, e)
            return False

        if not isinstance(data, dict):
            logger.error("Translations for %s are not a JSON object", locale_code)
            return False

        self._translations_cache[locale_code] = data
        return True

    def _resolve_catalogue(self, locale_code: str) -> Optional[str]:
        """Return the first loadable catalogue: full locale, language, English."""
        lang = locale_code.split("_")[0]
        for candidate in (locale_code, lang, self.FALLBACK_LANGUAGE):
            if self._load_locale_translations(candidate):
                return candidate
        return None

    # ----------------------------------------------------------------------
    # Public: Set locale
    # ----------------------------------------------------------------------
    def set_locale(self, locale_code: str) -> bool:
        if not locale_code:
            return False

        locale_code = self.locale_detector.normalize_locale(locale_code)
        self._current_locale = locale_code

        catalogue = self._resolve_catalogue(locale_code)
        if catalogue is None:
            logger.warning("No translations for locale %s", locale_code)
            return False
        if catalogue == self.FALLBACK_LANGUAGE and locale_code.split("_")[0] != catalogue:
            logger.debug("No translations for %s, using English labels", locale_code)
        return True

    # ----------------------------------------------------------------------
    # Lookup value in JSON
    # ----------------------------------------------------------------------
    def get_translation(self, key: str, locale: Optional[str] = None) -> str:
        loc = self.locale_detector.normalize_locale(locale) if locale else self._current_locale

        catalogue = self._resolve_catalogue(loc)
        data = self._translations_cache.get(catalogue, {}) if catalogue else {}

        if key in data:
            return data[key]

        # fallback to last segment
        if "." in key:
            short = key.split(".")[-1]
            if short in data:
                return data[short]

        # English before giving up
        if catalogue != self.FALLBACK_LANGUAGE and self._load_locale_translations(
            self.FALLBACK_LANGUAGE
        ):
            english = self._translations_cache[self.FALLBACK_LANGUAGE]
            if key in english:
                return english[key]

        # final fallback: key itself
        return key
