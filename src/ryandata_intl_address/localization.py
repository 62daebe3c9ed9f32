"""Localized country names and collation.

Country display names come from the CLDR data shipped with Babel. Ordering
uses a Unicode-normalized, case-folded key that is stable across languages.
"""

from __future__ import annotations

import logging
import unicodedata
from functools import lru_cache

from babel import Locale, UnknownLocaleError

logger = logging.getLogger(__name__)

ENGLISH = "en"


@lru_cache(maxsize=128)
def _load_locale(language: str) -> Locale | None:
    """Parse a BCP 47 tag into a Babel locale, or None if unknown."""
    if not language:
        return None
    try:
        return Locale.parse(language.replace("-", "_"))
    except (ValueError, TypeError, UnknownLocaleError):
        logger.debug("Unknown locale %r", language)
        return None


class BabelNameLocalizer:
    """Name localizer backed by Babel's CLDR territory names.

    Example:
        >>> localizer = BabelNameLocalizer()
        >>> localizer.display_name("AU", "fr")
        'Australie'
    """

    def display_name(self, region: str, language: str) -> str | None:
        """Get the display name of a region in a language.

        Args:
            region: ISO 3166-1 alpha-2 region code.
            language: BCP 47 language tag.

        Returns:
            The name, or None if the language or region is unknown to CLDR.
        """
        locale = _load_locale(language)
        if locale is None:
            return None
        name: str | None = locale.territories.get(region.upper())
        return name

    def english_name(self, region: str) -> str | None:
        """Get the English display name of a region."""
        return self.display_name(region, ENGLISH)

    def language_for_region(self, region: str) -> str:
        """Get the likely language of a region from CLDR likely subtags.

        Returns:
            The language code (e.g. "fr" for "FR"), or "" if none is known.
        """
        if not region:
            return ""
        try:
            locale = Locale.parse(f"und_{region.upper()}")
        except (ValueError, UnknownLocaleError):
            logger.debug("No likely language for region %r", region)
            return ""
        return str(locale.language)


class DefaultCollator:
    """Collator ordering strings by their NFKD case-folded form.

    The raw string breaks ties so the ordering is total and deterministic.
    The key does not vary by language.
    """

    def sort_key(self, text: str, language: str = "") -> tuple[str, str]:
        folded = unicodedata.normalize("NFKD", text).casefold()
        return folded, text


@lru_cache(maxsize=1)
def get_default_localizer() -> BabelNameLocalizer:
    """Get the shared Babel localizer."""
    return BabelNameLocalizer()
