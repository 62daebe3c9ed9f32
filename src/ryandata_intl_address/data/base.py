from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Any

from ryandata_intl_address.core.errors import RyanDataMetadataError
from ryandata_intl_address.data.constants import (
    FALLBACK_COUNTRY,
    FIELD_SET_ATTRIBUTES,
    NAME_TYPE_ATTRIBUTES,
)
from ryandata_intl_address.localization import DefaultCollator, get_default_localizer
from ryandata_intl_address.models import (
    AdministrativeArea,
    CountryListItem,
    CountryMetadata,
    Locality,
)
from ryandata_intl_address.protocols import CollatorProtocol, NameLocalizerProtocol

logger = logging.getLogger(__name__)


class BaseMetadataSource(ABC):
    """Abstract base class for country metadata sources.

    Owns every lookup and the caching logic. Subclasses only load the raw
    country table; it is loaded lazily on first access and kept for the
    lifetime of the source.
    """

    def __init__(self, cache_size: int = 512) -> None:
        """Initialize the metadata source.

        Args:
            cache_size: Maximum number of resolved countries to cache.
        """
        self._cache_size = cache_size
        self._countries: dict[str, CountryMetadata] | None = None
        self._load_lock = threading.Lock()
        self._setup_cache()

    def _setup_cache(self) -> None:
        """Set up LRU cache for country lookups."""
        self._cached_get_country = lru_cache(maxsize=self._cache_size)(self._get_country_impl)

    @property
    def description(self) -> str:
        """Human-readable description of where the data comes from."""
        return type(self).__name__

    @abstractmethod
    def _load_countries(self) -> dict[str, CountryMetadata]:
        """Load the country table from the underlying source.

        Returns:
            Dict mapping upper-case country code to its metadata.

        Raises:
            RyanDataMetadataError: If the data is unreadable or malformed.
        """
        ...

    def _ensure_loaded(self) -> dict[str, CountryMetadata]:
        """Load the country table once and return it."""
        if self._countries is None:
            with self._load_lock:
                if self._countries is None:
                    countries = self._load_countries()
                    if FALLBACK_COUNTRY not in countries:
                        raise RyanDataMetadataError(
                            f"metadata from {self.description} has no {FALLBACK_COUNTRY} record",
                            context={"source": self.description},
                        )
                    logger.debug(
                        "Loaded metadata for %d countries from %s",
                        len(countries),
                        self.description,
                    )
                    self._countries = countries
        return self._countries

    def _get_country_impl(self, country_code: str) -> CountryMetadata:
        """Resolve a country record, backfilling unset values from the defaults.

        Args:
            country_code: Upper-case country code.
        """
        countries = self._ensure_loaded()
        fallback = countries[FALLBACK_COUNTRY]
        country = countries.get(country_code) or CountryMetadata(id=country_code)

        update: dict[str, Any] = {}
        if not country.format:
            update["format"] = fallback.format
        for attribute in NAME_TYPE_ATTRIBUTES:
            if getattr(country, attribute) is None:
                update[attribute] = getattr(fallback, attribute)
        for attribute in FIELD_SET_ATTRIBUTES:
            if not getattr(country, attribute):
                update[attribute] = getattr(fallback, attribute)

        return country.model_copy(update=update) if update else country

    def get_country(self, country_code: str) -> CountryMetadata:
        """Get the metadata for a country.

        Never fails: an unknown code gets a record carrying only its ID and
        the defaults.

        Args:
            country_code: Country code (case-insensitive).

        Returns:
            CountryMetadata with unset values backfilled from the defaults.
        """
        return self._cached_get_country(country_code.upper())

    def has_country(self, country_code: str) -> bool:
        """Check if a country has an explicit metadata record.

        The defaults record (``ZZ``) counts as explicit.
        """
        return country_code.upper() in self._ensure_loaded()

    def country_codes(self) -> list[str]:
        """Get the sorted list of explicitly defined country codes."""
        return sorted(self._ensure_loaded())

    def normalize_language(self, country_code: str, language: str) -> str:
        """Resolve the language used for a country's subdivision names.

        Args:
            country_code: Country code.
            language: Requested language tag.

        Returns:
            ``language`` if the country has subdivision names keyed by exactly
            that tag, otherwise the country's default language.
        """
        country = self.get_country(country_code)
        if language in country.administrative_areas:
            return language
        return country.default_language

    def _find_administrative_area(
        self, country_code: str, administrative_area_id: str, language: str
    ) -> AdministrativeArea | None:
        country = self.get_country(country_code)
        return country.find_administrative_area(
            administrative_area_id, self.normalize_language(country_code, language)
        )

    def _find_locality(
        self,
        country_code: str,
        administrative_area_id: str,
        locality_id: str,
        language: str,
    ) -> Locality | None:
        area = self._find_administrative_area(country_code, administrative_area_id, language)
        return area.find_locality(locality_id) if area is not None else None

    def get_administrative_area_name(
        self, country_code: str, administrative_area_id: str, language: str
    ) -> str:
        """Get an administrative area's name, or "" if not found."""
        area = self._find_administrative_area(country_code, administrative_area_id, language)
        return area.name if area is not None else ""

    def get_administrative_area_postal_key(
        self, country_code: str, administrative_area_id: str
    ) -> str:
        """Get an administrative area's postal key from the default-language list."""
        country = self.get_country(country_code)
        area = country.find_administrative_area(administrative_area_id, country.default_language)
        return area.postal_key if area is not None else ""

    def get_locality_name(
        self,
        country_code: str,
        administrative_area_id: str,
        locality_id: str,
        language: str,
    ) -> str:
        """Get a locality's name, or "" if not found."""
        locality = self._find_locality(country_code, administrative_area_id, locality_id, language)
        return locality.name if locality is not None else ""

    def get_dependent_locality_name(
        self,
        country_code: str,
        administrative_area_id: str,
        locality_id: str,
        dependent_locality_id: str,
        language: str,
    ) -> str:
        """Get a dependent locality's name, or "" if not found."""
        locality = self._find_locality(country_code, administrative_area_id, locality_id, language)
        if locality is None:
            return ""
        dependent_locality = locality.find_dependent_locality(dependent_locality_id)
        return dependent_locality.name if dependent_locality is not None else ""

    def resolve_format(self, country_code: str, latinize: bool) -> tuple[str, bool]:
        """Choose the format string for a country.

        The latinized format is used when requested and available. A country
        with only one format treats it as latinized, so the country name goes
        at the end of the address.

        Args:
            country_code: Country code.
            latinize: Whether the latinized format is wanted.

        Returns:
            Tuple of the format string and whether it is latinized.
        """
        countries = self._ensure_loaded()
        country = countries.get(country_code.upper())

        if country is not None:
            if latinize and country.latinized_format:
                return country.latinized_format, True
            if country.format and not country.latinized_format:
                return country.format, True
            if country.format:
                return country.format, False

        return countries[FALLBACK_COUNTRY].format, True

    def list_countries(
        self,
        language: str,
        localizer: NameLocalizerProtocol | None = None,
        collator: CollatorProtocol | None = None,
    ) -> list[CountryListItem]:
        """List every country with its display name in ``language``.

        Names fall back to English, then to the code itself. The defaults
        record is excluded.

        Args:
            language: Language tag for the display names and ordering.
            localizer: Name localizer. Defaults to the Babel localizer.
            collator: Collator for ordering. Defaults to DefaultCollator.

        Returns:
            Countries ordered by display name.
        """
        localizer = localizer or get_default_localizer()
        collator = collator or DefaultCollator()

        items = []
        for code in self.country_codes():
            if code == FALLBACK_COUNTRY:
                continue
            name = localizer.display_name(code, language)
            if not name:
                logger.debug("No %r name for %s; using English", language, code)
                name = localizer.english_name(code) or code
            items.append(CountryListItem(code=code, name=name))

        return sorted(items, key=lambda item: collator.sort_key(item.name, language))

    def clear_cache(self) -> None:
        """Clear the country lookup cache."""
        self._cached_get_country.cache_clear()
