"""Country address metadata.

This module provides metadata source implementations and shortcuts that
query the bundled metadata.
"""

from __future__ import annotations

from ryandata_intl_address.data.base import BaseMetadataSource
from ryandata_intl_address.data.constants import FALLBACK_COUNTRY
from ryandata_intl_address.data.factory import MetadataSourceFactory
from ryandata_intl_address.data.json_source import (
    JSONMetadataSource,
    get_default_metadata_source,
)
from ryandata_intl_address.models import CountryListItem, CountryMetadata

__all__ = [
    "BaseMetadataSource",
    "FALLBACK_COUNTRY",
    "JSONMetadataSource",
    "MetadataSourceFactory",
    "get_default_metadata_source",
    # Shortcuts using the default source
    "get_country",
    "has_country",
    "normalize_language",
    "get_administrative_area_name",
    "get_administrative_area_postal_key",
    "get_locality_name",
    "get_dependent_locality_name",
    "list_countries",
]


def get_country(country_code: str) -> CountryMetadata:
    """Get the metadata for a country, backfilled from the defaults.

    Args:
        country_code: Country code (case-insensitive).

    Returns:
        CountryMetadata. Unknown codes get the defaults.
    """
    return get_default_metadata_source().get_country(country_code)


def has_country(country_code: str) -> bool:
    """Check if a country has explicit metadata."""
    return get_default_metadata_source().has_country(country_code)


def normalize_language(country_code: str, language: str) -> str:
    """Resolve the language used for a country's subdivision names."""
    return get_default_metadata_source().normalize_language(country_code, language)


def get_administrative_area_name(
    country_code: str, administrative_area_id: str, language: str = ""
) -> str:
    """Get an administrative area's name, or "" if not found."""
    return get_default_metadata_source().get_administrative_area_name(
        country_code, administrative_area_id, language
    )


def get_administrative_area_postal_key(country_code: str, administrative_area_id: str) -> str:
    """Get an administrative area's postal key, or "" if not found."""
    return get_default_metadata_source().get_administrative_area_postal_key(
        country_code, administrative_area_id
    )


def get_locality_name(
    country_code: str, administrative_area_id: str, locality_id: str, language: str = ""
) -> str:
    """Get a locality's name, or "" if not found."""
    return get_default_metadata_source().get_locality_name(
        country_code, administrative_area_id, locality_id, language
    )


def get_dependent_locality_name(
    country_code: str,
    administrative_area_id: str,
    locality_id: str,
    dependent_locality_id: str,
    language: str = "",
) -> str:
    """Get a dependent locality's name, or "" if not found."""
    return get_default_metadata_source().get_dependent_locality_name(
        country_code, administrative_area_id, locality_id, dependent_locality_id, language
    )


def list_countries(language: str = "en") -> list[CountryListItem]:
    """List every country with its display name in ``language``.

    Args:
        language: Language tag for names and ordering.

    Returns:
        Countries ordered by display name.
    """
    return get_default_metadata_source().list_countries(language)
