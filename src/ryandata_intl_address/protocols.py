from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ryandata_intl_address.models import AddressField, CountryListItem, CountryMetadata


@runtime_checkable
class NameLocalizerProtocol(Protocol):
    """Protocol for localized country display names.

    Implementations map a region code and a language tag to the region's
    display name in that language.
    """

    def display_name(self, region: str, language: str) -> str | None:
        """Get the display name of a region in a language.

        Args:
            region: ISO 3166-1 alpha-2 region code.
            language: BCP 47 language tag (e.g. "en", "zh-Hant").

        Returns:
            The display name, or None if the language or region is unknown.
        """
        ...

    def english_name(self, region: str) -> str | None:
        """Get the English display name of a region."""
        ...

    def language_for_region(self, region: str) -> str:
        """Get the most likely language spoken in a region.

        Args:
            region: ISO 3166-1 alpha-2 region code.

        Returns:
            Language tag, or an empty string if none is known.
        """
        ...


@runtime_checkable
class CollatorProtocol(Protocol):
    """Protocol for language-sensitive string ordering."""

    def sort_key(self, text: str, language: str) -> Any:
        """Get a key that orders ``text`` for ``language``."""
        ...


@runtime_checkable
class PostCodeMatcherProtocol(Protocol):
    """Protocol for post code matchers used by territories."""

    def match(self, post_code: str) -> bool:
        """Check whether a post code matches."""
        ...


@runtime_checkable
class MetadataSourceProtocol(Protocol):
    """Protocol for country address metadata sources.

    Implementations provide the per-country format, field and subdivision
    metadata used for validation and formatting.
    """

    def get_country(self, country_code: str) -> CountryMetadata:
        """Get the metadata for a country, backfilled from the defaults.

        Args:
            country_code: Country code (case-insensitive).

        Returns:
            CountryMetadata. Never fails: unknown codes get the defaults.
        """
        ...

    def has_country(self, country_code: str) -> bool:
        """Check if a country has explicit metadata."""
        ...

    def normalize_language(self, country_code: str, language: str) -> str:
        """Resolve the language to use for a country's subdivision names."""
        ...

    def get_administrative_area_name(
        self, country_code: str, administrative_area_id: str, language: str
    ) -> str:
        """Get an administrative area's name, or "" if not found."""
        ...

    def get_administrative_area_postal_key(
        self, country_code: str, administrative_area_id: str
    ) -> str:
        """Get an administrative area's postal key, or "" if not found."""
        ...

    def get_locality_name(
        self,
        country_code: str,
        administrative_area_id: str,
        locality_id: str,
        language: str,
    ) -> str:
        """Get a locality's name, or "" if not found."""
        ...

    def get_dependent_locality_name(
        self,
        country_code: str,
        administrative_area_id: str,
        locality_id: str,
        dependent_locality_id: str,
        language: str,
    ) -> str:
        """Get a dependent locality's name, or "" if not found."""
        ...

    def resolve_format(self, country_code: str, latinize: bool) -> tuple[str, bool]:
        """Choose the format string for a country.

        Returns:
            The format and whether it is the latinized variant.
        """
        ...

    def list_countries(
        self,
        language: str,
        localizer: NameLocalizerProtocol | None = None,
        collator: CollatorProtocol | None = None,
    ) -> list[CountryListItem]:
        """List every country with its display name, sorted for ``language``."""
        ...

    def country_codes(self) -> list[str]:
        """Get the sorted list of explicitly defined country codes."""
        ...


@runtime_checkable
class OutputProtocol(Protocol):
    """Protocol for formatter output modes (plain text, HTML...)."""

    def render_field(self, field: AddressField, value: str) -> str:
        """Render a single-valued field."""
        ...

    def render_street_address(self, lines: Sequence[str]) -> str:
        """Render the street address lines."""
        ...

    def newline(self) -> str:
        """Render a line break."""
        ...

    def literal(self, text: str) -> str:
        """Render literal template text."""
        ...

    def finalize(self, text: str) -> str:
        """Post-process the rendered address."""
        ...
