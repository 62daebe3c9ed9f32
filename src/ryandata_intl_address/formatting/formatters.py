"""Address formatters.

Two formatters are provided:

- :class:`DefaultFormatter` renders an address in its country's format and
  always includes the country name.
- :class:`PostalLabelFormatter` renders an address for a postal label: fields
  the country's postal service expects in capitals are upper-cased, and the
  country line is only added for international mail, named in both the
  origin country's language and English.
"""

from __future__ import annotations

import dataclasses
import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass

from ryandata_intl_address.formatting.outputs import OutputFactory
from ryandata_intl_address.formatting.template import compile_format
from ryandata_intl_address.localization import get_default_localizer
from ryandata_intl_address.models import Address, AddressField, CountryMetadata
from ryandata_intl_address.protocols import (
    MetadataSourceProtocol,
    NameLocalizerProtocol,
    OutputProtocol,
)

logger = logging.getLogger(__name__)

_HAS_LETTER_RE = re.compile(r"[A-Za-z]")


@dataclass(frozen=True)
class FormatValues:
    """Display values for each field of an address.

    Subdivision IDs are replaced by their names and the country code by the
    country's display name.
    """

    country: str = ""
    name: str = ""
    organization: str = ""
    street_address: tuple[str, ...] = ()
    dependent_locality: str = ""
    locality: str = ""
    administrative_area: str = ""
    administrative_area_postal_key: str = ""
    post_code: str = ""
    sorting_code: str = ""

    def value_for(self, field: AddressField) -> str:
        """Display value of a single-valued field."""
        if field is AddressField.STREET_ADDRESS:
            return "\n".join(self.street_address)
        return getattr(self, _VALUE_ATTRIBUTES[field])  # type: ignore[no-any-return]

    def replace(self, **changes: str) -> FormatValues:
        """Copy with some values changed."""
        return dataclasses.replace(self, **changes)


_VALUE_ATTRIBUTES: dict[AddressField, str] = {
    AddressField.COUNTRY: "country",
    AddressField.NAME: "name",
    AddressField.ORGANIZATION: "organization",
    AddressField.DEPENDENT_LOCALITY: "dependent_locality",
    AddressField.LOCALITY: "locality",
    AddressField.ADMINISTRATIVE_AREA: "administrative_area",
    AddressField.POST_CODE: "post_code",
    AddressField.SORTING_CODE: "sorting_code",
}


class BaseFormatter(ABC):
    """Shared setup and value resolution for the address formatters."""

    def __init__(
        self,
        output: str | OutputProtocol = "plain",
        latinize: bool = False,
        source: MetadataSourceProtocol | None = None,
        localizer: NameLocalizerProtocol | None = None,
    ) -> None:
        """Initialize the formatter.

        Args:
            output: Output mode name (see OutputFactory) or instance.
            latinize: Use the latinized format where the country has one.
            source: Metadata source. Defaults to the bundled metadata.
            localizer: Country name localizer. Defaults to Babel.
        """
        if source is None:
            from ryandata_intl_address.data import get_default_metadata_source

            source = get_default_metadata_source()

        self.output: OutputProtocol = (
            OutputFactory.create(output) if isinstance(output, str) else output
        )
        self.latinize = latinize
        self.source = source
        self.localizer = localizer or get_default_localizer()

    def country_name(self, country_code: str, language: str) -> str:
        """Display name of a country, falling back to English, then the code."""
        name = self.localizer.display_name(country_code, language)
        if name:
            return name
        logger.debug("No %r name for %s; using English", language, country_code)
        return self.localizer.english_name(country_code) or country_code

    def format_values(
        self, address: Address, country: CountryMetadata, language: str
    ) -> FormatValues:
        """Resolve the display values for an address.

        Args:
            address: Address to format.
            country: The address's country metadata.
            language: Requested language for names.
        """
        source = self.source
        code = address.country
        normalized = source.normalize_language(code, language)

        administrative_area = address.administrative_area
        postal_key = ""
        if administrative_area:
            postal_key = source.get_administrative_area_postal_key(code, administrative_area)
            administrative_area = (
                source.get_administrative_area_name(code, administrative_area, language)
                or administrative_area
            )

        locality = address.locality
        if locality:
            locality = (
                source.get_locality_name(code, address.administrative_area, locality, language)
                or locality
            )

        dependent_locality = address.dependent_locality
        if dependent_locality:
            dependent_locality = (
                source.get_dependent_locality_name(
                    code,
                    address.administrative_area,
                    address.locality,
                    dependent_locality,
                    language,
                )
                or dependent_locality
            )

        return FormatValues(
            country=self.country_name(country.id, normalized),
            name=address.name,
            organization=address.organization,
            street_address=tuple(line.strip() for line in address.street_address if line.strip()),
            dependent_locality=dependent_locality,
            locality=locality,
            administrative_area=administrative_area,
            administrative_area_postal_key=postal_key,
            post_code=address.post_code,
            sorting_code=address.sorting_code,
        )

    @staticmethod
    def with_country_line(address_format: str, is_latinized: bool) -> str:
        """Add the country line: last for latinized formats, first otherwise."""
        if is_latinized:
            return address_format + "%n%country"
        return "%country%n" + address_format

    @abstractmethod
    def format(self, address: Address, language: str = "") -> str:
        """Format an address.

        Args:
            address: Address to format.
            language: Language for subdivision and country names. Falls back
                to the country's default language when it has no names in
                this language.

        Returns:
            The formatted address.
        """
        ...


class DefaultFormatter(BaseFormatter):
    """Formats an address in its country's format, including the country name.

    Example:
        >>> formatter = DefaultFormatter(output="html")
        >>> formatter.format(address, "en")
    """

    def format(self, address: Address, language: str = "") -> str:
        country = self.source.get_country(address.country)
        address_format, is_latinized = self.source.resolve_format(address.country, self.latinize)
        template = compile_format(self.with_country_line(address_format, is_latinized))

        values = self.format_values(address, country, language)
        return template.render(values, self.output)


class PostalLabelFormatter(BaseFormatter):
    """Formats an address for a postal label.

    The country line is added only when ``origin_country`` is a known country
    different from the destination. It names the destination in the origin
    country's language and in English, e.g. ``"AUSTRALIE - AUSTRALIA"``.
    Administrative areas are shown by postal abbreviation where one exists.
    """

    def __init__(
        self,
        origin_country: str = "",
        output: str | OutputProtocol = "plain",
        latinize: bool = False,
        source: MetadataSourceProtocol | None = None,
        localizer: NameLocalizerProtocol | None = None,
    ) -> None:
        """Initialize the formatter.

        Args:
            origin_country: ISO 3166-1 code of the country the mail is sent from.
            output: Output mode name (see OutputFactory) or instance.
            latinize: Use the latinized format where the country has one.
            source: Metadata source. Defaults to the bundled metadata.
            localizer: Country name localizer. Defaults to Babel.
        """
        super().__init__(output=output, latinize=latinize, source=source, localizer=localizer)
        self.origin_country = origin_country

    def is_international(self, address: Address) -> bool:
        """Check if the address is abroad from a known origin country."""
        return (
            self.source.has_country(self.origin_country)
            and self.origin_country.upper() != address.country.upper()
        )

    def destination_name(self, country_code: str) -> str:
        """Upper-case destination name in the origin's language and English."""
        english = self.localizer.english_name(country_code) or country_code
        origin_language = self.localizer.language_for_region(self.origin_country)
        translated = self.localizer.display_name(country_code, origin_language) or english

        if translated != english:
            return f"{translated.upper()} - {english.upper()}"
        return english.upper()

    def format(self, address: Address, language: str = "") -> str:
        country = self.source.get_country(address.country)
        address_format, is_latinized = self.source.resolve_format(address.country, self.latinize)
        values = self.format_values(address, country, language)

        if self.is_international(address):
            values = values.replace(country=self.destination_name(country.id))
            if values.country:
                address_format = self.with_country_line(address_format, is_latinized)

        if _HAS_LETTER_RE.search(values.administrative_area_postal_key):
            values = values.replace(administrative_area=values.administrative_area_postal_key)

        template = compile_format(address_format)
        return template.render(values, self.output, upper=country.upper_fields)
