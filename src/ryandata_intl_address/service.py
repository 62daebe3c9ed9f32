from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import TYPE_CHECKING, Any

from ryandata_intl_address.data import MetadataSourceFactory
from ryandata_intl_address.data.constants import OUTPUT_ENV
from ryandata_intl_address.formatting import DefaultFormatter, PostalLabelFormatter
from ryandata_intl_address.localization import DefaultCollator, get_default_localizer
from ryandata_intl_address.models import (
    Address,
    AddressBuilder,
    CountryListItem,
    CountryMetadata,
    RyanDataValidationError,
)
from ryandata_intl_address.validation.validators import (
    create_default_validators,
    to_validation_error,
)

if TYPE_CHECKING:
    from ryandata_intl_address.core.validation import BaseValidator
    from ryandata_intl_address.protocols import (
        CollatorProtocol,
        MetadataSourceProtocol,
        NameLocalizerProtocol,
        OutputProtocol,
    )

logger = logging.getLogger(__name__)


def _default_output() -> str:
    """Output mode from the environment, or plain text."""
    return os.getenv(OUTPUT_ENV, "plain") or "plain"


class AddressService:
    """High-level facade for address validation and formatting.

    Orchestrates the metadata source, validators and formatters to provide
    a simple API for common tasks.

    Example:
        >>> service = AddressService()
        >>> address = service.build_address(
        ...     country="AU",
        ...     street_address=["525 Collins Street"],
        ...     locality="Melbourne",
        ...     administrative_area="VIC",
        ...     post_code="3000",
        ... )
        >>> service.is_valid(address)
        True
        >>> print(service.format(address, "en"))

        # Custom components
        >>> from ryandata_intl_address.data import JSONMetadataSource
        >>> service = AddressService(data_source=JSONMetadataSource("/path/to/countries.json"))
    """

    def __init__(
        self,
        data_source: MetadataSourceProtocol | None = None,
        localizer: NameLocalizerProtocol | None = None,
        collator: CollatorProtocol | None = None,
        validator: BaseValidator[Address] | None = None,
        output: str | OutputProtocol | None = None,
    ) -> None:
        """Initialize the address service.

        Args:
            data_source: Metadata source. Defaults to the bundled JSON metadata.
            localizer: Country name localizer. Defaults to Babel.
            collator: Collator for country lists. Defaults to DefaultCollator.
            validator: Validator implementation. Defaults to the default pipeline.
            output: Default output mode. Defaults to $RYANDATA_INTL_ADDRESS_OUTPUT
                or "plain".
        """
        self._data_source = data_source or MetadataSourceFactory.create()
        self._localizer = localizer or get_default_localizer()
        self._collator = collator or DefaultCollator()
        self._validator = validator or create_default_validators(self._data_source)
        self._output = output or _default_output()
        logger.debug("AddressService ready with %r output", self._output)

    @property
    def data_source(self) -> MetadataSourceProtocol:
        """Get the metadata source instance."""
        return self._data_source

    @property
    def validator(self) -> BaseValidator[Address]:
        """Get the validator instance."""
        return self._validator

    def build_address(self, **fields: Any) -> Address:
        """Build an address from keyword fields without validating it.

        Accepts the Address field names and their aliases (``city``,
        ``postal_code``...).
        """
        return Address.model_validate(fields)

    def builder(self) -> AddressBuilder:
        """Get a new fluent address builder."""
        return AddressBuilder()

    def validate(self, address: Address) -> RyanDataValidationError | None:
        """Validate an address against its country's metadata.

        Args:
            address: Address to validate.

        Returns:
            None if valid, otherwise the aggregated validation error.
        """
        return to_validation_error(self._validator.validate(address), address)

    def is_valid(self, address: Address) -> bool:
        """Check if an address is valid for its country."""
        return self.validate(address) is None

    def format(
        self,
        address: Address,
        language: str = "",
        *,
        output: str | OutputProtocol | None = None,
        latinize: bool = False,
    ) -> str:
        """Format an address in its country's format, including the country name.

        Args:
            address: Address to format.
            language: Language for subdivision and country names.
            output: Output mode. Defaults to the service's output mode.
            latinize: Use the latinized format where the country has one.

        Returns:
            The formatted address.
        """
        formatter = DefaultFormatter(
            output=output or self._output,
            latinize=latinize,
            source=self._data_source,
            localizer=self._localizer,
        )
        return formatter.format(address, language)

    def format_postal_label(
        self,
        address: Address,
        language: str = "",
        *,
        origin_country: str = "",
        output: str | OutputProtocol | None = None,
        latinize: bool = False,
    ) -> str:
        """Format an address for a postal label.

        Args:
            address: Address to format.
            language: Language for subdivision names.
            origin_country: Country the mail is sent from. The destination
                country is only printed when it differs from this one.
            output: Output mode. Defaults to the service's output mode.
            latinize: Use the latinized format where the country has one.

        Returns:
            The formatted label.
        """
        formatter = PostalLabelFormatter(
            origin_country=origin_country,
            output=output or self._output,
            latinize=latinize,
            source=self._data_source,
            localizer=self._localizer,
        )
        return formatter.format(address, language)

    def get_country(self, country_code: str) -> CountryMetadata:
        """Get the metadata for a country, backfilled from the defaults."""
        return self._data_source.get_country(country_code)

    def has_country(self, country_code: str) -> bool:
        """Check if a country has explicit metadata."""
        return self._data_source.has_country(country_code)

    def list_countries(self, language: str = "en") -> list[CountryListItem]:
        """List every country with its display name, ordered for ``language``."""
        return self._data_source.list_countries(
            language, localizer=self._localizer, collator=self._collator
        )


@lru_cache(maxsize=1)
def get_default_service() -> AddressService:
    """Get the default AddressService singleton.

    Returns:
        Shared AddressService instance with default configuration.
    """
    return AddressService()


def validate(address: Address) -> RyanDataValidationError | None:
    """Validate an address using the default service."""
    return get_default_service().validate(address)


def format_address(address: Address, language: str = "", **kwargs: Any) -> str:
    """Format an address using the default service.

    Args:
        address: Address to format.
        language: Language for subdivision and country names.
        **kwargs: ``output`` and ``latinize`` (see AddressService.format).
    """
    return get_default_service().format(address, language, **kwargs)


def format_postal_label(
    address: Address, language: str = "", *, origin_country: str = "", **kwargs: Any
) -> str:
    """Format a postal label using the default service.

    Args:
        address: Address to format.
        language: Language for subdivision names.
        origin_country: Country the mail is sent from.
        **kwargs: ``output`` and ``latinize`` (see AddressService.format_postal_label).
    """
    return get_default_service().format_postal_label(
        address, language, origin_country=origin_country, **kwargs
    )
