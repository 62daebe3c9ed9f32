"""Address builder for programmatic address construction.

Two styles are supported. The fluent :class:`AddressBuilder`::

    address = AddressBuilder().with_country("AU").with_locality("Melbourne").build()

and option functions applied by :func:`new_address` / :func:`new_valid_address`::

    address, error = new_valid_address(with_country("AU"), with_locality("Melbourne"))
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any, Self

from ryandata_intl_address.models.address import FIELD_ATTRIBUTES
from ryandata_intl_address.models.enums import AddressField
from ryandata_intl_address.models.errors import (
    PACKAGE_NAME,
    AddressErrorType,
    RyanDataAddressError,
    RyanDataValidationError,
)

if TYPE_CHECKING:
    from ryandata_intl_address.models.address import Address
    from ryandata_intl_address.protocols import MetadataSourceProtocol

AddressOption = Callable[["AddressBuilder"], "AddressBuilder"]


class AddressBuilder:
    """Builder for programmatic Address construction.

    Example:
        >>> address = (
        ...     AddressBuilder()
        ...     .with_country("AU")
        ...     .with_street_address(["525 Collins Street"])
        ...     .with_locality("Melbourne")
        ...     .with_administrative_area("VIC")
        ...     .with_post_code("3000")
        ...     .build()
        ... )
    """

    def __init__(self) -> None:
        self._data: dict[str, Any] = {}

    def with_country(self, country_code: str) -> Self:
        """Set the country code (upper-cased)."""
        self._data["country"] = country_code.upper()
        return self

    def with_name(self, name: str) -> Self:
        """Set the recipient name."""
        self._data["name"] = name
        return self

    def with_organization(self, organization: str) -> Self:
        """Set the organization."""
        self._data["organization"] = organization
        return self

    def with_street_address(self, lines: Iterable[str]) -> Self:
        """Set the street address lines."""
        self._data["street_address"] = tuple(lines)
        return self

    def with_dependent_locality(self, dependent_locality: str) -> Self:
        """Set the dependent locality ID."""
        self._data["dependent_locality"] = dependent_locality
        return self

    def with_locality(self, locality: str) -> Self:
        """Set the locality ID."""
        self._data["locality"] = locality
        return self

    def with_administrative_area(self, administrative_area: str) -> Self:
        """Set the administrative area ID."""
        self._data["administrative_area"] = administrative_area
        return self

    def with_post_code(self, post_code: str) -> Self:
        """Set the post code."""
        self._data["post_code"] = post_code
        return self

    def with_sorting_code(self, sorting_code: str) -> Self:
        """Set the sorting code."""
        self._data["sorting_code"] = sorting_code
        return self

    def with_field(self, field: str | AddressField, value: str | Iterable[str]) -> Self:
        """Set an arbitrary field by enum or enum value."""
        try:
            address_field = AddressField(field)
        except ValueError:
            raise RyanDataAddressError.create(
                PACKAGE_NAME,
                AddressErrorType.ADDRESS_BUILDER.value,
                "Unknown address field: {field}",
                {"field": str(field)},
            ) from None

        if address_field is AddressField.STREET_ADDRESS:
            lines = (value,) if isinstance(value, str) else value
            return self.with_street_address(lines)
        if address_field is AddressField.COUNTRY:
            return self.with_country(str(value))

        self._data[FIELD_ATTRIBUTES[address_field]] = value
        return self

    def apply(self, *options: AddressOption) -> Self:
        """Apply option functions to this builder."""
        for option in options:
            option(self)
        return self

    def build(self) -> Address:
        """Build the Address without checking it against country metadata."""
        from ryandata_intl_address.models.address import Address

        return Address.model_validate(self._data)

    def build_validated(self, source: MetadataSourceProtocol | None = None) -> Address:
        """Build the Address and validate it against country metadata.

        Args:
            source: Metadata source to validate against. Defaults to the
                bundled metadata.

        Returns:
            The validated Address.

        Raises:
            RyanDataValidationError: If validation fails. The constructed
                address is available as ``error.address``.
        """
        from ryandata_intl_address.validation import validate

        address = self.build()
        error = validate(address, source=source)
        if error is not None:
            raise error
        return address

    def reset(self) -> Self:
        """Reset the builder to empty state."""
        self._data = {}
        return self


def _setter(method: Callable[[AddressBuilder, Any], AddressBuilder], value: Any) -> AddressOption:
    def option(builder: AddressBuilder) -> AddressBuilder:
        return method(builder, value)

    return option


def with_country(country_code: str) -> AddressOption:
    """Option setting the country code (upper-cased)."""
    return _setter(AddressBuilder.with_country, country_code)


def with_name(name: str) -> AddressOption:
    """Option setting the recipient name."""
    return _setter(AddressBuilder.with_name, name)


def with_organization(organization: str) -> AddressOption:
    """Option setting the organization."""
    return _setter(AddressBuilder.with_organization, organization)


def with_street_address(lines: Iterable[str]) -> AddressOption:
    """Option setting the street address lines."""
    return _setter(AddressBuilder.with_street_address, tuple(lines))


def with_dependent_locality(dependent_locality: str) -> AddressOption:
    """Option setting the dependent locality ID."""
    return _setter(AddressBuilder.with_dependent_locality, dependent_locality)


def with_locality(locality: str) -> AddressOption:
    """Option setting the locality ID."""
    return _setter(AddressBuilder.with_locality, locality)


def with_administrative_area(administrative_area: str) -> AddressOption:
    """Option setting the administrative area ID."""
    return _setter(AddressBuilder.with_administrative_area, administrative_area)


def with_post_code(post_code: str) -> AddressOption:
    """Option setting the post code."""
    return _setter(AddressBuilder.with_post_code, post_code)


def with_sorting_code(sorting_code: str) -> AddressOption:
    """Option setting the sorting code."""
    return _setter(AddressBuilder.with_sorting_code, sorting_code)


def new_address(*options: AddressOption) -> Address:
    """Create an address from option functions without validating it."""
    return AddressBuilder().apply(*options).build()


def new_valid_address(
    *options: AddressOption,
    source: MetadataSourceProtocol | None = None,
) -> tuple[Address, RyanDataValidationError | None]:
    """Create an address from option functions and validate it.

    Returns:
        The constructed address (possibly invalid) and the aggregated
        validation error, or None when the address is valid.
    """
    try:
        return AddressBuilder().apply(*options).build_validated(source=source), None
    except RyanDataValidationError as error:
        if error.address is None:
            raise
        return error.address, error
