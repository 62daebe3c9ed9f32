"""Address-specific error classes.

Every individual validation failure is a :class:`RyanDataAddressError` tagged
with an :class:`AddressErrorType`. A validation pass collects them into a
single :class:`RyanDataValidationError` so callers can inspect every failure
in one round-trip.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from enum import Enum
from typing import TYPE_CHECKING, Any

from ryandata_intl_address.core.errors import RyanDataError
from ryandata_intl_address.models.enums import AddressField

if TYPE_CHECKING:
    from ryandata_intl_address.models.address import Address

# Package identifier for error context
PACKAGE_NAME = "ryandata_intl_address"


class AddressErrorType(str, Enum):
    """Kinds of address validation errors."""

    INVALID_COUNTRY_CODE = "invalid_country_code"
    INVALID_ADMINISTRATIVE_AREA = "invalid_administrative_area"
    INVALID_LOCALITY = "invalid_locality"
    INVALID_DEPENDENT_LOCALITY = "invalid_dependent_locality"
    INVALID_POST_CODE = "invalid_post_code"
    MISSING_REQUIRED_FIELDS = "missing_required_fields"
    UNSUPPORTED_FIELDS = "unsupported_fields"
    ADDRESS_BUILDER = "address_builder"


def _split_fields(names: str) -> list[AddressField]:
    return [AddressField(name) for name in names.split(",") if name]


class RyanDataAddressError(RyanDataError):
    """A single address validation failure.

    Inherits from PydanticCustomError (through RyanDataError), so ``type``,
    ``message()`` and ``context`` behave as they do for any pydantic error.
    """

    @classmethod
    def for_kind(
        cls,
        kind: AddressErrorType,
        message: str,
        country: str,
        **context: Any,
    ) -> RyanDataAddressError:
        """Build an error of the given kind for a country."""
        return cls.create(  # type: ignore[return-value]
            PACKAGE_NAME,
            kind.value,
            message,
            {"country": country, **context},
        )

    @classmethod
    def invalid_country_code(cls, country: str) -> RyanDataAddressError:
        return cls.for_kind(
            AddressErrorType.INVALID_COUNTRY_CODE, "invalid country code: {country}", country
        )

    @classmethod
    def invalid_administrative_area(cls, country: str, value: str) -> RyanDataAddressError:
        return cls.for_kind(
            AddressErrorType.INVALID_ADMINISTRATIVE_AREA,
            "invalid administrative area for {country}: {value}",
            country,
            value=value,
        )

    @classmethod
    def invalid_locality(cls, country: str, value: str) -> RyanDataAddressError:
        return cls.for_kind(
            AddressErrorType.INVALID_LOCALITY,
            "invalid locality for {country}: {value}",
            country,
            value=value,
        )

    @classmethod
    def invalid_dependent_locality(cls, country: str, value: str) -> RyanDataAddressError:
        return cls.for_kind(
            AddressErrorType.INVALID_DEPENDENT_LOCALITY,
            "invalid dependent locality for {country}: {value}",
            country,
            value=value,
        )

    @classmethod
    def invalid_post_code(cls, country: str, value: str) -> RyanDataAddressError:
        return cls.for_kind(
            AddressErrorType.INVALID_POST_CODE,
            "invalid post code for {country}: {value}",
            country,
            value=value,
        )

    @classmethod
    def missing_required_fields(
        cls, country: str, fields: Sequence[AddressField]
    ) -> RyanDataAddressError:
        """Error listing every required field that is blank."""
        return cls.for_kind(
            AddressErrorType.MISSING_REQUIRED_FIELDS,
            "missing required fields for {country}: {field_names}",
            country,
            fields=[f.value for f in fields],
            field_names=",".join(f.value for f in fields),
        )

    @classmethod
    def unsupported_fields(
        cls, country: str, fields: Sequence[AddressField]
    ) -> RyanDataAddressError:
        """Error listing every populated field the country's format does not use."""
        return cls.for_kind(
            AddressErrorType.UNSUPPORTED_FIELDS,
            "unsupported fields for {country}: {field_names}",
            country,
            fields=[f.value for f in fields],
            field_names=",".join(f.value for f in fields),
        )

    @classmethod
    def from_result_error(cls, kind: str, country: str, value: str) -> RyanDataAddressError:
        """Rebuild an error recorded on a ValidationResult.

        Args:
            kind: AddressErrorType value stored as the entry's field.
            country: Country code of the validated address.
            value: Offending value stored on the entry. For the missing and
                unsupported kinds, comma-separated field names.

        Raises:
            ValueError: If ``kind`` is not a validation error kind.
        """
        error_type = AddressErrorType(kind)

        if error_type is AddressErrorType.INVALID_COUNTRY_CODE:
            return cls.invalid_country_code(country)
        if error_type is AddressErrorType.MISSING_REQUIRED_FIELDS:
            return cls.missing_required_fields(country, _split_fields(value))
        if error_type is AddressErrorType.UNSUPPORTED_FIELDS:
            return cls.unsupported_fields(country, _split_fields(value))

        constructors = {
            AddressErrorType.INVALID_ADMINISTRATIVE_AREA: cls.invalid_administrative_area,
            AddressErrorType.INVALID_LOCALITY: cls.invalid_locality,
            AddressErrorType.INVALID_DEPENDENT_LOCALITY: cls.invalid_dependent_locality,
            AddressErrorType.INVALID_POST_CODE: cls.invalid_post_code,
        }
        if error_type not in constructors:
            raise ValueError(f"Not a validation error kind: {kind}")
        return constructors[error_type](country, value)

    @property
    def kind(self) -> AddressErrorType:
        """Error kind."""
        return AddressErrorType(self.type)

    @property
    def country(self) -> str:
        """Country code of the address that failed."""
        return str((self.context or {}).get("country", ""))

    @property
    def fields(self) -> tuple[AddressField, ...]:
        """Fields named by a missing/unsupported fields error (empty otherwise)."""
        return tuple(AddressField(value) for value in (self.context or {}).get("fields", ()))


class RyanDataValidationError(Exception):
    """Aggregate of every error found while validating one address.

    Provides access to each individual error plus package context. When raised
    from a builder, ``address`` holds the constructed (invalid) address.
    """

    def __init__(
        self,
        errors: Iterable[RyanDataAddressError],
        address: Address | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize RyanDataValidationError.

        Args:
            errors: The individual validation errors.
            address: The address that failed validation.
            context: Optional additional context to include.
        """
        self.errors_list: list[RyanDataAddressError] = list(errors)
        self.address = address
        self.context = {"package": PACKAGE_NAME, **(context or {})}

        error_messages = "; ".join(e.message() for e in self.errors_list)
        super().__init__(error_messages)

    def errors(self) -> list[RyanDataAddressError]:
        """Get the list of validation errors."""
        return list(self.errors_list)

    @property
    def kinds(self) -> list[AddressErrorType]:
        """Error kinds in report order."""
        return [e.kind for e in self.errors_list]

    def has(self, kind: AddressErrorType) -> bool:
        """Check whether an error of ``kind`` was reported."""
        return kind in self.kinds

    def get(self, kind: AddressErrorType) -> RyanDataAddressError | None:
        """First error of ``kind``, if any."""
        return next((e for e in self.errors_list if e.kind is kind), None)

    def __iter__(self) -> Iterator[RyanDataAddressError]:
        return iter(self.errors_list)

    def __len__(self) -> int:
        return len(self.errors_list)

    def __repr__(self) -> str:
        """Detailed representation."""
        return f"RyanDataValidationError({self.errors_list!r}, context={self.context})"
