from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import TYPE_CHECKING

from abstract_validation_base import CompositeValidator, ValidationResult, ValidatorPipelineBuilder

from ryandata_intl_address.core.errors import RyanDataMetadataError
from ryandata_intl_address.models import (
    AddressField,
    PostCodeRegex,
    RyanDataAddressError,
    RyanDataValidationError,
    order_fields,
)
from ryandata_intl_address.protocols import MetadataSourceProtocol
from ryandata_intl_address.validation.base import MetadataValidator

if TYPE_CHECKING:
    from ryandata_intl_address.models import Address

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1024)
def compile_post_code_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a post code expression from the metadata.

    Raises:
        RyanDataMetadataError: If the expression does not compile.
    """
    try:
        return re.compile(pattern, re.ASCII)
    except re.error as exc:
        raise RyanDataMetadataError(
            "Invalid post code regex in address metadata",
            original_error=exc,
            context={"regex": pattern},
        ) from exc


def _report(result: ValidationResult, error: RyanDataAddressError, value: str) -> None:
    """Record an address error on a validation result.

    The entry field holds the error kind so RyanDataAddressError.from_result_error
    can rebuild the error from the entry.
    """
    result.add_error(field=error.type, message=error.message(), value=value)


class CountryCodeValidator(MetadataValidator):
    """Validates that the country has explicit metadata.

    The other validators skip addresses without country metadata, so an
    unknown country is the only error such an address gets.
    """

    @property
    def name(self) -> str:
        """Name of this validator."""
        return "country_code"

    def validate(self, address: Address) -> ValidationResult:
        """Validate the country code.

        Args:
            address: Address to validate.

        Returns:
            ValidationResult with an invalid_country_code error if unknown.
        """
        result = ValidationResult(is_valid=True)
        if not self.applies_to(address):
            error = RyanDataAddressError.invalid_country_code(address.country)
            _report(result, error, address.country)
        return result


class RequiredFieldsValidator(MetadataValidator):
    """Validates that every field the country requires is filled in.

    A field counts as missing when it is blank after trimming whitespace.
    All missing fields are reported in one error.
    """

    @property
    def name(self) -> str:
        """Name of this validator."""
        return "required_fields"

    def validate(self, address: Address) -> ValidationResult:
        result = ValidationResult(is_valid=True)
        if not self.applies_to(address):
            return result
        country = self._data_source.get_country(address.country)

        missing = tuple(
            field for field in order_fields(country.required_fields) if address.is_blank(field)
        )
        if missing:
            error = RyanDataAddressError.missing_required_fields(address.country, missing)
            _report(result, error, ",".join(f.value for f in missing))
        return result


class AllowedFieldsValidator(MetadataValidator):
    """Validates that the address only uses fields the country's format shows.

    The country field is always allowed.
    """

    @property
    def name(self) -> str:
        """Name of this validator."""
        return "allowed_fields"

    def validate(self, address: Address) -> ValidationResult:
        result = ValidationResult(is_valid=True)
        if not self.applies_to(address):
            return result
        country = self._data_source.get_country(address.country)

        unsupported = tuple(
            field
            for field in address.populated_fields()
            if field is not AddressField.COUNTRY and field not in country.allowed_fields
        )
        if unsupported:
            _report(
                result,
                RyanDataAddressError.unsupported_fields(address.country, unsupported),
                ",".join(f.value for f in unsupported),
            )
        return result


class SubdivisionValidator(MetadataValidator):
    """Validates the administrative area, locality and dependent locality IDs.

    Only runs for countries with a subdivision list in their default
    language. Each level is only checked when the level above matched and
    defines children; the first invalid level ends the check.
    """

    @property
    def name(self) -> str:
        """Name of this validator."""
        return "subdivisions"

    def validate(self, address: Address) -> ValidationResult:
        """Validate the subdivision IDs.

        Args:
            address: Address to validate.

        Returns:
            ValidationResult with at most one subdivision error.
        """
        result = ValidationResult(is_valid=True)
        if not self.applies_to(address):
            return result
        country = self._data_source.get_country(address.country)

        if not country.administrative_areas_for(country.default_language):
            return result
        if not address.administrative_area:
            return result

        area = country.find_administrative_area(
            address.administrative_area, country.default_language
        )
        if area is None:
            _report(
                result,
                RyanDataAddressError.invalid_administrative_area(
                    address.country, address.administrative_area
                ),
                address.administrative_area,
            )
            return result

        if not address.locality or not area.localities:
            return result

        locality = area.find_locality(address.locality)
        if locality is None:
            _report(
                result,
                RyanDataAddressError.invalid_locality(address.country, address.locality),
                address.locality,
            )
            return result

        if not address.dependent_locality or not locality.dependent_localities:
            return result

        if locality.find_dependent_locality(address.dependent_locality) is None:
            _report(
                result,
                RyanDataAddressError.invalid_dependent_locality(
                    address.country, address.dependent_locality
                ),
                address.dependent_locality,
            )
        return result


class PostCodeValidator(MetadataValidator):
    """Validates the post code against the country's regex tree.

    The country expression must match. The expressions for the address's
    administrative area, locality and dependent locality are then applied
    in turn; a level without an expression for the address ends the check.
    """

    @property
    def name(self) -> str:
        """Name of this validator."""
        return "post_code"

    @staticmethod
    def _matches(node: PostCodeRegex, post_code: str, whole: bool = False) -> bool:
        """Check a post code against one level of the regex tree.

        The country level must cover the whole post code; subdivision
        expressions only constrain a prefix.
        """
        if not node.regex:
            return True
        pattern = compile_post_code_pattern(node.regex)
        if whole:
            return pattern.fullmatch(post_code) is not None
        return pattern.search(post_code) is not None

    def validate(self, address: Address) -> ValidationResult:
        """Validate the post code.

        Args:
            address: Address to validate.

        Returns:
            ValidationResult with an invalid_post_code error on mismatch.
        """
        result = ValidationResult(is_valid=True)
        if not self.applies_to(address):
            return result
        post_code = address.post_code
        root = self._data_source.get_country(address.country).post_code_regex

        if not post_code.strip() or not root.regex:
            return result

        node: PostCodeRegex | None = root
        path = (address.administrative_area, address.locality, address.dependent_locality)

        for subdivision_id in (None, *path):
            if subdivision_id is not None:
                node = node.get(subdivision_id) if node is not None else None
            if node is None:
                break
            if not self._matches(node, post_code, whole=subdivision_id is None):
                _report(
                    result,
                    RyanDataAddressError.invalid_post_code(address.country, post_code),
                    post_code,
                )
                break

        return result


def create_default_validators(data_source: MetadataSourceProtocol) -> CompositeValidator[Address]:
    """Create the default address validation pipeline.

    Uses ValidatorPipelineBuilder to construct the pipeline: the country
    check first, then the field, subdivision and post code checks.

    Args:
        data_source: Metadata source for validation lookups.

    Returns:
        CompositeValidator with default validators configured.
    """
    builder: ValidatorPipelineBuilder[Address] = ValidatorPipelineBuilder("address_validation")

    builder.add(CountryCodeValidator(data_source))
    builder.add(RequiredFieldsValidator(data_source))
    builder.add(AllowedFieldsValidator(data_source))
    builder.add(SubdivisionValidator(data_source))
    builder.add(PostCodeValidator(data_source))

    return builder.build()


def validate(
    address: Address, source: MetadataSourceProtocol | None = None
) -> RyanDataValidationError | None:
    """Validate an address against its country's metadata.

    Args:
        address: Address to validate.
        source: Metadata source. Defaults to the bundled metadata.

    Returns:
        None if the address is valid, otherwise a RyanDataValidationError
        holding every error found.
    """
    if source is None:
        from ryandata_intl_address.data import get_default_metadata_source

        source = get_default_metadata_source()

    return to_validation_error(create_default_validators(source).validate(address), address)


def to_validation_error(
    result: ValidationResult, address: Address
) -> RyanDataValidationError | None:
    """Convert a pipeline result into the aggregate error, or None if valid."""
    if not result.errors:
        return None

    errors = [
        RyanDataAddressError.from_result_error(entry.field, address.country, entry.value)
        for entry in result.errors
    ]
    logger.debug(
        "Address for %r failed validation: %s", address.country, [e.type for e in errors]
    )
    return RyanDataValidationError(
        errors,
        address=address,
        context={"country": address.country},
    )


def is_valid(address: Address, source: MetadataSourceProtocol | None = None) -> bool:
    """Check if an address is valid for its country."""
    return validate(address, source=source) is None
