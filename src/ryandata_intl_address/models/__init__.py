"""Address models package.

This package contains the address value type, its builder, the country
metadata tree and the error classes.
"""

from __future__ import annotations

from ryandata_intl_address.core import ValidationResult
from ryandata_intl_address.models.address import FIELD_ATTRIBUTES, Address
from ryandata_intl_address.models.builder import (
    AddressBuilder,
    AddressOption,
    new_address,
    new_valid_address,
    with_administrative_area,
    with_country,
    with_dependent_locality,
    with_locality,
    with_name,
    with_organization,
    with_post_code,
    with_sorting_code,
    with_street_address,
)
from ryandata_intl_address.models.enums import (
    ADDRESS_FIELDS,
    AddressField,
    AddressFieldName,
    order_fields,
    parse_field_keys,
    sort_fields,
)

# Import from submodules - order matters for avoiding circular imports
from ryandata_intl_address.models.errors import (
    PACKAGE_NAME,
    AddressErrorType,
    RyanDataAddressError,
    RyanDataValidationError,
)
from ryandata_intl_address.models.metadata import (
    MAX_SUBDIVISION_DEPTH,
    AdministrativeArea,
    CountryMetadata,
    DependentLocality,
    Locality,
    PostCodeRegex,
)
from ryandata_intl_address.models.results import CountryListItem

__all__ = [
    # Errors
    "PACKAGE_NAME",
    "AddressErrorType",
    "RyanDataAddressError",
    "RyanDataValidationError",
    # Enums and constants
    "AddressField",
    "AddressFieldName",
    "ADDRESS_FIELDS",
    "parse_field_keys",
    "sort_fields",
    "order_fields",
    # Address model
    "Address",
    "FIELD_ATTRIBUTES",
    # Metadata
    "MAX_SUBDIVISION_DEPTH",
    "AdministrativeArea",
    "CountryMetadata",
    "DependentLocality",
    "Locality",
    "PostCodeRegex",
    # Results
    "CountryListItem",
    # Builder
    "AddressBuilder",
    "AddressOption",
    "new_address",
    "new_valid_address",
    "with_administrative_area",
    "with_country",
    "with_dependent_locality",
    "with_locality",
    "with_name",
    "with_organization",
    "with_post_code",
    "with_sorting_code",
    "with_street_address",
    # Re-exported from core
    "ValidationResult",
]
