"""ryandata-intl-address: International postal address validation and formatting.

This package validates and formats addresses for every country using a
bundled, per-country metadata table:
- Required and allowed fields per country
- Administrative area / locality / dependent locality hierarchies
- Post code patterns, refined by subdivision
- Country address formats, with latinized variants
- Zones of territories for shipping or tax rules

Quick Start:
    >>> from ryandata_intl_address import AddressService
    >>> service = AddressService()
    >>> address = service.build_address(
    ...     country="AU",
    ...     street_address=["525 Collins Street"],
    ...     locality="Melbourne",
    ...     administrative_area="VIC",
    ...     post_code="3000",
    ... )
    >>> service.validate(address) is None
    True
    >>> print(service.format(address, "en"))
    525 Collins Street
    Melbourne Victoria 3000
    Australia

    # Build and validate in one step
    >>> from ryandata_intl_address import new_valid_address, with_country, with_post_code
    >>> address, error = new_valid_address(with_country("AU"), with_post_code("VIC 3000"))
    >>> [kind.value for kind in error.kinds]
    ['missing_required_fields', 'invalid_post_code']
"""

from __future__ import annotations  # noqa: I001

# Import order is intentional to avoid circular imports - do not auto-fix
from ryandata_intl_address.core import (
    PluginFactory,
    RyanDataError,
    RyanDataMetadataError,
    ValidationResult,
)
from ryandata_intl_address.models import (
    ADDRESS_FIELDS,
    PACKAGE_NAME,
    Address,
    AddressBuilder,
    AddressErrorType,
    AddressField,
    AddressFieldName,
    AdministrativeArea,
    CountryListItem,
    CountryMetadata,
    DependentLocality,
    Locality,
    PostCodeRegex,
    RyanDataAddressError,
    RyanDataValidationError,
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
from ryandata_intl_address.localization import BabelNameLocalizer, DefaultCollator
from ryandata_intl_address.data import (
    BaseMetadataSource,
    JSONMetadataSource,
    MetadataSourceFactory,
    get_country,
    get_default_metadata_source,
    has_country,
    list_countries,
)
from ryandata_intl_address.validation import (
    create_default_validators,
    is_valid,
)
from ryandata_intl_address.formatting import (
    DefaultFormatter,
    FormatTemplateError,
    OutputFactory,
    PostalLabelFormatter,
    compile_format,
)
from ryandata_intl_address.zones import (
    ExactMatcher,
    PostCodeRange,
    RegexMatcher,
    Territory,
    Zone,
)
from ryandata_intl_address.protocols import (
    CollatorProtocol,
    MetadataSourceProtocol,
    NameLocalizerProtocol,
    OutputProtocol,
    PostCodeMatcherProtocol,
)
from ryandata_intl_address.service import (
    AddressService,
    format_address,
    format_postal_label,
    get_default_service,
    validate,
)

__version__ = "0.1.0"
__package_name__ = "ryandata-intl-address"

__all__ = [
    # Version
    "__version__",
    "__package_name__",
    # Main service
    "AddressService",
    "get_default_service",
    "validate",
    "is_valid",
    "format_address",
    "format_postal_label",
    # Models
    "Address",
    "AddressBuilder",
    "AddressField",
    "AddressFieldName",
    "ADDRESS_FIELDS",
    "AdministrativeArea",
    "CountryListItem",
    "CountryMetadata",
    "DependentLocality",
    "Locality",
    "PostCodeRegex",
    # Builder options
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
    # Errors
    "PACKAGE_NAME",
    "AddressErrorType",
    "RyanDataError",
    "RyanDataAddressError",
    "RyanDataMetadataError",
    "RyanDataValidationError",
    "FormatTemplateError",
    # Metadata
    "BaseMetadataSource",
    "JSONMetadataSource",
    "MetadataSourceFactory",
    "get_country",
    "get_default_metadata_source",
    "has_country",
    "list_countries",
    # Localization
    "BabelNameLocalizer",
    "DefaultCollator",
    # Validation
    "ValidationResult",
    "create_default_validators",
    # Formatting
    "DefaultFormatter",
    "PostalLabelFormatter",
    "OutputFactory",
    "compile_format",
    # Zones
    "ExactMatcher",
    "PostCodeRange",
    "RegexMatcher",
    "Territory",
    "Zone",
    # Protocols
    "CollatorProtocol",
    "MetadataSourceProtocol",
    "NameLocalizerProtocol",
    "OutputProtocol",
    "PostCodeMatcherProtocol",
    # Extensibility
    "PluginFactory",
]
