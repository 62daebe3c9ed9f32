"""Address validation implementations.

This module provides the validators that check an address against its
country's metadata, and the pipeline that runs them.
"""

from ryandata_intl_address.core.validation import (
    CompositeValidator,
    ValidatorPipelineBuilder,
)
from ryandata_intl_address.validation.base import (
    AddressValidator,
    BaseValidator,
    MetadataValidator,
)
from ryandata_intl_address.validation.validators import (
    AllowedFieldsValidator,
    CountryCodeValidator,
    PostCodeValidator,
    RequiredFieldsValidator,
    SubdivisionValidator,
    compile_post_code_pattern,
    create_default_validators,
    is_valid,
    to_validation_error,
    validate,
)

__all__ = [
    "AddressValidator",
    "BaseValidator",
    "MetadataValidator",
    "CompositeValidator",
    "ValidatorPipelineBuilder",
    "CountryCodeValidator",
    "RequiredFieldsValidator",
    "AllowedFieldsValidator",
    "SubdivisionValidator",
    "PostCodeValidator",
    "compile_post_code_pattern",
    "create_default_validators",
    "is_valid",
    "to_validation_error",
    "validate",
]
