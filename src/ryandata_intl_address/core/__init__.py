"""RyanData International Address Core - reusable, domain-agnostic utilities.

Usage:
    from ryandata_intl_address.core import (
        # Validation (from abstract_validation_base)
        ValidationResult,
        BaseValidator,
        CompositeValidator,
        ValidatorPipelineBuilder,
        # Errors
        RyanDataError,
        RyanDataMetadataError,
        # Factory
        PluginFactory,
    )
"""

from __future__ import annotations

from abstract_validation_base import ValidationResult

from ryandata_intl_address.core.errors import RyanDataError, RyanDataMetadataError
from ryandata_intl_address.core.factory import PluginFactory
from ryandata_intl_address.core.validation import (
    BaseValidator,
    CompositeValidator,
    ValidatorPipelineBuilder,
    ValidatorProtocol,
)

__all__ = [
    # Errors
    "RyanDataError",
    "RyanDataMetadataError",
    # Results (from abstract_validation_base)
    "ValidationResult",
    # Validation (from abstract_validation_base)
    "BaseValidator",
    "CompositeValidator",
    "ValidatorProtocol",
    "ValidatorPipelineBuilder",
    # Factory
    "PluginFactory",
]
