"""Address validation base classes.

Re-exports the generic BaseValidator from core and provides an
address-specific type alias plus a base for validators that consult the
country metadata.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ryandata_intl_address.core.validation import BaseValidator
from ryandata_intl_address.protocols import MetadataSourceProtocol

if TYPE_CHECKING:
    from ryandata_intl_address.models import Address

__all__ = ["BaseValidator", "AddressValidator", "MetadataValidator"]

# Address-specific type alias for convenience (uses forward reference to avoid circular import)
AddressValidator = BaseValidator["Address"]


class MetadataValidator(AddressValidator):
    """Address validator backed by a metadata source."""

    def __init__(self, data_source: MetadataSourceProtocol) -> None:
        """Initialize the validator.

        Args:
            data_source: Metadata source for country lookups.
        """
        self._data_source = data_source

    @property
    def data_source(self) -> MetadataSourceProtocol:
        """Metadata source used for lookups."""
        return self._data_source

    def applies_to(self, address: Address) -> bool:
        """True if the address's country has metadata to check against."""
        return self._data_source.has_country(address.country)
