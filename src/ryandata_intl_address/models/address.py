"""Address model definition."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from ryandata_intl_address.models.enums import AddressField

# Model attribute backing each semantic field
FIELD_ATTRIBUTES: dict[AddressField, str] = {
    AddressField.COUNTRY: "country",
    AddressField.NAME: "name",
    AddressField.ORGANIZATION: "organization",
    AddressField.STREET_ADDRESS: "street_address",
    AddressField.DEPENDENT_LOCALITY: "dependent_locality",
    AddressField.LOCALITY: "locality",
    AddressField.ADMINISTRATIVE_AREA: "administrative_area",
    AddressField.POST_CODE: "post_code",
    AddressField.SORTING_CODE: "sorting_code",
}


class Address(BaseModel):
    """An international postal address.

    Immutable once constructed. ``administrative_area``, ``locality`` and
    ``dependent_locality`` hold subdivision IDs from the country metadata
    where the country defines them (e.g. "VIC" rather than "Victoria").

    Common alternative input keys are accepted, e.g. ``postal_code``/``zip``
    for ``post_code`` and ``city`` for ``locality``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    country: str = Field(default="", description="ISO 3166-1 alpha-2 country code")
    name: str = Field(default="", description="Recipient name")
    organization: str = Field(default="", description="Organization or company")
    street_address: tuple[str, ...] = Field(
        default=(),
        validation_alias=AliasChoices("street_address", "address_lines", "street"),
        description="Street address lines, in order",
    )
    dependent_locality: str = Field(
        default="",
        validation_alias=AliasChoices("dependent_locality", "suburb", "district"),
        description="Dependent locality ID or name",
    )
    locality: str = Field(
        default="",
        validation_alias=AliasChoices("locality", "city", "town"),
        description="Locality ID or name",
    )
    administrative_area: str = Field(
        default="",
        validation_alias=AliasChoices("administrative_area", "state", "province", "region"),
        description="Administrative area ID",
    )
    post_code: str = Field(
        default="",
        validation_alias=AliasChoices("post_code", "postal_code", "postcode", "zip", "zip_code"),
        description="Post code",
    )
    sorting_code: str = Field(default="", description="Sorting code (e.g. French CEDEX)")

    @field_validator("country")
    @classmethod
    def _upper_country(cls, value: str) -> str:
        return value.upper()

    @field_validator("street_address", mode="before")
    @classmethod
    def _coerce_street_address(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, str):
            return (value,)
        return value

    def value_for(self, field: AddressField) -> str | tuple[str, ...]:
        """Raw value of a field."""
        return getattr(self, FIELD_ATTRIBUTES[field])  # type: ignore[no-any-return]

    def has_value(self, field: AddressField) -> bool:
        """True if the field holds any value (street address: at least one line)."""
        return len(self.value_for(field)) > 0

    def is_blank(self, field: AddressField) -> bool:
        """True if the field is empty once whitespace is trimmed."""
        value = self.value_for(field)
        if isinstance(value, tuple):
            return all(not line.strip() for line in value)
        return not value.strip()

    def is_zero(self) -> bool:
        """True if no field holds a value."""
        return not any(self.has_value(field) for field in AddressField)

    def populated_fields(self) -> list[AddressField]:
        """Fields holding a value, in declaration order."""
        return [field for field in AddressField if self.has_value(field)]

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary keyed by attribute name."""
        data = self.model_dump()
        data["street_address"] = list(self.street_address)
        return data
