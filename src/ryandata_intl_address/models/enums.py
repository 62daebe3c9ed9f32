"""Address field enumerations and constants."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum


class AddressField(str, Enum):
    """Enumeration of the semantic address fields.

    Each member has a format-token ``key`` used by the address format strings
    (``%N``, ``%A``, ...). The key is separate from the member value.
    """

    COUNTRY = "Country"
    NAME = "Name"
    ORGANIZATION = "Organization"
    STREET_ADDRESS = "StreetAddress"
    DEPENDENT_LOCALITY = "DependentLocality"
    LOCALITY = "Locality"
    ADMINISTRATIVE_AREA = "AdministrativeArea"
    POST_CODE = "PostCode"
    SORTING_CODE = "SortingCode"

    @property
    def key(self) -> str:
        """Format-token key for this field."""
        return _FIELD_KEYS[self]

    @classmethod
    def from_key(cls, key: str) -> AddressField:
        """Look up a field by its format-token key.

        Raises:
            ValueError: If no field uses ``key``.
        """
        try:
            return _KEY_FIELDS[key]
        except KeyError:
            raise ValueError(f"Unknown address field key: {key!r}") from None


_FIELD_KEYS: dict[AddressField, str] = {
    AddressField.COUNTRY: "country",
    AddressField.NAME: "N",
    AddressField.ORGANIZATION: "O",
    AddressField.STREET_ADDRESS: "A",
    AddressField.DEPENDENT_LOCALITY: "D",
    AddressField.LOCALITY: "C",
    AddressField.ADMINISTRATIVE_AREA: "S",
    AddressField.POST_CODE: "Z",
    AddressField.SORTING_CODE: "X",
}

_KEY_FIELDS: dict[str, AddressField] = {key: field for field, key in _FIELD_KEYS.items()}


class AddressFieldName(str, Enum):
    """Locale-specific label for a field (e.g. "state" vs "province")."""

    AREA = "area"
    CITY = "city"
    COUNTY = "county"
    DEPARTMENT = "department"
    DISTRICT = "district"
    DO_SI = "do_si"
    EIRCODE = "eircode"
    EMIRATE = "emirate"
    ISLAND = "island"
    NEIGHBORHOOD = "neighborhood"
    OBLAST = "oblast"
    PIN_CODE = "pin"
    PARISH = "parish"
    POST_TOWN = "post_town"
    POSTAL_CODE = "postal"
    PREFECTURE = "prefecture"
    PROVINCE = "province"
    STATE = "state"
    SUBURB = "suburb"
    TOWNLAND = "townland"
    VILLAGE_TOWNSHIP = "village_township"
    ZIP_CODE = "zip"


# All field values in declaration order
ADDRESS_FIELDS: list[str] = [f.value for f in AddressField]


def parse_field_keys(keys: str | Iterable[str | AddressField]) -> frozenset[AddressField]:
    """Convert field keys into a set of fields.

    Accepts a key-letter string such as ``"ACSZ"`` or an iterable of fields,
    field values or keys. Letters that are not field keys (like the ``n`` line
    break) are ignored in the string form.

    Args:
        keys: Key letters or field identifiers.

    Returns:
        Frozen set of fields.
    """
    if isinstance(keys, str):
        return frozenset(_KEY_FIELDS[char] for char in keys if char in _KEY_FIELDS)

    fields: set[AddressField] = set()
    for item in keys:
        if isinstance(item, AddressField):
            fields.add(item)
        elif item in _KEY_FIELDS:
            fields.add(_KEY_FIELDS[item])
        else:
            fields.add(AddressField(item))
    return frozenset(fields)


def sort_fields(fields: Iterable[AddressField]) -> list[AddressField]:
    """Sort fields by their value name."""
    return sorted(fields, key=lambda f: f.value)


def order_fields(fields: Iterable[AddressField]) -> list[AddressField]:
    """Order fields by declaration order."""
    wanted = set(fields)
    return [f for f in AddressField if f in wanted]
