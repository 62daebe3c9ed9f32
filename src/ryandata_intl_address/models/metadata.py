"""Country metadata models.

The metadata for a country is an immutable tree:

    CountryMetadata
    ├── post_code_regex: PostCodeRegex (country → area → locality → dependent locality)
    └── administrative_areas: {language: [AdministrativeArea → Locality → DependentLocality]}

Field sets are stored as ``frozenset[AddressField]`` and may be supplied as
key-letter strings (``"ACSZ"``) when loading from JSON.
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ryandata_intl_address.models.enums import (
    AddressField,
    AddressFieldName,
    parse_field_keys,
    sort_fields,
)

# Levels below the country: administrative area, locality, dependent locality
MAX_SUBDIVISION_DEPTH = 3

_FORMAT_TOKEN_RE = re.compile(r"%([NOADCSZX])")


class DependentLocality(BaseModel):
    """Dependent locality (suburb, district, neighborhood...)."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""


class Locality(BaseModel):
    """Locality (city or town) and its dependent localities."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    dependent_localities: tuple[DependentLocality, ...] = ()

    def find_dependent_locality(self, dependent_locality_id: str) -> DependentLocality | None:
        """Find a child dependent locality by ID."""
        return next((d for d in self.dependent_localities if d.id == dependent_locality_id), None)


class AdministrativeArea(BaseModel):
    """Top-level subdivision (state, province, prefecture...).

    ``postal_key`` holds the postal abbreviation when the postal service uses
    one (e.g. "VIC" for Victoria).
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    postal_key: str = ""
    localities: tuple[Locality, ...] = ()

    def find_locality(self, locality_id: str) -> Locality | None:
        """Find a child locality by ID."""
        return next((loc for loc in self.localities if loc.id == locality_id), None)


class PostCodeRegex(BaseModel):
    """Post-code regular expression for one level of the subdivision tree.

    ``subdivisions`` maps a subdivision ID at the next level down to that
    subdivision's own expression. An empty ``regex`` places no constraint.
    """

    model_config = ConfigDict(frozen=True)

    regex: str = ""
    subdivisions: dict[str, PostCodeRegex] = Field(default_factory=dict)

    @field_validator("regex")
    @classmethod
    def _check_regex(cls, value: str) -> str:
        try:
            re.compile(value, re.ASCII)
        except re.error as exc:
            raise ValueError(f"invalid post code regex {value!r}: {exc}") from exc
        return value

    @model_validator(mode="after")
    def _check_depth(self) -> PostCodeRegex:
        if self.depth() > MAX_SUBDIVISION_DEPTH:
            raise ValueError(
                f"post code regex tree is nested deeper than {MAX_SUBDIVISION_DEPTH} levels"
            )
        return self

    def depth(self) -> int:
        """Number of subdivision levels below this node."""
        if not self.subdivisions:
            return 0
        return 1 + max(child.depth() for child in self.subdivisions.values())

    def get(self, subdivision_id: str) -> PostCodeRegex | None:
        """Expression for a subdivision at the next level, if one is defined."""
        return self.subdivisions.get(subdivision_id)


class CountryMetadata(BaseModel):
    """Address metadata for a single country."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = ""
    default_language: str = ""
    format: str = ""
    latinized_format: str = ""

    administrative_area_name_type: AddressFieldName | None = None
    locality_name_type: AddressFieldName | None = None
    dependent_locality_name_type: AddressFieldName | None = None
    post_code_name_type: AddressFieldName | None = None

    allowed_fields: frozenset[AddressField] = frozenset()
    required_fields: frozenset[AddressField] = frozenset()
    upper_fields: frozenset[AddressField] = frozenset()

    post_code_prefix: str = ""
    post_code_regex: PostCodeRegex = Field(default_factory=PostCodeRegex)
    administrative_areas: dict[str, tuple[AdministrativeArea, ...]] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _derive_allowed_fields(cls, data: Any) -> Any:
        """Derive the allowed fields from the format tokens when not given."""
        if isinstance(data, dict) and "allowed_fields" not in data and data.get("format"):
            data = {
                **data,
                "allowed_fields": "".join(_FORMAT_TOKEN_RE.findall(data["format"])),
            }
        return data

    @field_validator("allowed_fields", "required_fields", "upper_fields", mode="before")
    @classmethod
    def _parse_field_set(cls, value: Any) -> Any:
        if value is None:
            return frozenset()
        if isinstance(value, str) or not isinstance(value, frozenset):
            return parse_field_keys(value)
        return value

    @field_validator("id")
    @classmethod
    def _upper_id(cls, value: str) -> str:
        return value.upper()

    @model_validator(mode="after")
    def _check_translations(self) -> CountryMetadata:
        """Every language must relabel the same set of administrative areas."""
        id_sets = {
            language: frozenset(area.id for area in areas)
            for language, areas in self.administrative_areas.items()
        }
        if len(set(id_sets.values())) > 1:
            raise ValueError(
                f"administrative areas for {self.id or 'country'} differ between languages: "
                f"{sorted(id_sets)}"
            )
        return self

    def administrative_areas_for(self, language: str) -> tuple[AdministrativeArea, ...]:
        """Administrative areas for a language (empty when not translated)."""
        return self.administrative_areas.get(language, ())

    def find_administrative_area(
        self, administrative_area_id: str, language: str
    ) -> AdministrativeArea | None:
        """Find an administrative area by ID in a language's list."""
        return next(
            (a for a in self.administrative_areas_for(language) if a.id == administrative_area_id),
            None,
        )

    def sorted_required_fields(self) -> list[AddressField]:
        """Required fields sorted by name."""
        return sort_fields(self.required_fields)

    def sorted_allowed_fields(self) -> list[AddressField]:
        """Allowed fields sorted by name."""
        return sort_fields(self.allowed_fields)

    def sorted_upper_fields(self) -> list[AddressField]:
        """Upper-cased fields sorted by name."""
        return sort_fields(self.upper_fields)
