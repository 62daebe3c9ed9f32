"""Result classes for metadata listing operations."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CountryListItem:
    """A country code with its display name in some language."""

    code: str
    name: str
