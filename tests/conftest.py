"""Shared pytest fixtures and Hypothesis configuration.

This module provides pytest fixtures and configures Hypothesis profiles
for the test suite.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from hypothesis import Verbosity, settings

from ryandata_intl_address.data import JSONMetadataSource, get_default_metadata_source
from ryandata_intl_address.service import AddressService

# Configure Hypothesis settings for the test suite
settings.register_profile("ci", max_examples=200, deadline=None)
settings.register_profile("dev", max_examples=50, deadline=None)
settings.register_profile("debug", max_examples=10, deadline=None, verbosity=Verbosity.verbose)


# Smallest table a metadata source accepts: the defaults record plus one country
MINIMAL_COUNTRIES: dict[str, Any] = {
    "ZZ": {
        "id": "ZZ",
        "default_language": "en",
        "format": "%N%n%O%n%A%n%C",
        "required_fields": "AC",
        "upper_fields": "C",
        "administrative_area_name_type": "province",
        "locality_name_type": "city",
        "dependent_locality_name_type": "suburb",
        "post_code_name_type": "postal",
    },
    "AQ": {
        "id": "AQ",
        "default_language": "en",
        "format": "%N%n%O%n%A%n%C %S %Z",
        "required_fields": "ACSZ",
        "post_code_regex": {"regex": "^(\\d{4})$", "subdivisions": {"N": {"regex": "^1"}}},
        "administrative_areas": {
            "en": [{"id": "N", "name": "North", "postal_key": "N"}],
            "fr": [{"id": "N", "name": "Nord", "postal_key": "N"}],
        },
    },
}


@pytest.fixture(scope="session")
def source() -> JSONMetadataSource:
    """The bundled metadata source."""
    return get_default_metadata_source()


@pytest.fixture(scope="session")
def service() -> AddressService:
    """Service backed by the bundled metadata with plain output."""
    return AddressService(data_source=get_default_metadata_source(), output="plain")


@pytest.fixture
def write_metadata(tmp_path: Path) -> Callable[[Any], Path]:
    """Write a metadata document to a temporary JSON file and return its path."""

    def _write(payload: Any, name: str = "countries.json") -> Path:
        path = tmp_path / name
        if isinstance(payload, str):
            path.write_text(payload, encoding="utf-8")
        else:
            path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
        return path

    return _write
