"""Constants for the bundled country metadata."""

from __future__ import annotations

# Country record holding the defaults every other country falls back to
FALLBACK_COUNTRY = "ZZ"

# Bundled metadata file inside this package
DATA_PACKAGE = "ryandata_intl_address.data"
DATA_FILE = "countries.json"

# Environment variables
METADATA_PATH_ENV = "RYANDATA_INTL_ADDRESS_METADATA"
OUTPUT_ENV = "RYANDATA_INTL_ADDRESS_OUTPUT"

# CountryMetadata attributes backfilled from the fallback country when unset
NAME_TYPE_ATTRIBUTES: tuple[str, ...] = (
    "administrative_area_name_type",
    "locality_name_type",
    "dependent_locality_name_type",
    "post_code_name_type",
)
FIELD_SET_ATTRIBUTES: tuple[str, ...] = (
    "allowed_fields",
    "required_fields",
    "upper_fields",
)
