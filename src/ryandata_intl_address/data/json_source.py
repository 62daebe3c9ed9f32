from __future__ import annotations

import json
import logging
import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Union

from pydantic import ValidationError

from ryandata_intl_address.core.errors import RyanDataMetadataError
from ryandata_intl_address.data.base import BaseMetadataSource
from ryandata_intl_address.data.constants import DATA_FILE, DATA_PACKAGE, METADATA_PATH_ENV
from ryandata_intl_address.models import CountryMetadata

logger = logging.getLogger(__name__)


class JSONMetadataSource(BaseMetadataSource):
    """Metadata source that loads from a JSON file.

    By default, loads from the bundled countries.json file. A custom file can
    be given as ``json_path`` or through the ``RYANDATA_INTL_ADDRESS_METADATA``
    environment variable.

    The file holds ``{"version": ..., "countries": {code: record}}``. A bare
    ``{code: record}`` mapping is accepted too.
    """

    def __init__(
        self,
        json_path: Union[str, Path] | None = None,
        cache_size: int = 512,
    ) -> None:
        """Initialize JSON metadata source.

        Args:
            json_path: Path to a JSON file. If None, uses the environment
                override or the bundled countries.json.
            cache_size: Maximum number of resolved countries to cache.
        """
        if json_path is None:
            env_path = os.getenv(METADATA_PATH_ENV)
            if env_path:
                logger.warning(
                    "Using custom address metadata from %s=%s", METADATA_PATH_ENV, env_path
                )
                json_path = env_path

        self._json_path = Path(json_path) if json_path else None
        self.version = ""

        super().__init__(cache_size=cache_size)

    @property
    def description(self) -> str:
        """Path of the custom file, or the bundled resource name."""
        if self._json_path is not None:
            return str(self._json_path)
        return f"{DATA_PACKAGE}/{DATA_FILE}"

    def _read_payload(self) -> Any:
        """Read and decode the JSON document."""
        try:
            if self._json_path is not None:
                with open(self._json_path, encoding="utf-8") as f:
                    return json.load(f)

            data_file = resources.files(DATA_PACKAGE).joinpath(DATA_FILE)
            with data_file.open("r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise RyanDataMetadataError(
                f"Cannot read address metadata from {self.description}",
                original_error=exc,
                context={"source": self.description},
            ) from exc

    def _load_countries(self) -> dict[str, CountryMetadata]:
        """Load and validate every country record in the file."""
        payload = self._read_payload()
        records = payload.get("countries", payload) if isinstance(payload, dict) else None
        if not isinstance(records, dict):
            raise RyanDataMetadataError(
                f"Address metadata in {self.description} must be a JSON object",
                context={"source": self.description},
            )

        self.version = str(payload.get("version", ""))

        countries: dict[str, CountryMetadata] = {}
        for code, record in records.items():
            country_code = code.upper()
            try:
                countries[country_code] = CountryMetadata.model_validate(
                    {"id": country_code, **record}
                )
            except (ValidationError, TypeError) as exc:
                raise RyanDataMetadataError(
                    f"Invalid address metadata for {country_code}",
                    original_error=exc,
                    context={"source": self.description, "country": country_code},
                ) from exc

        return countries


@lru_cache(maxsize=1)
def get_default_metadata_source() -> JSONMetadataSource:
    """Get the default JSON metadata source singleton.

    Uses lru_cache to ensure only one instance is created.

    Returns:
        Shared JSONMetadataSource instance.
    """
    return JSONMetadataSource()
