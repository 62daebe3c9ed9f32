from __future__ import annotations

from typing import ClassVar

from ryandata_intl_address.core.factory import PluginFactory
from ryandata_intl_address.protocols import MetadataSourceProtocol


class MetadataSourceFactory(PluginFactory[MetadataSourceProtocol]):
    """Factory for creating metadata source instances.

    Supports registration of custom metadata source types and creation
    of metadata sources by type name.

    Example:
        >>> source = MetadataSourceFactory.create("json")
        >>> source = MetadataSourceFactory.create("json", json_path="/path/to/countries.json")

        # Register custom source
        >>> MetadataSourceFactory.register("sqlite", SQLiteMetadataSource)
        >>> source = MetadataSourceFactory.create("sqlite", db_path="countries.db")
    """

    _registry: ClassVar[dict[str, type[MetadataSourceProtocol]]] = {}
    _default_type: ClassVar[str] = "json"
    _entity_name: ClassVar[str] = "metadata source"

    @classmethod
    def _ensure_defaults_registered(cls) -> None:
        """Ensure default metadata sources are registered."""
        if "json" not in cls._registry:
            from ryandata_intl_address.data.json_source import JSONMetadataSource

            cls._registry["json"] = JSONMetadataSource
