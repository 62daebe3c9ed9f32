import pytest

from ryandata_intl_address.data import JSONMetadataSource, MetadataSourceFactory
from ryandata_intl_address.formatting import HTMLOutput, OutputFactory, PlainOutput


def test_output_factory_default_and_error() -> None:
    """OutputFactory should provide default plain output and raise on unknown."""
    assert isinstance(OutputFactory.create(), PlainOutput)
    with pytest.raises(ValueError):
        OutputFactory.create("unknown-type")


def test_metadata_source_factory_default_and_error() -> None:
    """MetadataSourceFactory should provide default json source and raise on unknown."""
    source = MetadataSourceFactory.create()
    assert isinstance(source, JSONMetadataSource)
    with pytest.raises(ValueError, match="Available types: json"):
        MetadataSourceFactory.create("unknown-type")


def test_metadata_source_factory_passes_arguments(tmp_path) -> None:
    """Constructor arguments should reach the created source."""
    path = tmp_path / "countries.json"
    source = MetadataSourceFactory.create("JSON", json_path=path)
    assert source.description == str(path)


def test_register_custom_output() -> None:
    """Custom output modes can be registered and removed."""

    class ShoutingOutput(HTMLOutput):
        def literal(self, text: str) -> str:
            return text.upper()

    OutputFactory.register("shouting", ShoutingOutput)
    try:
        assert "shouting" in OutputFactory.available_types()
        assert isinstance(OutputFactory.create("Shouting"), ShoutingOutput)
    finally:
        OutputFactory.unregister("shouting")

    assert "shouting" not in OutputFactory.available_types()


def test_defaults_return_after_clearing_registry() -> None:
    """Built-in output modes are registered again on the next lookup."""
    OutputFactory.clear_registry()
    assert OutputFactory.available_types() == ["html", "plain"]
    assert OutputFactory.get_class("HTML") is HTMLOutput
