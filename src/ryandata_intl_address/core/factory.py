"""Generic plugin factory base class.

Provides a registry-backed factory used for metadata sources and output
modes. Subclasses declare the registry, the default type name and how the
built-in implementations get registered.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Generic, TypeVar

T = TypeVar("T")


class PluginFactory(ABC, Generic[T]):
    """Generic factory for creating plugin instances from a registry.

    Subclasses should define:
        - _registry: Class-level dict mapping type names to implementation classes
        - _default_type: The default type name to use when none specified
        - _entity_name: Human-readable name for error messages (e.g., "output", "metadata source")
        - _ensure_defaults_registered(): Method to register default implementations

    Type names are matched case-insensitively.

    Example subclass:
        class OutputFactory(PluginFactory[OutputProtocol]):
            _registry: ClassVar[dict[str, type[OutputProtocol]]] = {}
            _default_type: ClassVar[str] = "plain"
            _entity_name: ClassVar[str] = "output"

            @classmethod
            def _ensure_defaults_registered(cls) -> None:
                cls._registry.setdefault("plain", PlainOutput)
    """

    _registry: ClassVar[dict[str, type[Any]]]
    _default_type: ClassVar[str]
    _entity_name: ClassVar[str]

    @classmethod
    @abstractmethod
    def _ensure_defaults_registered(cls) -> None:
        """Ensure default implementations are registered.

        Called lazily before every registry access so importing the factory
        never pulls in the implementations.
        """
        ...

    @classmethod
    def register(cls, name: str, impl_class: type[T]) -> None:
        """Register an implementation type.

        Args:
            name: Type name for the implementation.
            impl_class: Class implementing the protocol.
        """
        cls._registry[name.lower()] = impl_class

    @classmethod
    def unregister(cls, name: str) -> None:
        """Unregister an implementation type."""
        cls._registry.pop(name.lower(), None)

    @classmethod
    def get_class(cls, name: str | None = None) -> type[T]:
        """Look up the implementation class registered under ``name``.

        Args:
            name: Type name. If None, uses the default type.

        Returns:
            The registered class.

        Raises:
            ValueError: If the type name is not registered.
        """
        cls._ensure_defaults_registered()

        type_name = (name if name is not None else cls._default_type).lower()

        if type_name not in cls._registry:
            available = ", ".join(sorted(cls._registry.keys()))
            raise ValueError(
                f"Unknown {cls._entity_name} type: {type_name}. Available types: {available}"
            )

        return cls._registry[type_name]  # type: ignore[no-any-return]

    @classmethod
    def create(cls, name: str | None = None, **kwargs: Any) -> T:
        """Create an instance of the specified type.

        Args:
            name: Type name to create. If None, uses the default type.
            **kwargs: Arguments to pass to the constructor.

        Returns:
            Instance of the requested type.

        Raises:
            ValueError: If the type name is not registered.
        """
        return cls.get_class(name)(**kwargs)

    @classmethod
    def available_types(cls) -> list[str]:
        """Get the sorted list of registered type names."""
        cls._ensure_defaults_registered()
        return sorted(cls._registry.keys())

    @classmethod
    def clear_registry(cls) -> None:
        """Clear the registry (mainly for testing)."""
        cls._registry.clear()
