"""Generic error classes with package identification.

Recoverable input errors derive from ``RyanDataError`` (a ``PydanticCustomError``)
so they carry a machine-readable type and context. Corrupt built-in data is
reported with ``RyanDataMetadataError``, which callers are not expected to handle.
"""

from __future__ import annotations

from typing import Any

from pydantic_core import PydanticCustomError


class RyanDataError(PydanticCustomError):
    """Pydantic custom error tagged with the package that raised it.

    Instances are built through :meth:`create` so the ``package`` key is always
    present in the context.
    """

    @classmethod
    def create(
        cls,
        package_name: str,
        error_type: str,
        message_template: str,
        context: dict[str, Any] | None = None,
    ) -> RyanDataError:
        """Build an error whose context includes the package identifier.

        Args:
            package_name: Identifier of the package raising the error.
            error_type: Type/category of the error.
            message_template: Error message (can include {placeholders}).
            context: Additional context merged into the error context.

        Returns:
            New error instance of ``cls``.
        """
        ctx = {"package": package_name, **(context or {})}
        return cls(error_type, message_template, ctx)

    @property
    def package(self) -> str | None:
        """Package that raised the error."""
        return (self.context or {}).get("package")


class RyanDataMetadataError(RuntimeError):
    """Fatal error raised when built-in or configured metadata is unusable.

    Wraps the underlying ``pydantic.ValidationError``, ``re.error`` or
    ``json.JSONDecodeError`` and keeps it available as ``original_error``.
    """

    def __init__(
        self,
        message: str,
        original_error: Exception | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        self.original_error = original_error
        self.context = dict(context or {})

        if original_error is not None:
            message = f"{message}: {original_error}"

        super().__init__(message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.args[0]!r}, context={self.context})"
