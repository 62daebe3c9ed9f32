"""Output modes for formatted addresses."""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import ClassVar

from ryandata_intl_address.core.factory import PluginFactory
from ryandata_intl_address.models import AddressField
from ryandata_intl_address.protocols import OutputProtocol

_COLLAPSE_WHITESPACE_RE = re.compile(r"\s{2,}")
_COLLAPSE_BR_RE = re.compile(r"(?:\s|<br>){2,}")
_HTML_ESCAPES = str.maketrans(
    {"&": "&amp;", "<": "&lt;", ">": "&gt;", "'": "&#39;", '"': "&#34;"}
)


def escape_html(value: str) -> str:
    """Escape the five HTML special characters using numeric quote entities."""
    return value.translate(_HTML_ESCAPES)


class PlainOutput:
    """Plain text output. Lines are separated by ``\\n`` and nothing is escaped."""

    def render_field(self, field: AddressField, value: str) -> str:
        return value

    def render_street_address(self, lines: Sequence[str]) -> str:
        return "\n".join(lines)

    def newline(self) -> str:
        return "\n"

    def literal(self, text: str) -> str:
        return text

    def finalize(self, text: str) -> str:
        """Trim the text and collapse runs of whitespace into one line break."""
        return _COLLAPSE_WHITESPACE_RE.sub("\n", text.strip())


class HTMLOutput(PlainOutput):
    """HTML fragment output.

    Each field is wrapped in a ``<span>`` whose class names the field, values
    are escaped, and lines are separated by ``<br>``.
    """

    CSS_CLASSES: ClassVar[dict[AddressField, str]] = {
        AddressField.COUNTRY: "country",
        AddressField.NAME: "name",
        AddressField.ORGANIZATION: "organization",
        AddressField.DEPENDENT_LOCALITY: "dependent-locality",
        AddressField.LOCALITY: "locality",
        AddressField.ADMINISTRATIVE_AREA: "administrative-area",
        AddressField.POST_CODE: "post-code",
        AddressField.SORTING_CODE: "sorting-code",
    }

    def render_field(self, field: AddressField, value: str) -> str:
        if not value:
            return ""
        return f'<span class="{self.CSS_CLASSES[field]}">{escape_html(value)}</span>'

    def render_street_address(self, lines: Sequence[str]) -> str:
        return "<br>".join(
            f'<span class="address-line-{number}">{escape_html(line)}</span>'
            for number, line in enumerate(lines, start=1)
        )

    def newline(self) -> str:
        return "<br>"

    def finalize(self, text: str) -> str:
        """Collapse whitespace, then collapse runs of line breaks into one ``<br>``."""
        return _COLLAPSE_BR_RE.sub("<br>", super().finalize(text))


class OutputFactory(PluginFactory[OutputProtocol]):
    """Factory for creating output mode instances.

    Example:
        >>> output = OutputFactory.create("html")

        # Register custom output
        >>> OutputFactory.register("markdown", MarkdownOutput)
        >>> output = OutputFactory.create("markdown")
    """

    _registry: ClassVar[dict[str, type[OutputProtocol]]] = {}
    _default_type: ClassVar[str] = "plain"
    _entity_name: ClassVar[str] = "output"

    @classmethod
    def _ensure_defaults_registered(cls) -> None:
        """Ensure default output modes are registered."""
        cls._registry.setdefault("plain", PlainOutput)
        cls._registry.setdefault("html", HTMLOutput)
