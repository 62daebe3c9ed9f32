"""Address format templates.

Country formats use a small token language:

- ``%N %O %A %D %C %S %Z %X`` insert a field (see ``AddressField.key``),
- ``%country`` inserts the country name,
- ``%n`` is a line break,
- anything else is literal text.

A format is compiled once into a :class:`FormatTemplate` and rendered
through an output mode (plain text, HTML).
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import TYPE_CHECKING, Protocol

from ryandata_intl_address.core.errors import RyanDataMetadataError
from ryandata_intl_address.models import AddressField

if TYPE_CHECKING:
    from ryandata_intl_address.protocols import OutputProtocol

_TOKEN_RE = re.compile(r"%(country|[NOADCSZXn])?")


class FormatTemplateError(RyanDataMetadataError):
    """Raised when an address format contains an unknown token."""


class TokenKind(str, Enum):
    """Kinds of format tokens."""

    LITERAL = "literal"
    FIELD = "field"
    NEWLINE = "newline"


@dataclass(frozen=True)
class Token:
    """One element of a compiled format."""

    kind: TokenKind
    text: str = ""
    field: AddressField | None = None


class FieldValues(Protocol):
    """Values a template is rendered with."""

    @property
    def street_address(self) -> Sequence[str]: ...

    def value_for(self, field: AddressField) -> str: ...


@dataclass(frozen=True)
class FormatTemplate:
    """A compiled address format."""

    format: str
    tokens: tuple[Token, ...]

    @property
    def fields(self) -> list[AddressField]:
        """Fields referenced by the format, in order of appearance."""
        return [t.field for t in self.tokens if t.field is not None]

    def render(
        self,
        values: FieldValues,
        output: OutputProtocol,
        upper: frozenset[AddressField] = frozenset(),
    ) -> str:
        """Render the template.

        Args:
            values: Field values to insert.
            output: Output mode that renders each token.
            upper: Fields whose values are upper-cased.

        Returns:
            The rendered, post-processed address.
        """
        parts: list[str] = []

        for token in self.tokens:
            if token.kind is TokenKind.LITERAL:
                parts.append(output.literal(token.text))
            elif token.kind is TokenKind.NEWLINE:
                parts.append(output.newline())
            elif token.field is AddressField.STREET_ADDRESS:
                lines = list(values.street_address)
                if token.field in upper:
                    lines = [line.upper() for line in lines]
                parts.append(output.render_street_address(lines))
            elif token.field is not None:
                value = values.value_for(token.field)
                if token.field in upper:
                    value = value.upper()
                parts.append(output.render_field(token.field, value))

        return output.finalize("".join(parts))


@lru_cache(maxsize=512)
def compile_format(address_format: str) -> FormatTemplate:
    """Compile an address format into tokens.

    ``%country`` is recognized before the single-letter tokens.

    Args:
        address_format: Address format string, e.g. ``"%N%n%O%n%A%n%C %S %Z"``.

    Returns:
        The compiled template.

    Raises:
        FormatTemplateError: If a ``%`` does not start a known token.
    """
    tokens: list[Token] = []
    position = 0

    for match in _TOKEN_RE.finditer(address_format):
        if match.start() > position:
            tokens.append(Token(TokenKind.LITERAL, address_format[position : match.start()]))
        position = match.end()

        key = match.group(1)
        if key is None:
            raise FormatTemplateError(
                f"Unknown token at position {match.start()} in address format {address_format!r}",
                context={"format": address_format, "position": match.start()},
            )
        if key == "n":
            tokens.append(Token(TokenKind.NEWLINE))
        else:
            tokens.append(Token(TokenKind.FIELD, match.group(0), AddressField.from_key(key)))

    if position < len(address_format):
        tokens.append(Token(TokenKind.LITERAL, address_format[position:]))

    return FormatTemplate(format=address_format, tokens=tuple(tokens))
