"""Address formatting.

This module provides the format template interpreter, the output modes
and the formatters that render an address for display or postal labels.
"""

from __future__ import annotations

from ryandata_intl_address.formatting.formatters import (
    BaseFormatter,
    DefaultFormatter,
    FormatValues,
    PostalLabelFormatter,
)
from ryandata_intl_address.formatting.outputs import HTMLOutput, OutputFactory, PlainOutput
from ryandata_intl_address.formatting.template import (
    FormatTemplate,
    FormatTemplateError,
    Token,
    TokenKind,
    compile_format,
)

__all__ = [
    # Templates
    "FormatTemplate",
    "FormatTemplateError",
    "Token",
    "TokenKind",
    "compile_format",
    # Outputs
    "HTMLOutput",
    "OutputFactory",
    "PlainOutput",
    # Formatters
    "BaseFormatter",
    "DefaultFormatter",
    "FormatValues",
    "PostalLabelFormatter",
]
