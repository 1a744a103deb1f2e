"""Query descriptors, parameter binding and placeholder rewriting."""

from .compiler import (
    UNSUPPORTED_COMMANDS,
    CodegenError,
    QueryCompiler,
    UnsupportedCommandError,
)
from .models import Params, Query, QueryValue
from .placeholders import rewrite_placeholders

__all__ = [
    "UNSUPPORTED_COMMANDS",
    "CodegenError",
    "Params",
    "Query",
    "QueryCompiler",
    "QueryValue",
    "UnsupportedCommandError",
    "rewrite_placeholders",
]
