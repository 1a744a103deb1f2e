"""Generation entry point for sqlgen."""

from .generator import (
    GENERATED_BY,
    CodeGenerator,
    GenerationResult,
    generated_header,
)

__all__ = [
    "GENERATED_BY",
    "CodeGenerator",
    "GenerationResult",
    "generated_header",
]
