"""Catalog and query input models for sqlgen."""

from .models import (
    RESERVED_SCHEMAS,
    Catalog,
    CodeGenRequest,
    Column,
    CommandKind,
    EnumType,
    Identifier,
    KotlinOptions,
    Parameter,
    QueryInput,
    Schema,
    Settings,
    Table,
)
from .sqlalchemy_adapter import catalog_from_metadata

__all__ = [
    "RESERVED_SCHEMAS",
    "Catalog",
    "CodeGenRequest",
    "Column",
    "CommandKind",
    "EnumType",
    "Identifier",
    "KotlinOptions",
    "Parameter",
    "QueryInput",
    "Schema",
    "Settings",
    "Table",
    "catalog_from_metadata",
]
