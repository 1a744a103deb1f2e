"""Type descriptors and per-engine type resolution."""

from .descriptor import FALLBACK_TYPE, TypeDescriptor
from .resolver import (
    MYSQL_TYPES,
    POSTGRES_TYPES,
    FallbackTypeResolver,
    MySQLTypeResolver,
    PostgresTypeResolver,
    TypeResolver,
    get_type_resolver,
    register_type_resolver,
)

__all__ = [
    "FALLBACK_TYPE",
    "MYSQL_TYPES",
    "POSTGRES_TYPES",
    "FallbackTypeResolver",
    "MySQLTypeResolver",
    "PostgresTypeResolver",
    "TypeDescriptor",
    "TypeResolver",
    "get_type_resolver",
    "register_type_resolver",
]
