"""
Type Resolver for sqlgen.

Maps a column's engine-specific type to a TypeDescriptor. One resolver
variant exists per database engine; the variant is picked once per
generation run by get_type_resolver().

Resolution never fails: unknown raw types fall back to FALLBACK_TYPE.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping

from sqlgen.core.catalog.models import Catalog, Column, Identifier, Settings
from sqlgen.core.naming.identifiers import data_class_name, qualified_name
from sqlgen.core.types.descriptor import FALLBACK_TYPE, TypeDescriptor

logger = logging.getLogger(__name__)


# -----------------------------
# Engine Type Tables
# -----------------------------


def _expand(groups: dict[str, tuple[str, ...]]) -> dict[str, str]:
    """Flatten {target: (raw, ...)} into {raw: target}."""
    return {raw: target for target, raws in groups.items() for raw in raws}


POSTGRES_TYPES: dict[str, str] = _expand({
    "Int": ("serial", "serial4", "integer", "int", "int4"),
    "Long": ("bigserial", "serial8", "bigint", "int8"),
    "Short": ("smallserial", "serial2", "smallint", "int2"),
    "Double": ("float", "double precision", "float8"),
    "Float": ("real", "float4"),
    "java.math.BigDecimal": ("numeric",),
    "Boolean": ("bool", "boolean"),
    "String": (
        "jsonb",
        "json",
        "bytea",
        "blob",
        "text",
        "varchar",
        "character varying",
        "bpchar",
        "char",
        "character",
        "string",
    ),
    "LocalDate": ("date",),
    "LocalTime": ("time", "timetz", "time without time zone", "time with time zone"),
    "LocalDateTime": ("timestamp", "timestamp without time zone"),
    "OffsetDateTime": ("timestamptz", "timestamp with time zone"),
    "UUID": ("uuid",),
    "Object": ("void",),
    FALLBACK_TYPE: ("any",),
})

MYSQL_TYPES: dict[str, str] = _expand({
    "String": (
        "varchar",
        "text",
        "char",
        "tinytext",
        "mediumtext",
        "longtext",
        "blob",
        "binary",
        "varbinary",
        "tinyblob",
        "mediumblob",
        "longblob",
        "decimal",
        "dec",
        "fixed",
        "enum",
        "json",
    ),
    "Int": ("int", "integer", "smallint", "mediumint", "year"),
    "Long": ("bigint",),
    "Double": ("double", "double precision", "real"),
    "LocalDateTime": ("date", "datetime", "time"),
    "Instant": ("timestamp",),
    "Boolean": ("boolean", "bool", "tinyint"),
    FALLBACK_TYPE: ("any",),
})


# -----------------------------
# Resolvers
# -----------------------------


class TypeResolver(ABC):
    """
    Resolves columns to TypeDescriptors for one engine.

    Enum types declared in the catalog resolve to their generated enum
    class name, computed the same way the enum builder names them.
    """

    engine: str = ""

    def __init__(self, catalog: Catalog, rename: Mapping[str, str] | None = None):
        self._catalog = catalog
        self._rename = rename or {}
        self._enum_names = self._index_enums()

    def resolve(self, column: Column) -> TypeDescriptor:
        """Resolve a column (raw type, nullability, array flag) to a descriptor."""
        name, is_enum = self.resolve_inner(column)
        return TypeDescriptor(
            name=name,
            is_enum=is_enum,
            is_array=column.is_array,
            is_null=column.nullable,
            data_type=column.type.qualified_name,
            engine=self.engine,
        )

    @abstractmethod
    def resolve_inner(self, column: Column) -> tuple[str, bool]:
        """Return (target scalar name, is_enum) for the column's raw type."""

    # -------------------------
    # Helpers
    # -------------------------

    def _map_type(self, column: Column, table: Mapping[str, str]) -> tuple[str, bool]:
        """Shared lookup: mapping table, then catalog enums, then fallback."""
        mapped = table.get(self._normalize(column.type))
        if mapped is not None:
            return mapped, False

        enum_name = self.lookup_enum(column.type)
        if enum_name is not None:
            return enum_name, True

        if column.is_enum:
            return "String", False

        logger.debug(
            "No %s mapping for type '%s', using %s",
            self.engine or "engine",
            column.type.qualified_name,
            FALLBACK_TYPE,
        )
        return FALLBACK_TYPE, False

    def _normalize(self, type_id: Identifier) -> str:
        return type_id.qualified_name.lower()

    def lookup_enum(self, type_id: Identifier) -> str | None:
        """Find the generated enum class name for a raw type, if any."""
        schema = type_id.schema_name or self._catalog.default_schema
        return self._enum_names.get((schema, type_id.name))

    def _index_enums(self) -> dict[tuple[str, str], str]:
        index: dict[tuple[str, str], str] = {}
        default_schema = self._catalog.default_schema
        for schema in self._catalog.user_schemas():
            for enum in schema.enums:
                enum_name = qualified_name(schema.name, enum.name, default_schema)
                index[(schema.name, enum.name)] = data_class_name(
                    enum_name, self._rename
                )
        return index


class PostgresTypeResolver(TypeResolver):
    """PostgreSQL types, with or without the pg_catalog qualifier."""

    engine = "postgresql"

    def resolve_inner(self, column: Column) -> tuple[str, bool]:
        return self._map_type(column, POSTGRES_TYPES)

    def _normalize(self, type_id: Identifier) -> str:
        if type_id.schema_name == "pg_catalog":
            return type_id.name.lower()
        return super()._normalize(type_id)


class MySQLTypeResolver(TypeResolver):
    engine = "mysql"

    def resolve_inner(self, column: Column) -> tuple[str, bool]:
        return self._map_type(column, MYSQL_TYPES)


class FallbackTypeResolver(TypeResolver):
    """Used for engines without a mapping table: everything is Any."""

    def __init__(
        self,
        catalog: Catalog,
        rename: Mapping[str, str] | None = None,
        engine: str = "",
    ):
        super().__init__(catalog, rename)
        self.engine = engine

    def resolve_inner(self, column: Column) -> tuple[str, bool]:
        return FALLBACK_TYPE, False


# -----------------------------
# Selection
# -----------------------------

_RESOLVERS: dict[str, type[TypeResolver]] = {
    PostgresTypeResolver.engine: PostgresTypeResolver,
    MySQLTypeResolver.engine: MySQLTypeResolver,
}


def register_type_resolver(engine: str, resolver_cls: type[TypeResolver]) -> None:
    """Register a resolver for an additional engine."""
    _RESOLVERS[engine] = resolver_cls


def get_type_resolver(catalog: Catalog, settings: Settings) -> TypeResolver:
    """
    Pick the resolver variant for the configured engine.

    Args:
        catalog: Catalog used for enum lookups.
        settings: Request settings (engine name and rename table).

    Returns:
        A TypeResolver; FallbackTypeResolver for unknown engines.
    """
    resolver_cls = _RESOLVERS.get(settings.engine)
    if resolver_cls is None:
        logger.warning(
            "Unsupported engine '%s', all types resolve to %s",
            settings.engine,
            FALLBACK_TYPE,
        )
        return FallbackTypeResolver(catalog, settings.rename, engine=settings.engine)
    return resolver_cls(catalog, settings.rename)
