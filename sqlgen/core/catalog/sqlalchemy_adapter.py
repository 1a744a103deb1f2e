"""
Build a sqlgen Catalog from SQLAlchemy table definitions.

Useful when the schema already lives in SQLAlchemy models and the
generator should not wait for a separate DDL parse.
"""

import logging
import re

from sqlalchemy import ARRAY, MetaData
from sqlalchemy import Enum as SAEnum
from sqlalchemy.dialects import postgresql
from sqlalchemy.engine.interfaces import Dialect
from sqlalchemy.exc import CompileError
from sqlalchemy.sql.schema import Column as SAColumn
from sqlalchemy.types import TypeEngine

from sqlgen.core.catalog.models import (
    Catalog,
    Column,
    EnumType,
    Identifier,
    Schema,
    Table,
)

logger = logging.getLogger(__name__)

_TYPE_ARGS_PATTERN = re.compile(r"\(.*?\)")


def catalog_from_metadata(
    metadata: MetaData,
    default_schema: str = "public",
    dialect: Dialect | None = None,
) -> Catalog:
    """
    Convert SQLAlchemy MetaData into a Catalog.

    Args:
        metadata: MetaData holding the Table objects, in declaration order.
        default_schema: Schema used for tables declared without one.
        dialect: Dialect used to render type names. Defaults to PostgreSQL.

    Returns:
        A Catalog with one Schema per distinct table/enum schema.
    """
    dialect = dialect or postgresql.dialect()

    tables: dict[str, list[Table]] = {}
    enums: dict[str, dict[str, EnumType]] = {}

    for sa_table in metadata.tables.values():
        schema_name = sa_table.schema or default_schema
        columns = []
        for sa_column in sa_table.columns:
            column = _convert_column(sa_column, dialect)
            columns.append(column)

            enum_type = _enum_of(sa_column.type)
            if enum_type is not None:
                enum_schema = enum_type.schema or default_schema
                enums.setdefault(enum_schema, {}).setdefault(
                    enum_type.name,
                    EnumType(name=enum_type.name, vals=tuple(enum_type.enums)),
                )

        tables.setdefault(schema_name, []).append(
            Table(
                rel=Identifier(schema=sa_table.schema or "", name=sa_table.name),
                columns=tuple(columns),
                comment=sa_table.comment or "",
            )
        )

    schema_names = list(dict.fromkeys([*tables, *enums]))
    return Catalog(
        default_schema=default_schema,
        schemas=tuple(
            Schema(
                name=name,
                tables=tuple(tables.get(name, ())),
                enums=tuple(enums.get(name, {}).values()),
            )
            for name in schema_names
        ),
    )


def _convert_column(sa_column: SAColumn, dialect: Dialect) -> Column:
    sa_type = sa_column.type
    is_array = isinstance(sa_type, ARRAY)
    if is_array:
        sa_type = sa_type.item_type

    enum_type = _enum_of(sa_type)
    if enum_type is not None:
        type_id = Identifier(schema=enum_type.schema or "", name=enum_type.name)
    else:
        type_id = Identifier(name=_type_name(sa_type, dialect))

    table = sa_column.table
    return Column(
        name=sa_column.name,
        type=type_id,
        not_null=not sa_column.nullable,
        is_array=is_array,
        is_enum=enum_type is not None,
        table=Identifier(schema=table.schema or "", name=table.name),
        comment=sa_column.comment or "",
    )


def _enum_of(sa_type: TypeEngine) -> SAEnum | None:
    """Named SQLAlchemy enums become catalog enum types."""
    if isinstance(sa_type, ARRAY):
        sa_type = sa_type.item_type
    if isinstance(sa_type, SAEnum) and sa_type.name:
        return sa_type
    return None


def _type_name(sa_type: TypeEngine, dialect: Dialect) -> str:
    """
    Render a type for the dialect, e.g. VARCHAR(50) -> varchar.

    Types the dialect refuses to render, such as a length-less String on
    MySQL, fall back to the SQLAlchemy visit name ('string').
    """
    try:
        compiled = sa_type.compile(dialect=dialect)
    except CompileError as e:
        logger.debug("Cannot render %r for %s: %s", sa_type, dialect.name, e)
        return sa_type.__visit_name__.lower()
    return _TYPE_ARGS_PATTERN.sub("", compiled).strip().lower()
