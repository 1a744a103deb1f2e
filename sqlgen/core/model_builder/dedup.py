"""
Struct Deduplicator for sqlgen.

Finds an existing table struct with exactly the shape of a query's
result columns, so the query can return it instead of a new class.
"""

from collections.abc import Mapping, Sequence

from sqlgen.core.catalog.models import Column, Identifier
from sqlgen.core.model_builder.models import FieldNameAllocator, Struct
from sqlgen.core.naming.identifiers import column_name, member_name, same_table_name
from sqlgen.core.types.resolver import TypeResolver

_TableKey = tuple[str, str, str]


class StructDeduplicator:
    """
    Matches result shapes against known structs.

    A struct matches when it has the same number of fields and, position
    by position, the same field name, an equal resolved type and the same
    owning table. Candidates are bucketed by (field count, table); within
    a bucket the first struct in declaration order wins.
    """

    def __init__(
        self,
        structs: Sequence[Struct],
        resolver: TypeResolver,
        default_schema: str,
        rename: Mapping[str, str] | None = None,
    ):
        self._resolver = resolver
        self._default_schema = default_schema
        self._rename = rename or {}

        self._index: dict[tuple[int, _TableKey], list[Struct]] = {}
        for struct in structs:
            if struct.table is None:
                continue
            key = (len(struct.fields), self._table_key(struct.table))
            self._index.setdefault(key, []).append(struct)

    def find(self, columns: Sequence[Column]) -> Struct | None:
        """Return the first struct matching the column shape, or None."""
        if not columns or columns[0].table is None:
            return None

        key = (len(columns), self._table_key(columns[0].table))
        for struct in self._index.get(key, []):
            if self.matches(struct, columns):
                return struct
        return None

    def matches(self, struct: Struct, columns: Sequence[Column]) -> bool:
        """Structural match predicate between a struct and result columns."""
        if struct.table is None or len(struct.fields) != len(columns):
            return False

        allocator = FieldNameAllocator()
        for i, (field, column) in enumerate(zip(struct.fields, columns)):
            name = allocator.allocate(member_name(column_name(column, i), self._rename))
            if field.name != name:
                return False
            if field.type != self._resolver.resolve(column):
                return False
            if not same_table_name(column.table, struct.table, self._default_schema):
                return False
        return True

    def _table_key(self, table: Identifier) -> _TableKey:
        return (table.catalog, table.schema_name or self._default_schema, table.name)
