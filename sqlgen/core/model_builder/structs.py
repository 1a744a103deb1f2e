"""
Struct Builder for sqlgen.

Builds one canonical data class per catalog table.
"""

import logging

from sqlgen.core.catalog.models import Catalog, Identifier, Settings
from sqlgen.core.model_builder.models import Field, FieldNameAllocator, Struct
from sqlgen.core.naming.identifiers import (
    data_class_name,
    member_name,
    qualified_name,
    singular,
)
from sqlgen.core.types.resolver import TypeResolver

logger = logging.getLogger(__name__)


class StructBuilder:
    """
    Derives table data classes from the catalog.

    Names come from the schema-qualified table name, the rename table and,
    unless exact table names are requested, singularization.
    """

    def __init__(self, catalog: Catalog, settings: Settings, resolver: TypeResolver):
        self._catalog = catalog
        self._settings = settings
        self._resolver = resolver

    def build(self) -> list[Struct]:
        """Table structs sorted by name."""
        return sorted(self.build_declared(), key=lambda s: s.name)

    def build_declared(self) -> list[Struct]:
        """Table structs in catalog declaration order."""
        structs: list[Struct] = []
        for schema in self._catalog.user_schemas():
            for table in schema.tables:
                allocator = FieldNameAllocator()
                fields = tuple(
                    Field(
                        name=allocator.allocate(
                            member_name(column.name, self._settings.rename)
                        ),
                        type=self._resolver.resolve(column),
                        comment=column.comment,
                    )
                    for column in table.columns
                )
                structs.append(
                    Struct(
                        name=self.struct_name(schema.name, table.rel.name),
                        fields=fields,
                        table=Identifier(schema=schema.name, name=table.rel.name),
                        comment=table.comment,
                    )
                )

        logger.debug("Built %d table structs", len(structs))
        return structs

    def struct_name(self, schema: str, table: str) -> str:
        """
        Derive a table's class name.

        Examples:
            public.users -> User
            audit.log_entries -> AuditLogEntry
        """
        name = data_class_name(
            qualified_name(schema, table, self._catalog.default_schema),
            self._settings.rename,
        )
        options = self._settings.kotlin
        if not options.emit_exact_table_names:
            name = singular(name, options.inflection_exclude_table_names)
        return name
