"""
Query Compiler for sqlgen.

Turns annotated queries into Query descriptors: argument struct and
parameter bindings, return value, and JDBC-ready SQL text.
"""

import logging
from collections.abc import Callable, Iterable, Sequence

from sqlgen.core.catalog.models import Column, CommandKind, QueryInput, Settings
from sqlgen.core.model_builder.dedup import StructDeduplicator
from sqlgen.core.model_builder.models import Field, FieldNameAllocator, Struct
from sqlgen.core.naming.identifiers import (
    column_name,
    lower_title,
    member_name,
    param_name,
    title,
)
from sqlgen.core.query_compiler.models import Params, Query, QueryValue
from sqlgen.core.query_compiler.placeholders import rewrite_placeholders
from sqlgen.core.types.resolver import TypeResolver

logger = logging.getLogger(__name__)

RESULTS_NAME = "results"


# -----------------------------
# Errors
# -----------------------------


class CodegenError(Exception):
    """Raised when code generation cannot produce valid output."""

    pass


class UnsupportedCommandError(CodegenError):
    """Raised for a query command the generator cannot implement."""

    def __init__(self, query_name: str, cmd: CommandKind):
        self.query_name = query_name
        self.cmd = cmd
        super().__init__(
            f"Query '{query_name}': support for {cmd.value} is not implemented"
        )


# Commands that abort the whole run
UNSUPPORTED_COMMANDS = frozenset({CommandKind.COPY_FROM})


# -----------------------------
# Compiler
# -----------------------------


class QueryCompiler:
    """
    Compiles QueryInputs into Query descriptors.

    Result shapes with two or more columns are matched against the known
    table structs first; only unmatched shapes get a new `<Query>Row`
    struct.
    """

    def __init__(
        self,
        settings: Settings,
        resolver: TypeResolver,
        deduplicator: StructDeduplicator,
    ):
        """
        Initialize the compiler.

        Args:
            settings: Request settings (engine and rename table).
            resolver: Type resolver for the request's engine.
            deduplicator: Matcher over the catalog's table structs.
        """
        self._settings = settings
        self._resolver = resolver
        self._deduplicator = deduplicator

    def compile(self, queries: Iterable[QueryInput]) -> list[Query]:
        """
        Compile all queries.

        Returns:
            Queries sorted by method name.

        Raises:
            UnsupportedCommandError: If any query uses an unsupported command.
        """
        compiled: list[Query] = []
        for query in queries:
            result = self.compile_query(query)
            if result is not None:
                compiled.append(result)

        return sorted(compiled, key=lambda q: q.method_name)

    def compile_query(self, query: QueryInput) -> Query | None:
        """Compile one query; None if it is unnamed or has no known command."""
        if not query.name or not query.cmd:
            return None

        cmd = CommandKind.lookup(query.cmd)
        if cmd is None:
            logger.debug("Skipping query %s: unknown command %s", query.name, query.cmd)
            return None
        if cmd in UNSUPPORTED_COMMANDS:
            raise UnsupportedCommandError(query.name, cmd)

        class_name = title(query.name)
        method_name = lower_title(query.name)

        params = self._columns_to_struct(
            class_name + "Bindings",
            [(p.number, p.column) for p in query.params],
            param_name,
        )

        return Query(
            class_name=class_name,
            cmd=cmd,
            method_name=method_name,
            field_name=method_name + "Stmt",
            constant_name=method_name,
            sql=rewrite_placeholders(query.text, self._settings.engine),
            source_name=query.filename,
            arg=Params(struct=params),
            ret=self._build_return_value(class_name, query.columns),
            comments=tuple(query.comments),
        )

    # -------------------------
    # Return Values
    # -------------------------

    def _build_return_value(self, class_name: str, columns: Sequence[Column]) -> QueryValue:
        if not columns:
            return QueryValue()

        if len(columns) == 1:
            return QueryValue(name=RESULTS_NAME, type=self._resolver.resolve(columns[0]))

        struct = self._deduplicator.find(columns)
        if struct is not None:
            logger.debug("%s reuses table struct %s", class_name, struct.name)
            return QueryValue(name=RESULTS_NAME, struct=struct)

        struct = self._columns_to_struct(
            class_name + "Row",
            list(enumerate(columns)),
            column_name,
        )
        logger.debug("%s gets new result struct %s", class_name, struct.name)
        return QueryValue(emit=True, name=RESULTS_NAME, struct=struct)

    # -------------------------
    # Struct Synthesis
    # -------------------------

    def _columns_to_struct(
        self,
        name: str,
        columns: Sequence[tuple[int, Column]],
        namer: Callable[[Column, int], str],
    ) -> Struct:
        """
        Build a struct from (id, column) pairs.

        The first column with a given id creates a field; later ones with
        the same id only add another binding entry for that field.
        """
        allocator = FieldNameAllocator()
        by_id: dict[int, Field] = {}
        fields: list[Field] = []
        bindings: list[Field] = []

        for column_id, column in columns:
            existing = by_id.get(column_id)
            if existing is not None:
                bindings.append(existing)
                continue

            field = Field(
                name=allocator.allocate(
                    member_name(namer(column, column_id), self._settings.rename)
                ),
                type=self._resolver.resolve(column),
            )
            fields.append(field)
            bindings.append(field)
            by_id[column_id] = field

        return Struct(name=name, fields=tuple(fields), param_bindings=tuple(bindings))
