"""
Tests for Query Compiler.

Tests argument structs, parameter bindings, return values and
placeholder rewriting.
"""

import pytest

from sqlgen.core.catalog.models import (
    Catalog,
    Column,
    CommandKind,
    EnumType,
    Identifier,
    Parameter,
    QueryInput,
    Schema,
    Settings,
    Table,
)
from sqlgen.core.model_builder.dedup import StructDeduplicator
from sqlgen.core.model_builder.structs import StructBuilder
from sqlgen.core.query_compiler.compiler import (
    CodegenError,
    QueryCompiler,
    UnsupportedCommandError,
)
from sqlgen.core.query_compiler.models import QueryValue
from sqlgen.core.query_compiler.placeholders import rewrite_placeholders
from sqlgen.core.types.resolver import get_type_resolver


USERS = Identifier(name="users")

ID = Column(name="id", type=Identifier(name="uuid"), not_null=True, table=USERS)
EMAIL = Column(name="email", type=Identifier(name="text"), table=USERS)
STATUS = Column(
    name="status", type=Identifier(name="user_status"), not_null=True, table=USERS
)


# -----------------------------
# Fixtures
# -----------------------------


@pytest.fixture
def catalog() -> Catalog:
    return Catalog(
        default_schema="public",
        schemas=[
            Schema(
                name="public",
                tables=[Table(rel=USERS, columns=[ID, EMAIL, STATUS])],
                enums=[EnumType(name="user_status", vals=["active", "inactive"])],
            )
        ],
    )


def make_compiler(catalog: Catalog, engine: str = "postgresql") -> QueryCompiler:
    settings = Settings(engine=engine)
    resolver = get_type_resolver(catalog, settings)
    declared = StructBuilder(catalog, settings, resolver).build_declared()
    deduplicator = StructDeduplicator(declared, resolver, catalog.default_schema)
    return QueryCompiler(settings, resolver, deduplicator)


@pytest.fixture
def compiler(catalog: Catalog) -> QueryCompiler:
    return make_compiler(catalog)


# -----------------------------
# Selection & Naming Tests
# -----------------------------


class TestQuerySelection:
    """Which queries are compiled, skipped or rejected."""

    def test_unnamed_and_commandless_queries_skipped(
        self, compiler: QueryCompiler
    ) -> None:
        queries = [
            QueryInput(name="", cmd=":one", text="SELECT 1"),
            QueryInput(name="Ping", cmd="", text="SELECT 1"),
        ]
        assert compiler.compile(queries) == []

    def test_unknown_command_skipped(self, compiler: QueryCompiler) -> None:
        assert compiler.compile_query(QueryInput(name="Odd", cmd=":batchone")) is None

    def test_copy_from_aborts(self, compiler: QueryCompiler) -> None:
        queries = [
            QueryInput(name="GetUser", cmd=":one", text="SELECT 1"),
            QueryInput(name="CopyUsers", cmd=":copyfrom", text="INSERT ..."),
        ]
        with pytest.raises(UnsupportedCommandError, match="CopyUsers.*:copyfrom"):
            compiler.compile(queries)

    def test_unsupported_is_codegen_error(self, compiler: QueryCompiler) -> None:
        with pytest.raises(CodegenError):
            compiler.compile_query(QueryInput(name="Load", cmd=":copyfrom"))

    def test_sorted_by_method_name(self, compiler: QueryCompiler) -> None:
        queries = [
            QueryInput(name="UpdateUser", cmd=":exec"),
            QueryInput(name="CreateUser", cmd=":execresult"),
            QueryInput(name="ListUsers", cmd=":many"),
        ]
        names = [q.method_name for q in compiler.compile(queries)]
        assert names == ["createUser", "listUsers", "updateUser"]

    def test_names(self, compiler: QueryCompiler) -> None:
        query = compiler.compile_query(
            QueryInput(
                name="GetUser",
                cmd=":one",
                filename="users.sql",
                comments=[" Fetch one user"],
            )
        )

        assert query.class_name == "GetUser"
        assert query.method_name == "getUser"
        assert query.constant_name == "getUser"
        assert query.field_name == "getUserStmt"
        assert query.cmd is CommandKind.ONE
        assert query.source_name == "users.sql"
        assert query.comments == (" Fetch one user",)
        assert query.arg.struct.name == "GetUserBindings"


# -----------------------------
# Parameter Binding Tests
# -----------------------------


class TestParameterBindings:
    """Repeated placeholders share one field but get one binding each."""

    def test_repeated_parameter(self, compiler: QueryCompiler) -> None:
        query = compiler.compile_query(
            QueryInput(
                name="FindUsers",
                cmd=":many",
                text="SELECT id FROM users WHERE id = $1 OR email = $2 OR id = $1 OR id = $1",
                params=[
                    Parameter(number=1, column=ID),
                    Parameter(number=2, column=EMAIL),
                    Parameter(number=1, column=ID),
                    Parameter(number=1, column=ID),
                ],
                columns=[ID],
            )
        )
        fields = query.arg.fields
        bindings = query.arg.bindings

        assert [f.name for f in fields] == ["id", "email"]
        assert len(bindings) == 4
        assert bindings[0] is fields[0]
        assert bindings[1] is fields[1]
        assert bindings[2] is fields[0]
        assert bindings[3] is fields[0]

    def test_args(self, compiler: QueryCompiler) -> None:
        query = compiler.compile_query(
            QueryInput(
                name="UpdateEmail",
                cmd=":exec",
                params=[Parameter(number=1, column=EMAIL), Parameter(number=2, column=ID)],
            )
        )
        assert query.arg.args() == "email: String?, id: UUID"
        assert not query.arg.is_empty

    def test_no_params(self, compiler: QueryCompiler) -> None:
        query = compiler.compile_query(QueryInput(name="CountUsers", cmd=":one"))

        assert query.arg.is_empty
        assert query.arg.args() == ""
        assert query.arg.bindings == ()

    def test_anonymous_parameter(self, compiler: QueryCompiler) -> None:
        anonymous = Column(type=Identifier(name="int4"), not_null=True)
        query = compiler.compile_query(
            QueryInput(
                name="ListUsers",
                cmd=":many",
                params=[Parameter(number=1, column=anonymous)],
            )
        )
        assert query.arg.fields[0].name == "dollar1"

    def test_distinct_numbers_same_column_get_suffix(
        self, compiler: QueryCompiler
    ) -> None:
        query = compiler.compile_query(
            QueryInput(
                name="Between",
                cmd=":many",
                params=[Parameter(number=1, column=ID), Parameter(number=2, column=ID)],
            )
        )
        assert [f.name for f in query.arg.fields] == ["id", "id_2"]
        assert len(query.arg.bindings) == 2


# -----------------------------
# Return Value Tests
# -----------------------------


class TestReturnValues:
    """Tests for scalar, reused and synthesized return values."""

    def test_no_columns(self, compiler: QueryCompiler) -> None:
        query = compiler.compile_query(QueryInput(name="DeleteUser", cmd=":exec"))

        assert query.ret == QueryValue()
        assert query.ret.is_empty
        with pytest.raises(ValueError):
            query.ret.type_string()

    def test_single_column_is_scalar(self, compiler: QueryCompiler) -> None:
        query = compiler.compile_query(
            QueryInput(name="GetEmail", cmd=":one", columns=[EMAIL])
        )

        assert not query.ret.is_struct
        assert query.ret.name == "results"
        assert query.ret.type_string() == "String?"

    def test_table_shape_reuses_struct(self, compiler: QueryCompiler) -> None:
        query = compiler.compile_query(
            QueryInput(name="GetUsers", cmd=":many", columns=[ID, EMAIL, STATUS])
        )

        assert query.ret.is_struct
        assert query.ret.struct.name == "User"
        assert not query.ret.emit_struct
        assert query.ret.type_string() == "User"

    def test_partial_shape_synthesizes_row(self, compiler: QueryCompiler) -> None:
        query = compiler.compile_query(
            QueryInput(name="GetUsers", cmd=":many", columns=[ID, EMAIL])
        )
        ret = query.ret

        assert ret.emit_struct
        assert ret.struct.name == "GetUsersRow"
        assert ret.struct.table is None
        assert [f.name for f in ret.struct.fields] == ["id", "email"]

    def test_duplicate_result_names_suffixed(self, compiler: QueryCompiler) -> None:
        other_id = Column(
            name="id", type=Identifier(name="int8"), table=Identifier(name="orders")
        )
        query = compiler.compile_query(
            QueryInput(name="UserOrders", cmd=":many", columns=[ID, other_id])
        )
        assert [f.name for f in query.ret.struct.fields] == ["id", "id_2"]

    def test_anonymous_result_columns(self, compiler: QueryCompiler) -> None:
        count = Column(type=Identifier(name="int8"), not_null=True)
        query = compiler.compile_query(
            QueryInput(name="Stats", cmd=":one", columns=[count, count])
        )
        assert [f.name for f in query.ret.struct.fields] == ["column1", "column2"]


# -----------------------------
# Placeholder Tests
# -----------------------------


class TestPlaceholders:
    """Numbered placeholders are rewritten for PostgreSQL only."""

    def test_postgresql_rewrite(self) -> None:
        sql = "SELECT * FROM users WHERE id = $1 AND email = $2 OR id = $1"
        assert (
            rewrite_placeholders(sql, "postgresql")
            == "SELECT * FROM users WHERE id = ? AND email = ? OR id = ?"
        )

    def test_multi_digit(self) -> None:
        assert rewrite_placeholders("VALUES ($10, $11)", "postgresql") == "VALUES (?, ?)"

    def test_mysql_untouched(self) -> None:
        sql = "SELECT * FROM users WHERE id = ?"
        assert rewrite_placeholders(sql, "mysql") == sql

    def test_identifier_dollar_untouched(self) -> None:
        assert rewrite_placeholders("SELECT a$1 FROM t", "postgresql") == "SELECT a$1 FROM t"

    def test_string_literals_are_rewritten_too(self) -> None:
        sql = "SELECT '$1' FROM t WHERE id = $1"
        assert rewrite_placeholders(sql, "postgresql") == "SELECT '?' FROM t WHERE id = ?"

    def test_compiled_sql_is_rewritten(self, compiler: QueryCompiler) -> None:
        query = compiler.compile_query(
            QueryInput(
                name="GetUser",
                cmd=":one",
                text="SELECT id FROM users WHERE id = $1",
                params=[Parameter(number=1, column=ID)],
                columns=[ID],
            )
        )
        assert query.sql == "SELECT id FROM users WHERE id = ?"

    def test_mysql_compiler_keeps_sql(self, catalog: Catalog) -> None:
        compiler = make_compiler(catalog, engine="mysql")
        query = compiler.compile_query(
            QueryInput(name="GetUser", cmd=":one", text="SELECT 1 WHERE x = ?")
        )
        assert query.sql == "SELECT 1 WHERE x = ?"
