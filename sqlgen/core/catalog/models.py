"""
Input models for sqlgen.

These models describe what the upstream SQL parser hands to the code
generator: the relational catalog, the annotated queries and the
generation settings.

They are validated on construction and never mutated afterwards.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


# Schemas that never contribute tables or enums
RESERVED_SCHEMAS = frozenset({"pg_catalog", "information_schema"})


class _InputModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


# -----------------------------
# Enums
# -----------------------------


class CommandKind(str, Enum):
    """Query annotations understood by the generator."""

    ONE = ":one"
    MANY = ":many"
    EXEC = ":exec"
    EXEC_ROWS = ":execrows"
    EXEC_RESULT = ":execresult"
    COPY_FROM = ":copyfrom"

    @classmethod
    def lookup(cls, value: str) -> "CommandKind | None":
        """Return the command kind for an annotation, or None if unknown."""
        try:
            return cls(value)
        except ValueError:
            return None


# -----------------------------
# Catalog
# -----------------------------


class Identifier(_InputModel):
    """
    A possibly schema-qualified relation or type name.

    Examples:
        public.users
        pg_catalog.int4
        uuid
    """

    catalog: str = ""
    schema_name: str = Field(default="", alias="schema")
    name: str

    @property
    def qualified_name(self) -> str:
        if self.schema_name:
            return f"{self.schema_name}.{self.name}"
        return self.name


class Column(_InputModel):
    """A table column, query parameter or result column."""

    name: str = ""
    type: Identifier
    not_null: bool = False
    is_array: bool = False
    is_enum: bool = False
    table: Identifier | None = None
    comment: str = ""

    @property
    def nullable(self) -> bool:
        return not self.not_null


class Table(_InputModel):
    rel: Identifier
    columns: tuple[Column, ...] = ()
    comment: str = ""


class EnumType(_InputModel):
    name: str
    vals: tuple[str, ...] = ()
    comment: str = ""


class Schema(_InputModel):
    name: str
    tables: tuple[Table, ...] = ()
    enums: tuple[EnumType, ...] = ()
    comment: str = ""

    @property
    def is_reserved(self) -> bool:
        return self.name in RESERVED_SCHEMAS


class Catalog(_InputModel):
    """
    The immutable description of all schemas known to the parser.

    Schemas, tables, columns and enum values keep their declaration order.
    """

    default_schema: str = "public"
    schemas: tuple[Schema, ...] = ()

    def user_schemas(self) -> list[Schema]:
        """Schemas that are not system/reserved."""
        return [s for s in self.schemas if not s.is_reserved]


# -----------------------------
# Queries
# -----------------------------


class Parameter(_InputModel):
    """A positional placeholder usage ($1, $2, ...) and its inferred column."""

    number: int = Field(..., ge=1)
    column: Column


class QueryInput(_InputModel):
    """
    A named, annotated query as produced by the parser.

    Example:
        -- name: GetUser :one
        SELECT id, email, status FROM users WHERE id = $1
    """

    name: str = ""
    cmd: str = ""
    text: str = ""
    params: tuple[Parameter, ...] = ()
    columns: tuple[Column, ...] = ()
    comments: tuple[str, ...] = ()
    filename: str = ""


# -----------------------------
# Settings
# -----------------------------


class KotlinOptions(_InputModel):
    """Target-specific options for the Kotlin/JDBC emitter."""

    package: str = ""
    emit_exact_table_names: bool = False
    inflection_exclude_table_names: tuple[str, ...] = ()


class Settings(_InputModel):
    """Per-request generation settings."""

    engine: str = ""
    rename: dict[str, str] = Field(
        default_factory=dict,
        description="Qualified name -> preferred identifier",
    )
    kotlin: KotlinOptions = Field(default_factory=KotlinOptions)


class CodeGenRequest(_InputModel):
    """Everything a single generation run consumes."""

    catalog: Catalog
    queries: tuple[QueryInput, ...] = ()
    settings: Settings = Field(default_factory=Settings)
    version: str = ""
