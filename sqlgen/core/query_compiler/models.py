"""
Query descriptors handed to emitters.

A Query bundles everything needed to render one accessor method: its
names, rewritten SQL, argument struct with binding list, and return
value.
"""

from dataclasses import dataclass, field

from sqlgen.core.catalog.models import CommandKind
from sqlgen.core.model_builder.models import Field, Struct
from sqlgen.core.types.descriptor import TypeDescriptor


@dataclass(frozen=True)
class QueryValue:
    """
    The value a query returns.

    Exactly one of these holds:
    - empty: no result columns
    - scalar: `type` is set
    - struct: `struct` is set; `emit` marks a query-specific struct that
      is rendered next to the query rather than with the table models
    """

    emit: bool = False
    name: str = ""
    struct: Struct | None = None
    type: TypeDescriptor | None = None

    @property
    def is_struct(self) -> bool:
        return self.struct is not None

    @property
    def emit_struct(self) -> bool:
        return self.emit

    @property
    def is_empty(self) -> bool:
        return self.type is None and self.name == "" and self.struct is None

    def type_string(self) -> str:
        if self.type is not None:
            return self.type.type_string()
        if self.struct is not None:
            return self.struct.name
        raise ValueError(f"no type for QueryValue: {self.name}")


@dataclass(frozen=True)
class Params:
    """Argument struct of a query."""

    struct: Struct

    @property
    def is_empty(self) -> bool:
        return len(self.struct.fields) == 0

    @property
    def fields(self) -> tuple[Field, ...]:
        """One field per distinct placeholder number."""
        return self.struct.fields

    @property
    def bindings(self) -> tuple[Field, ...]:
        """One entry per placeholder usage, in order."""
        return self.struct.param_bindings

    def args(self) -> str:
        """Function arguments, e.g. `id: UUID, email: String?`."""
        return ", ".join(f"{f.name}: {f.type.type_string()}" for f in self.fields)


@dataclass(frozen=True)
class Query:
    class_name: str
    cmd: CommandKind
    method_name: str
    field_name: str
    constant_name: str
    sql: str
    source_name: str
    arg: Params
    ret: QueryValue = field(default_factory=QueryValue)
    comments: tuple[str, ...] = ()
