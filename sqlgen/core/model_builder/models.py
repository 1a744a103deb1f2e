"""
Output descriptors for data classes and enums.

These are what an emitter renders. They are frozen and compared by value.
"""

from dataclasses import dataclass

from sqlgen.core.catalog.models import Identifier
from sqlgen.core.types.descriptor import TypeDescriptor


@dataclass(frozen=True)
class Field:
    """A single property of a generated data class."""

    name: str
    type: TypeDescriptor
    comment: str = ""


@dataclass(frozen=True)
class Struct:
    """
    A generated data class.

    Table-derived structs carry the table they were built from so that
    query results can be matched back to them. Argument structs also
    carry one binding entry per placeholder usage.
    """

    name: str
    fields: tuple[Field, ...] = ()
    table: Identifier | None = None
    comment: str = ""
    param_bindings: tuple[Field, ...] = ()


@dataclass(frozen=True)
class Constant:
    name: str  # identifier, e.g. IN_PROGRESS
    value: str  # raw database value, e.g. "in-progress"
    type: str  # owning enum class name


@dataclass(frozen=True)
class Enum:
    name: str
    constants: tuple[Constant, ...] = ()
    comment: str = ""

    def lookup(self, value: str) -> Constant | None:
        """Find the constant stored as the given raw value."""
        for constant in self.constants:
            if constant.value == value:
                return constant
        return None


class FieldNameAllocator:
    """
    Hands out field names that are unique within one struct.

    A repeated name gets a numeric suffix: id, id_2, id_3.
    """

    def __init__(self):
        self._taken: set[str] = set()
        self._counts: dict[str, int] = {}

    def allocate(self, name: str) -> str:
        candidate = name
        n = self._counts.get(name, 1)
        while candidate in self._taken:
            n += 1
            candidate = f"{name}_{n}"
        self._counts[name] = n
        self._taken.add(candidate)
        return candidate
