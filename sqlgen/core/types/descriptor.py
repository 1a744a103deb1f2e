"""
Resolved type descriptors.

A TypeDescriptor is compared by value. Two columns with the same engine,
raw type, nullability and array flag always resolve to equal descriptors,
which is what struct reuse and parameter binding rely on.
"""

from dataclasses import dataclass

# Generic type used when a raw type is unknown to the engine mapping
FALLBACK_TYPE = "Any"

_TIME_TYPES = frozenset({"LocalDate", "LocalDateTime", "LocalTime", "OffsetDateTime"})


@dataclass(frozen=True)
class TypeDescriptor:
    """Target scalar type of a column, parameter or result field."""

    name: str  # target scalar name (e.g. "Int", "UUID", "UserStatus")
    is_enum: bool = False
    is_array: bool = False
    is_null: bool = False
    data_type: str = ""  # raw engine type (e.g. "pg_catalog.int4")
    engine: str = ""

    @property
    def is_time(self) -> bool:
        return self.name in _TIME_TYPES

    @property
    def is_instant(self) -> bool:
        return self.name == "Instant"

    @property
    def is_uuid(self) -> bool:
        return self.name == "UUID"

    @property
    def is_fallback(self) -> bool:
        return self.name == FALLBACK_TYPE

    @property
    def jdbc_type(self) -> str:
        """JDBC accessor suffix: Array, Object, Timestamp or the type name."""
        if self.is_array:
            return "Array"
        if self.is_enum or self.is_time:
            return "Object"
        if self.is_instant:
            return "Timestamp"
        return self.name

    @property
    def jdbc_setter(self) -> str:
        return "set" + self.jdbc_type

    def type_string(self) -> str:
        """
        Render the declared type.

        Examples:
            List<String>   (array)
            UUID?          (nullable)
            Long           (not null)
        """
        if self.is_array:
            return f"List<{self.name}>"
        if self.is_null:
            return f"{self.name}?"
        return self.name

    def __str__(self) -> str:
        return self.type_string()
