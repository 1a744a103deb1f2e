"""Data class and enum descriptors built from the catalog."""

from .dedup import StructDeduplicator
from .enums import EnumBuilder
from .models import Constant, Enum, Field, FieldNameAllocator, Struct
from .structs import StructBuilder

__all__ = [
    "Constant",
    "Enum",
    "EnumBuilder",
    "Field",
    "FieldNameAllocator",
    "Struct",
    "StructBuilder",
    "StructDeduplicator",
]
