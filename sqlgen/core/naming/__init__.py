"""Naming and identifier sanitization helpers."""

from .identifiers import (
    arg_name,
    column_name,
    data_class_name,
    enum_value_name,
    lower_title,
    member_name,
    param_name,
    qualified_name,
    same_table_name,
    singular,
    title,
)

__all__ = [
    "arg_name",
    "column_name",
    "data_class_name",
    "enum_value_name",
    "lower_title",
    "member_name",
    "param_name",
    "qualified_name",
    "same_table_name",
    "singular",
    "title",
]
