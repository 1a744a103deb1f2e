"""
Identifier derivation for generated code.

Every function here is a pure string transform: no catalog lookups,
no state. Callers pass in the rename table when it applies.
"""

import re
from collections.abc import Iterable, Mapping

import inflection

from sqlgen.core.catalog.models import Column, Identifier

_IDENT_PATTERN = re.compile(r"[^a-zA-Z0-9_]+")
_WORD_START_PATTERN = re.compile(r"(?<!\w)[^\W\d_]")

# Separators that become underscores in enum constant names
_ENUM_SEPARATORS = ("-", ":", "/")

# Words the inflection rules get wrong
_SINGULAR_KEEP = frozenset({"campus", "meta"})


# -----------------------------
# Casing
# -----------------------------


def title(s: str) -> str:
    """Upper-case the first letter of every word, leaving the rest as-is."""
    return _WORD_START_PATTERN.sub(lambda m: m.group(0).upper(), s)


def lower_title(s: str) -> str:
    """Lower-case only the first character."""
    if not s:
        return s
    return s[0].lower() + s[1:]


def data_class_name(name: str, rename: Mapping[str, str]) -> str:
    """
    Derive a class name from an underscore name.

    Examples:
        user_status -> UserStatus
        audit_log_entries -> AuditLogEntries
    """
    renamed = rename.get(name)
    if renamed:
        return renamed
    return "".join(title(part) for part in name.split("_"))


def member_name(name: str, rename: Mapping[str, str]) -> str:
    """Derive a property name, e.g. created_at -> createdAt."""
    return lower_title(data_class_name(name, rename))


def arg_name(name: str) -> str:
    """camelCase an underscore name: first part lower, the rest titled."""
    parts = name.split("_")
    return parts[0].lower() + "".join(title(p) for p in parts[1:])


def param_name(column: Column, number: int) -> str:
    """Argument name for a placeholder; anonymous ones become dollar_<n>."""
    if column.name:
        return arg_name(column.name)
    return f"dollar_{number}"


def column_name(column: Column, pos: int) -> str:
    """Result column name; anonymous ones become column_<pos + 1>."""
    if column.name:
        return column.name
    return f"column_{pos + 1}"


def qualified_name(schema: str, name: str, default_schema: str) -> str:
    """Bare name in the default schema, schema_name elsewhere."""
    if schema == default_schema:
        return name
    return f"{schema}_{name}"


# -----------------------------
# Sanitization
# -----------------------------


def enum_value_name(value: str) -> str:
    """
    Derive an enum constant identifier from a raw enum value.

    Examples:
        foo-bar:baz/qux -> FOO_BAR_BAZ_QUX
        in progress -> INPROGRESS
    """
    ident = value
    for sep in _ENUM_SEPARATORS:
        ident = ident.replace(sep, "_")
    ident = _IDENT_PATTERN.sub("", ident)
    return ident.upper()


# -----------------------------
# Inflection
# -----------------------------


def singular(name: str, exclusions: Iterable[str] = ()) -> str:
    """
    Singularize a (class) name unless it is excluded.

    Exclusions are compared case-insensitively.
    """
    lowered = name.lower()
    if any(lowered == exclusion.lower() for exclusion in exclusions):
        return name
    if lowered in _SINGULAR_KEEP:
        return name
    if lowered == "calories":
        return name[:-1]
    return inflection.singularize(name)


# -----------------------------
# Table identity
# -----------------------------


def same_table_name(
    table_id: Identifier | None,
    other: Identifier,
    default_schema: str,
) -> bool:
    """
    Check whether two table identifiers name the same table.

    An unqualified identifier is treated as living in the default schema.
    """
    if table_id is None:
        return False
    schema = table_id.schema_name or default_schema
    other_schema = other.schema_name or default_schema
    return (
        table_id.catalog == other.catalog
        and schema == other_schema
        and table_id.name == other.name
    )
