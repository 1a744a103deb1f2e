"""
JDBC call expressions for parameter binding and result reading.

Emitters targeting JDBC drop these strings into their templates. Indexes
are 1-based, as in PreparedStatement and ResultSet.
"""

from sqlgen.core.query_compiler.models import Params, QueryValue
from sqlgen.core.types.descriptor import TypeDescriptor


def jdbc_set(t: TypeDescriptor, idx: int, name: str) -> str:
    """
    Statement setter call binding `name` to placeholder `idx`.

    Examples:
        stmt.setLong(1, id)
        stmt.setObject(2, status.value, Types.OTHER)
    """
    if t.is_enum and t.is_array:
        return (
            f'stmt.setArray({idx}, conn.createArrayOf("{t.data_type}", '
            f"{name}.map {{ v -> v.value }}.toTypedArray()))"
        )
    if t.is_enum:
        if t.engine == "postgresql":
            return f"stmt.setObject({idx}, {name}.value, Types.OTHER)"
        return f"stmt.setString({idx}, {name}.value)"
    if t.is_array:
        return (
            f'stmt.setArray({idx}, conn.createArrayOf("{t.data_type}", '
            f"{name}.toTypedArray()))"
        )
    if t.is_time or t.is_uuid:
        return f"stmt.setObject({idx}, {name})"
    if t.is_instant:
        return f"stmt.setTimestamp({idx}, Timestamp.from({name}))"
    return f"stmt.set{t.name}({idx}, {name})"


def jdbc_get(t: TypeDescriptor, idx: int) -> str:
    """ResultSet getter expression reading column `idx` as `t`."""
    if t.is_enum and t.is_array:
        return (
            f"(results.getArray({idx}).array as Array<String>)"
            f".map {{ v -> {t.name}.lookup(v)!! }}.toList()"
        )
    if t.is_enum:
        return f"{t.name}.lookup(results.getString({idx}))!!"
    if t.is_array:
        return f"(results.getArray({idx}).array as Array<{t.name}>).toList()"
    if t.is_time:
        return f"results.getObject({idx}, {t.name}::class.java)"
    if t.is_instant:
        return f"results.getTimestamp({idx}).toInstant()"
    if t.is_uuid:
        null_cast = "?" if t.is_null else ""
        return f"results.getObject({idx}) as{null_cast} {t.name}"
    return f"results.get{t.name}({idx})"


def binding_calls(params: Params) -> list[str]:
    """One setter call per placeholder usage."""
    return [
        jdbc_set(f.type, i, f.name) for i, f in enumerate(params.bindings, start=1)
    ]


def result_getters(value: QueryValue) -> list[str]:
    """One getter per result field; a single getter for scalar results."""
    if value.is_empty:
        return []
    if value.struct is None:
        return [jdbc_get(value.type, 1)]
    return [jdbc_get(f.type, i) for i, f in enumerate(value.struct.fields, start=1)]
