"""JDBC binding and result-reading expressions."""

from .expressions import binding_calls, jdbc_get, jdbc_set, result_getters

__all__ = [
    "binding_calls",
    "jdbc_get",
    "jdbc_set",
    "result_getters",
]
