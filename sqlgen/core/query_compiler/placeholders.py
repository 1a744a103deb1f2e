"""
Placeholder rewriting.

JDBC only understands unnumbered `?` placeholders, while PostgreSQL
queries use `$1`, `$2`, ... The rewrite is a plain regex substitution
over the compiled SQL text; there is no parse tree at this stage.

Known limitation: `$n` inside string literals or dollar-quoted bodies
is rewritten too. Binding order still follows the parameter list, so
such queries need to avoid placeholder-shaped literals.
"""

import re

# Engines whose queries use numbered placeholders, with the token pattern
NUMBERED_PLACEHOLDERS: dict[str, re.Pattern[str]] = {
    "postgresql": re.compile(r"\B\$\d+\b"),
}

UNNUMBERED_PLACEHOLDER = "?"


def rewrite_placeholders(sql: str, engine: str) -> str:
    """
    Replace numbered placeholders with `?` for engines that use them.

    Examples:
        postgresql: SELECT * FROM users WHERE id = $1 -> ... WHERE id = ?
        mysql:      SELECT * FROM users WHERE id = ?  -> unchanged
    """
    pattern = NUMBERED_PLACEHOLDERS.get(engine)
    if pattern is None:
        return sql
    return pattern.sub(UNNUMBERED_PLACEHOLDER, sql)
