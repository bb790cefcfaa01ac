"""
SQL helpers for building parameterized statements.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from psycopg import sql

from colors_api.core.exceptions import InvalidUpdateError


@dataclass
class PartialUpdate:
    """
    SET clause and bind values for a selective UPDATE.

    ``columns[i]`` is bound to the (i + 1)th ``%s`` placeholder of ``clause``
    and takes ``values[i]``. Parameters for a trailing WHERE clause go after
    ``values`` (see ``params``).
    """

    columns: list[str]
    values: list[Any]
    clause: sql.Composed = field(repr=False)

    @property
    def placeholder_count(self) -> int:
        return sum(1 for part in self.clause if isinstance(part, sql.Placeholder))

    def params(self, *trailing: Any) -> list[Any]:
        """Bind values followed by any trailing key parameters."""
        return [*self.values, *trailing]


def compile_update(
    fields: Mapping[str, Any], column_aliases: Mapping[str, str] | None = None
) -> PartialUpdate:
    """
    Compile a sparse field mapping into a SET clause for a partial update.

    Columns follow the iteration order of ``fields``. Each key is mapped
    through ``column_aliases`` and falls back to the key itself.

    Example:
        compile_update({"first_name": "Aliya", "password": digest}, {"password": "password_digest"})
        -> columns ["first_name", "password_digest"],
           clause "first_name" = %s, "password_digest" = %s,
           values ["Aliya", digest]

    Raises:
        InvalidUpdateError: ``fields`` is empty
    """
    if not fields:
        raise InvalidUpdateError("No data")

    aliases = column_aliases or {}
    columns = [aliases.get(key, key) for key in fields]

    parts: list[sql.Composable] = []
    for idx, column in enumerate(columns):
        if idx:
            parts.append(sql.SQL(", "))
        parts.append(sql.Identifier(column))
        parts.append(sql.SQL(" = "))
        parts.append(sql.Placeholder())

    return PartialUpdate(
        columns=columns,
        values=list(fields.values()),
        clause=sql.Composed(parts),
    )
