"""Column specs and comma-list tokenising."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any, NamedTuple


class ColumnSpec(NamedTuple):
    """A ``"param:column"`` pair linking a request field to a model attribute."""

    param: str
    column: str

    @classmethod
    def parse(cls, spec: str | ColumnSpec) -> ColumnSpec:
        """
        Parse ``"param:column"``.

        The first segment is the parameter path, the last one the model
        attribute.  Without a colon both are the same name, e.g.
        ``"menu_name:name"`` vs ``"status"``.
        """
        if isinstance(spec, ColumnSpec):
            return spec
        parts = str(spec).split(":")
        return cls(param=parts[0], column=parts[-1])


def parse_columns(columns: str | Iterable[str | ColumnSpec]) -> list[ColumnSpec]:
    """Parse one spec or an iterable of specs."""
    if isinstance(columns, str | ColumnSpec):
        return [ColumnSpec.parse(columns)]
    return [ColumnSpec.parse(c) for c in columns]


def split_comma_list(
    value: Any,
    delimiter: str = ",",
    separators: Sequence[str] = ("，", " ", "　"),
) -> list[str]:
    """
    Split a comma-list value into trimmed, non-empty tokens.

    Every separator is normalised into ``delimiter`` first, so
    ``"1, 2，3"`` yields ``["1", "2", "3"]``.  Lists are split token-wise
    and flattened.
    """
    if value is None:
        return []
    if isinstance(value, list | tuple):
        return [
            token
            for item in value
            for token in split_comma_list(item, delimiter, separators)
        ]

    text = str(value)
    for separator in separators:
        text = text.replace(separator, delimiter)
    return [token.strip() for token in text.split(delimiter) if token.strip()]
