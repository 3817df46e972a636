"""Helper configuration."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class QueryHelperConfig:
    """Configuration for :class:`~query_helper.helper.QueryHelper`.

    Attributes:
        order_key: Top-level parameter holding the list of order entries.
        order_field_key: Key of the field name inside an order entry.
        order_direction_key: Key of the direction inside an order entry.
        list_delimiter: Delimiter comma-list values are split on.
        list_separators: Extra separators normalised into ``list_delimiter``
            (full-width comma, ASCII space, full-width space).
        wildcard: Wildcard character used to build LIKE patterns.
    """

    order_key: str = "orderBy"
    order_field_key: str = "field"
    order_direction_key: str = "order"
    list_delimiter: str = ","
    list_separators: tuple[str, ...] = ("，", " ", "　")
    wildcard: str = "%"


DEFAULT_CONFIG = QueryHelperConfig()
