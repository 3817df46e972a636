"""Request search parameters -> query builder predicates."""

from __future__ import annotations

from .builder import QueryBuilder
from .columns import ColumnSpec, parse_columns, split_comma_list
from .config import DEFAULT_CONFIG, QueryHelperConfig
from .exceptions import (
    InvalidBoundsError,
    InvalidOrderDirectionError,
    QueryHelperError,
    UnknownColumnError,
    UnknownRelationError,
)
from .helper import QueryHelper
from .methods import SearchMethod
from .params import data_get, is_present
from .schema import SearchSchema

__all__ = [
    "ColumnSpec",
    "DEFAULT_CONFIG",
    "InvalidBoundsError",
    "InvalidOrderDirectionError",
    "QueryBuilder",
    "QueryHelper",
    "QueryHelperConfig",
    "QueryHelperError",
    "SearchMethod",
    "SearchSchema",
    "UnknownColumnError",
    "UnknownRelationError",
    "data_get",
    "is_present",
    "parse_columns",
    "split_comma_list",
]
