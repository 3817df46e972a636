"""
SQLAlchemy backend.

Public API:
    - ``SQLAlchemyQueryBuilder``: ``QueryBuilder`` over a mapped model
    - ``for_model(model, params)``: ``QueryHelper`` over a fresh builder
    - ``exists_criterion`` / ``in_subquery_criterion``: relation strategies
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..helper import QueryHelper
from .builder import SQLAlchemyQueryBuilder
from .relations import exists_criterion, in_subquery_criterion

if TYPE_CHECKING:
    from collections.abc import Mapping

    from ..config import QueryHelperConfig


def for_model(
    model: type[Any],
    params: Mapping[str, Any] | None,
    statement: Any = None,
    *,
    config: QueryHelperConfig | None = None,
) -> QueryHelper:
    """Return a ``QueryHelper`` appending to a new ``SQLAlchemyQueryBuilder``."""
    return QueryHelper(
        SQLAlchemyQueryBuilder(model, statement), params, config=config
    )


__all__ = [
    "SQLAlchemyQueryBuilder",
    "exists_criterion",
    "for_model",
    "in_subquery_criterion",
]
