"""
SQLAlchemy implementation of :class:`~query_helper.builder.QueryBuilder`.

Predicates are collected against a declarative model and applied to the
base statement on demand::

    builder = SQLAlchemyQueryBuilder(Product)
    QueryHelper(builder, params).exact_search(["status"])
    rows = session.scalars(builder.statement).all()
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import and_, asc, desc, select

from ..builder import QueryBuilder
from ..exceptions import (
    InvalidBoundsError,
    InvalidOrderDirectionError,
    UnknownColumnError,
)
from .relations import (
    exists_criterion,
    in_subquery_criterion,
    related_model,
    resolve_relationship,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from sqlalchemy import ColumnElement, Select
    from sqlalchemy.orm import Query

logger = logging.getLogger(__name__)

_DIRECTIONS = {"asc": asc, "desc": desc}


class SQLAlchemyQueryBuilder(QueryBuilder):
    """Collect filter and ordering clauses for a mapped model."""

    def __init__(
        self,
        model: type[Any],
        statement: Select[Any] | Query[Any] | None = None,
    ) -> None:
        """
        Initialize the builder.

        Args:
            model: The SQLAlchemy model class column names resolve against.
            statement: Base statement; defaults to ``select(model)``.  A
                legacy ``Query`` works as well.
        """
        self._model = model
        self._statement = statement if statement is not None else select(model)
        self._criteria: list[ColumnElement[bool]] = []
        self._ordering: list[Any] = []

    @property
    def model(self) -> type[Any]:
        return self._model

    @property
    def criteria(self) -> tuple[ColumnElement[bool], ...]:
        return tuple(self._criteria)

    @property
    def ordering(self) -> tuple[Any, ...]:
        return tuple(self._ordering)

    @property
    def criterion(self) -> ColumnElement[bool] | None:
        """All collected predicates joined with AND, or None."""
        if not self._criteria:
            return None
        if len(self._criteria) == 1:
            return self._criteria[0]
        return and_(*self._criteria)

    @property
    def statement(self) -> Any:
        """The base statement with the collected WHERE and ORDER BY applied."""
        stmt = self._statement
        if self._criteria:
            stmt = stmt.where(*self._criteria)
        if self._ordering:
            stmt = stmt.order_by(*self._ordering)
        return stmt

    def column(self, name: str) -> Any:
        """Resolve a model attribute by name."""
        column = getattr(self._model, name, None)
        if column is None:
            raise UnknownColumnError(self._model, name)
        return column

    # ------------------------------------------------------------------
    # QueryBuilder
    # ------------------------------------------------------------------

    def where(self, column: str, value: Any) -> None:
        self._criteria.append(self.column(column) == value)

    def where_in(self, column: str, values: Sequence[Any]) -> None:
        self._criteria.append(self.column(column).in_(list(values)))

    def where_between(self, column: str, bounds: Sequence[Any]) -> None:
        values = list(bounds)
        if len(values) < 2:
            raise InvalidBoundsError(
                f"Range on {column!r} needs two bounds, got {values!r}"
            )
        self._criteria.append(self.column(column).between(values[0], values[1]))

    def where_like(self, column: str, pattern: str) -> None:
        self._criteria.append(self.column(column).like(pattern))

    def order_by(self, column: str, direction: str) -> None:
        func = _DIRECTIONS.get(str(direction).strip().lower())
        if func is None:
            raise InvalidOrderDirectionError(
                f"Order direction must be 'asc' or 'desc', got {direction!r}"
            )
        self._ordering.append(func(self.column(column)))

    def where_has(
        self, relation: str, scope: Callable[[QueryBuilder], None]
    ) -> None:
        self._relation(relation, scope, exists_criterion, "where_has")

    def where_has_in(
        self, relation: str, scope: Callable[[QueryBuilder], None]
    ) -> None:
        self._relation(relation, scope, in_subquery_criterion, "where_has_in")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _relation(
        self,
        relation: str,
        scope: Callable[[QueryBuilder], None],
        strategy: Callable[[Any, ColumnElement[bool] | None], ColumnElement[bool]],
        method_name: str,
    ) -> None:
        head, _, rest = relation.partition(".")
        attr = resolve_relationship(self._model, head)
        nested = type(self)(related_model(attr))
        if rest:
            # "category.parent": the remaining path is applied inside the scope
            getattr(nested, method_name)(rest, scope)
        else:
            scope(nested)
        logger.debug(
            "%s %s with %d condition(s)", method_name, head, len(nested.criteria)
        )
        self._criteria.append(strategy(attr, nested.criterion))
