"""
Query builder strategy.

``QueryHelper`` never produces SQL itself; it appends predicates through a
``QueryBuilder``.  Backends implement this interface on top of their own
fluent query API (see :mod:`query_helper.sqla`).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    RelationScope = Callable[["QueryBuilder"], None]


class QueryBuilder(ABC):
    """Predicate-append operations of an external query builder."""

    @abstractmethod
    def where(self, column: str, value: Any) -> None:
        """Append ``column = value``."""
        ...

    @abstractmethod
    def where_in(self, column: str, values: Sequence[Any]) -> None:
        """Append ``column IN (values)``."""
        ...

    @abstractmethod
    def where_between(self, column: str, bounds: Sequence[Any]) -> None:
        """Append ``column BETWEEN bounds[0] AND bounds[1]``."""
        ...

    @abstractmethod
    def where_like(self, column: str, pattern: str) -> None:
        """Append ``column LIKE pattern``."""
        ...

    @abstractmethod
    def order_by(self, column: str, direction: str) -> None:
        """Append an ordering clause; ``direction`` is passed through as given."""
        ...

    @abstractmethod
    def where_has(self, relation: str, scope: RelationScope) -> None:
        """
        Constrain on the existence of a related row (correlated ``EXISTS``).

        Args:
            relation: Relationship name, dotted for nested relations.
            scope: Called with a builder scoped to the related model; the
                predicates it appends become the relation's sub-conditions.
        """
        ...

    @abstractmethod
    def where_has_in(self, relation: str, scope: RelationScope) -> None:
        """Same as :meth:`where_has`, using a key ``IN (SELECT ...)`` subquery."""
        ...
