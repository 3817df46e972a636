"""query-helper exceptions."""

from __future__ import annotations


class QueryHelperError(Exception):
    """Root exception for the query-helper package."""


class UnknownColumnError(QueryHelperError, AttributeError):
    """Raised when a column spec names an attribute the model does not have."""

    def __init__(self, model: object, column: str) -> None:
        self.model = model
        self.column = column
        super().__init__(f"Model {model!r} has no attribute {column!r}")


class UnknownRelationError(QueryHelperError, AttributeError):
    """Raised when a relation filter names something that is not a relationship."""

    def __init__(self, model: object, relation: str) -> None:
        self.model = model
        self.relation = relation
        super().__init__(f"Model {model!r} has no relationship {relation!r}")


class InvalidOrderDirectionError(QueryHelperError, ValueError):
    """Raised when an ordering direction is neither ``asc`` nor ``desc``."""


class InvalidBoundsError(QueryHelperError, ValueError):
    """Raised when a range predicate receives fewer than two bounds."""
