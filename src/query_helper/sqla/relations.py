"""
Relationship helpers for relation-existence filters.

Two strategies are provided:

- ``exists_criterion``: ``.any()`` / ``.has()``, a correlated ``EXISTS``;
- ``in_subquery_criterion``: ``local_key IN (SELECT remote_key ...)``,
  built from the relationship's local/remote column pairs.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import select, tuple_
from sqlalchemy.orm import RelationshipProperty

from ..exceptions import UnknownRelationError

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement

logger = logging.getLogger(__name__)


def resolve_relationship(model: type[Any], name: str) -> Any:
    """Return the relationship attribute ``name`` of ``model``."""
    attr = getattr(model, name, None)
    if not isinstance(getattr(attr, "property", None), RelationshipProperty):
        raise UnknownRelationError(model, name)
    return attr


def related_model(attr: Any) -> type[Any]:
    """Mapped class on the far side of a relationship attribute."""
    return cast("type[Any]", attr.property.mapper.class_)


def exists_criterion(
    attr: Any, criterion: ColumnElement[bool] | None
) -> ColumnElement[bool]:
    """Correlated ``EXISTS`` on the related rows matching ``criterion``."""
    if attr.property.uselist:
        return cast("ColumnElement[bool]", attr.any(criterion))
    return cast("ColumnElement[bool]", attr.has(criterion))


def in_subquery_criterion(
    attr: Any, criterion: ColumnElement[bool] | None
) -> ColumnElement[bool]:
    """
    ``local IN (SELECT remote FROM related WHERE criterion)``.

    The subquery never auto-correlates, so self-referential relationships
    select from their own table.  Relationships through a secondary table
    fall back to :func:`exists_criterion`.
    """
    prop = attr.property
    if prop.secondary is not None:
        logger.debug(
            "Relationship %s uses a secondary table; falling back to EXISTS", attr
        )
        return exists_criterion(attr, criterion)

    pairs = prop.local_remote_pairs
    local = [local_col for local_col, _ in pairs]
    remote = [remote_col for _, remote_col in pairs]

    subquery = select(*remote)
    if criterion is not None:
        subquery = subquery.where(criterion)
    subquery = subquery.correlate(None)

    if len(pairs) == 1:
        return cast("ColumnElement[bool]", local[0].in_(subquery))
    return cast("ColumnElement[bool]", tuple_(*local).in_(subquery))
