"""
QueryHelper — request search parameters -> query builder predicates.

Each search method scans a list of column specs (``"param:column"``), reads
the parameter from the search params and appends a predicate to the
builder.  Absent values are skipped silently; mis-shaped values degrade to a
simpler predicate instead of raising.

Relation filters
----------------
``where_has_search`` / ``where_has_in_search`` take a mapping of relation
name to ``{method: columns}``::

    {
        "category": {
            "COMMA": ["category_sn:sn"],
            "FUZZY": ["category_name:name", "value", "desc"],
        },
    }

A nested scope is only opened when at least one of the referenced
parameters is present.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from functools import partial
from typing import TYPE_CHECKING, Any

from .columns import ColumnSpec, parse_columns, split_comma_list
from .config import DEFAULT_CONFIG, QueryHelperConfig
from .methods import SearchMethod
from .params import any_present, as_list, data_get, is_array, is_present

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from .builder import QueryBuilder
    from .schema import SearchSchema

    Columns = str | Iterable[str | ColumnSpec]
    RelationFilters = Mapping[str, Mapping[Any, Columns]]
    Handler = Callable[[QueryBuilder, str, Any], None]

logger = logging.getLogger(__name__)


class QueryHelper:
    """Apply declarative search filters to a query builder."""

    def __init__(
        self,
        builder: QueryBuilder,
        search_params: Mapping[str, Any] | None,
        *,
        config: QueryHelperConfig | None = None,
    ) -> None:
        """
        Initialize QueryHelper.

        Args:
            builder: The query builder predicates are appended to.
            search_params: User-submitted search parameters (read-only).
            config: Optional configuration (defaults to ``DEFAULT_CONFIG``).
        """
        self._builder = builder
        self._params: Mapping[str, Any] = search_params or {}
        self._config = config or DEFAULT_CONFIG
        self._handlers: dict[SearchMethod, Handler] = {
            SearchMethod.COMMA: self._where_comma,
            SearchMethod.FUZZY: partial(self._where_fuzzy, left_fuzzy=False),
            SearchMethod.FUZZY_LEFT: partial(self._where_fuzzy, left_fuzzy=True),
            SearchMethod.IN: self._where_in,
            SearchMethod.BETWEEN: self._where_between,
            SearchMethod.EQUALS: self._where_equals,
        }

    @property
    def builder(self) -> QueryBuilder:
        return self._builder

    @property
    def search_params(self) -> Mapping[str, Any]:
        return self._params

    # ------------------------------------------------------------------
    # Column searches
    # ------------------------------------------------------------------

    def comma_search(self, columns: Columns) -> QueryHelper:
        """Comma-separated search (ASCII and full-width commas and spaces)."""
        for spec in parse_columns(columns):
            value = data_get(self._params, spec.param, "")
            self._where_comma(self._builder, spec.column, value)
        return self

    def exact_search(self, columns: Columns) -> QueryHelper:
        """Equality search; ``0`` and ``"0"`` count as values."""
        return self._search(columns, SearchMethod.EQUALS)

    def fuzzy_search(self, columns: Columns, left_fuzzy: bool = False) -> QueryHelper:
        """LIKE search: ``value%``, or ``%value%`` with ``left_fuzzy``."""
        method = SearchMethod.FUZZY_LEFT if left_fuzzy else SearchMethod.FUZZY
        return self._search(columns, method)

    def between_search(self, columns: Columns) -> QueryHelper:
        """Range search on a two-element value."""
        return self._search(columns, SearchMethod.BETWEEN)

    def in_search(self, columns: Columns) -> QueryHelper:
        """Membership search for list values, equality otherwise."""
        return self._search(columns, SearchMethod.IN)

    def _search(self, columns: Columns, method: SearchMethod) -> QueryHelper:
        handler = self._handlers[method]
        for spec in parse_columns(columns):
            value = data_get(self._params, spec.param)
            if is_present(value):
                handler(self._builder, spec.column, value)
        return self

    # ------------------------------------------------------------------
    # Relation searches
    # ------------------------------------------------------------------

    def where_has_search(self, relations: RelationFilters) -> QueryHelper:
        """Relation filters using a correlated ``EXISTS`` subquery."""
        return self._relation_search(relations, self._builder.where_has)

    def where_has_in_search(self, relations: RelationFilters) -> QueryHelper:
        """Relation filters using a key ``IN (SELECT ...)`` subquery."""
        return self._relation_search(relations, self._builder.where_has_in)

    def _relation_search(
        self,
        relations: RelationFilters,
        strategy: Callable[[str, Callable[[QueryBuilder], None]], None],
    ) -> QueryHelper:
        for relation, method_columns in relations.items():
            groups = [
                (SearchMethod.from_tag(tag), parse_columns(fields))
                for tag, fields in method_columns.items()
            ]
            params = [spec.param for _, specs in groups for spec in specs]
            if not any_present(self._params, params):
                logger.debug("Skipping relation %s: no parameters present", relation)
                continue
            strategy(relation, partial(self._apply_relation_groups, groups))
        return self

    def _apply_relation_groups(
        self,
        groups: list[tuple[SearchMethod, list[ColumnSpec]]],
        query: QueryBuilder,
    ) -> None:
        for method, specs in groups:
            handler = self._handlers[method]
            for spec in specs:
                value = data_get(self._params, spec.param)
                if not is_present(value):
                    continue
                handler(query, spec.column, value)

    # ------------------------------------------------------------------
    # Sorting
    # ------------------------------------------------------------------

    def sort(self, columns: Columns) -> QueryHelper:
        """
        Multi-column sort from the ``orderBy`` parameter.

        Ordering clauses follow the order entries' sequence; for each entry
        every matching column spec is applied in declaration order.
        """
        entries = self._params.get(self._config.order_key)
        if not entries:
            return self
        if isinstance(entries, Mapping):
            entries = [entries]
        elif not isinstance(entries, list | tuple):
            logger.debug("Ignoring malformed order parameter %r", entries)
            return self

        specs = parse_columns(columns)
        for entry in entries:
            if not isinstance(entry, Mapping):
                logger.debug("Ignoring malformed order entry %r", entry)
                continue
            field = entry.get(self._config.order_field_key)
            direction = entry.get(self._config.order_direction_key)
            for spec in specs:
                if field == spec.param and direction:
                    logger.debug("ORDER BY %s %s", spec.column, direction)
                    self._builder.order_by(spec.column, direction)
        return self

    # ------------------------------------------------------------------
    # Schema
    # ------------------------------------------------------------------

    def apply(self, schema: SearchSchema) -> QueryHelper:
        """Run every search declared in ``schema``."""
        return (
            self.comma_search(schema.comma)
            .exact_search(schema.exact)
            .fuzzy_search(schema.fuzzy)
            .fuzzy_search(schema.fuzzy_left, left_fuzzy=True)
            .between_search(schema.between)
            .in_search(schema.in_)
            .where_has_search(schema.where_has)
            .where_has_in_search(schema.where_has_in)
            .sort(schema.sort)
        )

    # ------------------------------------------------------------------
    # Predicate handlers
    # ------------------------------------------------------------------

    def _where_comma(self, query: QueryBuilder, column: str, value: Any) -> None:
        tokens = split_comma_list(
            value, self._config.list_delimiter, self._config.list_separators
        )
        if not tokens:
            return
        if len(tokens) == 1:
            self._where_equals(query, column, tokens[0])
        else:
            logger.debug("WHERE %s IN %r", column, tokens)
            query.where_in(column, tokens)

    def _where_fuzzy(
        self, query: QueryBuilder, column: str, value: Any, *, left_fuzzy: bool
    ) -> None:
        wildcard = self._config.wildcard
        pattern = f"{wildcard if left_fuzzy else ''}{value}{wildcard}"
        logger.debug("WHERE %s LIKE %r", column, pattern)
        query.where_like(column, pattern)

    def _where_in(self, query: QueryBuilder, column: str, value: Any) -> None:
        if not is_array(value):
            self._where_equals(query, column, value)
            return
        values = as_list(value)
        logger.debug("WHERE %s IN %r", column, values)
        query.where_in(column, values)

    def _where_between(self, query: QueryBuilder, column: str, value: Any) -> None:
        if not is_array(value):
            self._where_equals(query, column, value)
            return
        bounds = as_list(value)
        if len(bounds) < 2:
            self._where_equals(query, column, bounds[0])
            return
        logger.debug("WHERE %s BETWEEN %r", column, bounds)
        query.where_between(column, bounds)

    def _where_equals(self, query: QueryBuilder, column: str, value: Any) -> None:
        logger.debug("WHERE %s = %r", column, value)
        query.where(column, value)
