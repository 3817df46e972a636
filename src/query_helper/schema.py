"""SearchSchema — declarative filter surface of a resource."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .methods import SearchMethod

RelationFilterMap = dict[str, dict[SearchMethod, list[str]]]


def _as_column_list(value: Any) -> Any:
    if isinstance(value, str):
        return [value]
    return value


class SearchSchema(BaseModel):
    """
    All column specs a list endpoint searches and sorts on.

    Loadable from plain dicts/JSON::

        SearchSchema.model_validate({
            "comma": ["category"],
            "exact": ["status"],
            "fuzzy": ["keyword:name"],
            "in": ["ids:id"],
            "where_has": {"category": {"FUZZY": "category_name:name"}},
            "sort": ["created_at", "price"],
        })
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    comma: list[str] = Field(default_factory=list)
    exact: list[str] = Field(default_factory=list)
    fuzzy: list[str] = Field(default_factory=list)
    fuzzy_left: list[str] = Field(default_factory=list)
    between: list[str] = Field(default_factory=list)
    in_: list[str] = Field(default_factory=list, alias="in")
    where_has: RelationFilterMap = Field(default_factory=dict)
    where_has_in: RelationFilterMap = Field(default_factory=dict)
    sort: list[str] = Field(default_factory=list)

    @field_validator(
        "comma", "exact", "fuzzy", "fuzzy_left", "between", "in_", "sort",
        mode="before",
    )
    @classmethod
    def _wrap_single_column(cls, value: Any) -> Any:
        return _as_column_list(value)

    @field_validator("where_has", "where_has_in", mode="before")
    @classmethod
    def _normalise_relations(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        normalised: dict[str, dict[SearchMethod, Any]] = {}
        for relation, methods in value.items():
            if not isinstance(methods, dict):
                normalised[relation] = methods
                continue
            group: dict[SearchMethod, Any] = {}
            for tag, columns in methods.items():
                method = SearchMethod.from_tag(tag)
                existing = group.get(method, [])
                group[method] = [*existing, *_as_column_list(columns)]
            normalised[relation] = group
        return normalised
