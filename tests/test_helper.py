"""Tests for QueryHelper against the abstract builder interface."""

from __future__ import annotations

from unittest.mock import MagicMock, call

import pytest

from query_helper import QueryBuilder, QueryHelper, QueryHelperConfig


@pytest.fixture
def builder() -> MagicMock:
    return MagicMock(spec=QueryBuilder)


def _run_scope(strategy: MagicMock, index: int = 0) -> MagicMock:
    """Invoke the scope callback passed to a relation strategy call."""
    relation_call = strategy.call_args_list[index]
    scope = relation_call.args[1]
    nested = MagicMock(spec=QueryBuilder)
    scope(nested)
    return nested


# ---------------------------------------------------------------------------
# comma_search
# ---------------------------------------------------------------------------


def test_comma_search_multiple_tokens_uses_in(builder: MagicMock) -> None:
    QueryHelper(builder, {"category": "1, 2，3"}).comma_search(["category"])
    builder.where_in.assert_called_once_with("category", ["1", "2", "3"])
    builder.where.assert_not_called()


def test_comma_search_single_token_uses_equality(builder: MagicMock) -> None:
    QueryHelper(builder, {"sn": " A01 ，"}).comma_search(["sn"])
    builder.where.assert_called_once_with("sn", "A01")
    builder.where_in.assert_not_called()


def test_comma_search_empty_is_noop(builder: MagicMock) -> None:
    QueryHelper(builder, {"sn": " , "}).comma_search(["sn", "missing"])
    assert builder.mock_calls == []


def test_comma_search_alias(builder: MagicMock) -> None:
    QueryHelper(builder, {"category_sn": "a b"}).comma_search(["category_sn:sn"])
    builder.where_in.assert_called_once_with("sn", ["a", "b"])


# ---------------------------------------------------------------------------
# exact / fuzzy / between / in
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("value", [0, "0", 3, "active"])
def test_exact_search_present_values(builder: MagicMock, value: object) -> None:
    QueryHelper(builder, {"status": value}).exact_search(["status"])
    builder.where.assert_called_once_with("status", value)


@pytest.mark.parametrize("params", [{}, {"status": ""}, {"status": None}])
def test_exact_search_absent_values(builder: MagicMock, params: dict) -> None:
    QueryHelper(builder, params).exact_search(["status"])
    builder.where.assert_not_called()


def test_exact_search_path_through_string_is_absent(builder: MagicMock) -> None:
    QueryHelper(builder, {"search": "abc"}).exact_search(["search.title:title"])
    builder.where.assert_not_called()


def test_exact_search_nested_param(builder: MagicMock) -> None:
    params = {"filter": {"shop": {"id": 7}}}
    QueryHelper(builder, params).exact_search(["filter.shop.id:shop_id"])
    builder.where.assert_called_once_with("shop_id", 7)


def test_fuzzy_search_right_wildcard(builder: MagicMock) -> None:
    QueryHelper(builder, {"keyword": "shoe"}).fuzzy_search(["keyword:name"])
    builder.where_like.assert_called_once_with("name", "shoe%")


def test_fuzzy_search_left_fuzzy(builder: MagicMock) -> None:
    helper = QueryHelper(builder, {"keyword": "shoe"})
    helper.fuzzy_search(["keyword:name"], left_fuzzy=True)
    builder.where_like.assert_called_once_with("name", "%shoe%")


def test_fuzzy_search_skips_absent(builder: MagicMock) -> None:
    QueryHelper(builder, {"keyword": ""}).fuzzy_search(["keyword:name"])
    builder.where_like.assert_not_called()


def test_between_search_with_pair(builder: MagicMock) -> None:
    QueryHelper(builder, {"price": [10, 20]}).between_search(["price"])
    builder.where_between.assert_called_once_with("price", [10, 20])


def test_between_search_scalar_degrades_to_equality(builder: MagicMock) -> None:
    QueryHelper(builder, {"price": 10}).between_search(["price"])
    builder.where_between.assert_not_called()
    builder.where.assert_called_once_with("price", 10)


def test_between_search_single_bound_degrades_to_equality(
    builder: MagicMock,
) -> None:
    QueryHelper(builder, {"price": [5]}).between_search(["price"])
    builder.where_between.assert_not_called()
    builder.where.assert_called_once_with("price", 5)


def test_in_search_list_and_scalar(builder: MagicMock) -> None:
    params = {"ids": [1, 2], "status": 1}
    QueryHelper(builder, params).in_search(["ids:id", "status"])
    builder.where_in.assert_called_once_with("id", [1, 2])
    builder.where.assert_called_once_with("status", 1)


def test_in_search_empty_list_is_absent(builder: MagicMock) -> None:
    QueryHelper(builder, {"ids": []}).in_search(["ids:id"])
    assert builder.mock_calls == []


def test_methods_chain(builder: MagicMock) -> None:
    helper = QueryHelper(builder, {"status": 1, "keyword": "a"})
    result = helper.exact_search(["status"]).fuzzy_search(["keyword:name"])
    assert result is helper
    assert builder.mock_calls == [
        call.where("status", 1),
        call.where_like("name", "a%"),
    ]


def test_none_params_is_empty(builder: MagicMock) -> None:
    helper = QueryHelper(builder, None)
    helper.exact_search(["status"]).comma_search(["sn"]).sort(["name"])
    assert helper.search_params == {}
    assert builder.mock_calls == []


# ---------------------------------------------------------------------------
# Relation searches
# ---------------------------------------------------------------------------


def test_where_has_search_fuzzy(builder: MagicMock) -> None:
    helper = QueryHelper(builder, {"category_name": "shoe"})
    helper.where_has_search({"category": {"FUZZY": ["category_name:name"]}})

    builder.where_has.assert_called_once()
    assert builder.where_has.call_args.args[0] == "category"
    nested = _run_scope(builder.where_has)
    nested.where_like.assert_called_once_with("name", "shoe%")


def test_where_has_search_skipped_when_nothing_present(builder: MagicMock) -> None:
    helper = QueryHelper(builder, {"category_name": "", "other": "x"})
    helper.where_has_search(
        {"category": {"FUZZY": ["category_name:name"], "COMMA": "category_sn:sn"}}
    )
    helper.where_has_in_search({"category": {"IN": ["ids:id"]}})
    builder.where_has.assert_not_called()
    builder.where_has_in.assert_not_called()


def test_where_has_in_search_dispatches_every_method(builder: MagicMock) -> None:
    params = {
        "sns": "a，b",
        "sn": "c",
        "name": "sh",
        "desc": "x",
        "ids": [1, 2],
        "level": 3,
        "price": [1, 9],
        "weight": 4,
        "status": 0,
        "absent": "",
    }
    relations = {
        "category": {
            "COMMA": ["sns:sn", "sn"],
            "FUZZY": ["name", "absent"],
            "FUZZY_LEFT": "desc",
            "IN": ["ids:id", "level"],
            "BETWEEN": ["price", "weight"],
            "UNKNOWN": ["status"],
        }
    }
    QueryHelper(builder, params).where_has_in_search(relations)

    builder.where_has.assert_not_called()
    nested = _run_scope(builder.where_has_in)
    assert nested.mock_calls == [
        call.where_in("sn", ["a", "b"]),
        call.where("sn", "c"),
        call.where_like("name", "sh%"),
        call.where_like("desc", "%x%"),
        call.where_in("id", [1, 2]),
        call.where("level", 3),
        call.where_between("price", [1, 9]),
        call.where("weight", 4),
        call.where("status", 0),
    ]


def test_relation_scope_opened_even_if_comma_yields_nothing(
    builder: MagicMock,
) -> None:
    helper = QueryHelper(builder, {"sn": " ， "})
    helper.where_has_search({"category": {"COMMA": ["sn"]}})
    builder.where_has.assert_called_once()
    nested = _run_scope(builder.where_has)
    assert nested.mock_calls == []


def test_relation_search_processes_relations_independently(
    builder: MagicMock,
) -> None:
    helper = QueryHelper(builder, {"rating": 5})
    helper.where_has_search(
        {
            "category": {"FUZZY": ["category_name:name"]},
            "reviews": {"EQUALS": ["rating"]},
        }
    )
    builder.where_has.assert_called_once()
    assert builder.where_has.call_args.args[0] == "reviews"


# ---------------------------------------------------------------------------
# sort
# ---------------------------------------------------------------------------


def test_sort_follows_order_entries(builder: MagicMock) -> None:
    params = {
        "orderBy": [
            {"field": "price", "order": "desc"},
            {"field": "created", "order": "asc"},
        ]
    }
    QueryHelper(builder, params).sort(["created:created_at", "price"])
    assert builder.mock_calls == [
        call.order_by("price", "desc"),
        call.order_by("created_at", "asc"),
    ]


def test_sort_skips_unmatched_and_missing_direction(builder: MagicMock) -> None:
    params = {
        "orderBy": [
            {"field": "price", "order": ""},
            {"field": "unknown", "order": "asc"},
            {"field": "name"},
            "garbage",
            {"field": "name", "order": "DESC"},
        ]
    }
    QueryHelper(builder, params).sort(["price", "name"])
    assert builder.mock_calls == [call.order_by("name", "DESC")]


def test_sort_ignores_malformed_order_param(builder: MagicMock) -> None:
    for value in (1, "price", 1.5, True):
        QueryHelper(builder, {"orderBy": value}).sort(["price"])
    assert builder.mock_calls == []


def test_sort_without_order_param_is_noop(builder: MagicMock) -> None:
    QueryHelper(builder, {"orderBy": []}).sort(["price"])
    QueryHelper(builder, {}).sort(["price"])
    assert builder.mock_calls == []


def test_sort_accepts_single_entry(builder: MagicMock) -> None:
    params = {"orderBy": {"field": "price", "order": "asc"}}
    QueryHelper(builder, params).sort(["price"])
    builder.order_by.assert_called_once_with("price", "asc")


def test_sort_matches_every_spec_for_a_field(builder: MagicMock) -> None:
    params = {"orderBy": [{"field": "price", "order": "asc"}]}
    QueryHelper(builder, params).sort(["price:price", "price:list_price"])
    assert builder.mock_calls == [
        call.order_by("price", "asc"),
        call.order_by("list_price", "asc"),
    ]


# ---------------------------------------------------------------------------
# config
# ---------------------------------------------------------------------------


def test_custom_config(builder: MagicMock) -> None:
    config = QueryHelperConfig(
        order_key="sort",
        order_field_key="f",
        order_direction_key="d",
        list_delimiter="|",
        list_separators=(";",),
        wildcard="*",
    )
    params = {"sort": [{"f": "name", "d": "asc"}], "tags": "a;b|c", "q": "x"}
    (
        QueryHelper(builder, params, config=config)
        .comma_search(["tags"])
        .fuzzy_search(["q:name"], left_fuzzy=True)
        .sort(["name"])
    )
    assert builder.mock_calls == [
        call.where_in("tags", ["a", "b", "c"]),
        call.where_like("name", "*x*"),
        call.order_by("name", "asc"),
    ]
