"""
Unit tests for SQL core utilities: identifiers, columns, cell values, tokens.
"""

import pickle

import pytest
from pydantic import BaseModel

from batch_upsert.sql.core.columns import compute_column_set, compute_update_columns
from batch_upsert.sql.core.identifier import quote_identifier
from batch_upsert.sql.core.tokens import Fragment, Identifier, Param, identifier_list
from batch_upsert.sql.core.values import (
    ABSENT,
    USE_DEFAULT,
    Value,
    lookup,
    row_items,
)

pytestmark = pytest.mark.unit


class TestQuoteIdentifier:
    """Tests for quote_identifier function."""

    def test_quote_ascii_column(self):
        """ASCII column names should be double-quoted."""
        assert quote_identifier("company_id") == '"company_id"'

    def test_quote_chinese_column(self):
        """Non-ASCII column names should be double-quoted unchanged."""
        assert quote_identifier("年金计划号") == '"年金计划号"'

    def test_quote_preserves_case_and_spaces(self):
        assert quote_identifier("Order Date") == '"Order Date"'

    def test_quote_with_internal_quotes(self):
        """Internal double quotes should be escaped by doubling."""
        assert quote_identifier('column"name') == '"column""name"'


class TestComputeColumnSet:
    """Tests for the ordered union of row keys."""

    def test_first_occurrence_order(self):
        rows = [{"id": 1, "b": 2}, {"a": 3, "id": 4}, {"c": 5, "b": 6}]
        assert compute_column_set(rows) == ("id", "b", "a", "c")

    def test_not_alphabetical(self):
        assert compute_column_set([{"z": 1, "a": 2}]) == ("z", "a")

    def test_stable_for_same_input(self):
        rows = [{"id": 1}, {"other": 2, "id": 3}]
        assert compute_column_set(rows) == compute_column_set(rows)

    def test_keys_holding_use_default_still_count(self):
        rows = [{"id": 1, "other": USE_DEFAULT}]
        assert compute_column_set(rows) == ("id", "other")


class TestComputeUpdateColumns:
    """Tests for the update-column set."""

    def test_excludes_members_preserving_order(self):
        assert compute_update_columns(("id", "b", "a"), ["id"]) == ("b", "a")

    def test_empty_exclusion_keeps_everything(self):
        assert compute_update_columns(("id", "b"), []) == ("id", "b")

    def test_everything_excluded(self):
        assert compute_update_columns(("id",), ("id",)) == ()

    def test_exclusion_of_unknown_column_is_harmless(self):
        assert compute_update_columns(("id", "b"), ["nope"]) == ("id", "b")


class TestCellValues:
    """Tests for the ABSENT / USE_DEFAULT / Value model."""

    def test_lookup_absent(self):
        assert lookup({"id": 1}, "other") is ABSENT

    def test_lookup_use_default(self):
        assert lookup({"other": USE_DEFAULT}, "other") is USE_DEFAULT

    def test_lookup_none_is_a_value(self):
        """None is SQL NULL, not the use-default marker."""
        assert lookup({"other": None}, "other") == Value(None)

    def test_lookup_value(self):
        assert lookup({"other": "hello"}, "other") == Value("hello")

    def test_use_default_repr(self):
        assert repr(USE_DEFAULT) == "USE_DEFAULT"

    def test_use_default_survives_pickling(self):
        assert pickle.loads(pickle.dumps(USE_DEFAULT)) is USE_DEFAULT

    def test_row_items_passes_mappings_through(self):
        row = {"id": 1}
        assert row_items(row) is row

    def test_row_items_uses_only_set_fields_of_models(self):
        class Item(BaseModel):
            id: int
            other: str = "x"

        assert row_items(Item(id=1)) == {"id": 1}
        assert row_items(Item(id=1, other="y")) == {"id": 1, "other": "y"}


class TestFragment:
    """Tests for templated fragments."""

    def test_join_interleaves_separator(self):
        fragment = Fragment.join(",", ["a", Identifier("b"), Param(1)])
        assert list(fragment.tokens()) == ["a", ",", Identifier("b"), ",", Param(1)]

    def test_join_of_nothing_is_empty(self):
        assert list(Fragment.join(",", []).tokens()) == []

    def test_nested_fragments_flatten_left_to_right(self):
        inner = Fragment.of(Param(1), Param(2))
        outer = Fragment.of(inner, " ", Fragment.of(Param(3)))
        assert [t for t in outer.tokens() if isinstance(t, Param)] == [
            Param(1),
            Param(2),
            Param(3),
        ]

    def test_identifier_list(self):
        tokens = list(identifier_list(["id", "other"]).tokens())
        assert tokens == ["(", Identifier("id"), ",", Identifier("other"), ")"]

    def test_fragments_are_immutable(self):
        fragment = Fragment.of("x")
        with pytest.raises(AttributeError):
            fragment.parts = ()  # type: ignore[misc]
