from __future__ import annotations

from decimal import Decimal

import pytest

from ddbcodec_py import (
    Hint,
    HintShapeMismatchError,
    ValidationError,
    from_item,
    to_item_with_hints,
)


def test_string_set_hint() -> None:
    item = to_item_with_hints({"a": "SS"})({"a": ["x", "y"]})
    assert item == {"a": {"SS": ["x", "y"]}}


def test_unhinted_keys_use_default_encoding() -> None:
    item = to_item_with_hints({"a": "SS"})({"a": ["x"], "b": [1, 2]})
    assert item["a"] == {"SS": ["x"]}
    assert item["b"] == {"L": [{"N": "1"}, {"N": "2"}]}


def test_number_set_hint_renders_numbers() -> None:
    encode = to_item_with_hints({"scores": Hint.AS_NUMBER_SET})
    assert encode({"scores": [1, 2.5, Decimal("3")]}) == {"scores": {"NS": ["1", "2.5", "3"]}}


def test_hinted_sets_drop_duplicates() -> None:
    encode = to_item_with_hints({"tags": Hint.AS_STRING_SET, "ids": Hint.AS_NUMBER_SET})
    item = encode({"tags": ["x", "x", "y"], "ids": [1, 1, 2]})
    assert item == {"tags": {"SS": ["x", "y"]}, "ids": {"NS": ["1", "2"]}}


def test_hinted_sets_accept_python_sets_and_tuples() -> None:
    encode = to_item_with_hints({"tags": "SS", "ids": "NS"})
    item = encode({"tags": {"b", "a"}, "ids": (3, 4)})
    assert sorted(item["tags"]["SS"]) == ["a", "b"]
    assert item["ids"] == {"NS": ["3", "4"]}


def test_empty_hinted_collection_stays_a_set() -> None:
    encode = to_item_with_hints({"tags": "SS", "ids": "NS"})
    item = encode({"tags": [], "ids": set()})
    assert item == {"tags": {"SS": []}, "ids": {"NS": []}}
    assert from_item(item) == {"tags": [], "ids": []}


def test_number_set_drops_numerically_equal_elements() -> None:
    encode = to_item_with_hints({"ids": "NS"})
    assert encode({"ids": [1, 1.0]}) == {"ids": {"NS": ["1"]}}
    item = encode({"ids": [1, 1.0, Decimal("1.00"), 2, 2.5, Decimal("2.50")]})
    assert item == {"ids": {"NS": ["1", "2", "2.5"]}}
    assert encode({"ids": [0.5, Decimal("0.50"), 1]}) == {"ids": {"NS": ["0.5", "1"]}}


def test_hints_apply_only_at_top_level() -> None:
    encode = to_item_with_hints({"tags": "SS"})
    item = encode({"meta": {"tags": ["x"]}})
    assert item == {"meta": {"M": {"tags": {"L": [{"S": "x"}]}}}}


def test_hint_shape_mismatch_is_raised() -> None:
    encode = to_item_with_hints({"tags": "SS", "ids": "NS"})

    with pytest.raises(HintShapeMismatchError) as exc:
        encode({"tags": "abc"})
    assert exc.value.name == "tags"
    assert exc.value.hint == "SS"
    assert exc.value.value == "abc"

    with pytest.raises(HintShapeMismatchError, match="not a string"):
        encode({"tags": ["x", 1]})

    with pytest.raises(HintShapeMismatchError, match="not a number"):
        encode({"ids": ["1"]})

    with pytest.raises(HintShapeMismatchError, match="not a number"):
        encode({"ids": [True]})

    with pytest.raises(HintShapeMismatchError):
        encode({"ids": None})


def test_unknown_hint_is_rejected_when_bound() -> None:
    with pytest.raises(ValidationError, match="unsupported hint"):
        to_item_with_hints({"a": "LS"})


def test_bound_hints_are_a_snapshot() -> None:
    hints = {"a": "SS"}
    encode = to_item_with_hints(hints)
    hints["b"] = "NS"

    assert encode({"b": [1]}) == {"b": {"L": [{"N": "1"}]}}
    assert encode({"a": ["x"]}) == {"a": {"SS": ["x"]}}
    assert encode({"a": ["y"]}) == {"a": {"SS": ["y"]}}


def test_hinted_item_decodes_to_lists() -> None:
    item = to_item_with_hints({"tags": "SS", "ids": "NS"})({"tags": ["x"], "ids": [1, 2.5]})
    assert from_item(item) == {"tags": ["x"], "ids": [1, 2.5]}


def test_hinted_set_does_not_alias_input() -> None:
    tags = ["x"]
    item = to_item_with_hints({"tags": "SS"})({"tags": tags})
    assert item["tags"]["SS"] is not tags
