"""
Tests for array, structure and number utilities.
"""

import logging
from dataclasses import dataclass

import pytest

from gears.errors import InvalidArgumentError, JsonParseError
from gears.util import arrays, numbers, structure


@dataclass
class Person:
    name: str
    age: int = 0


@pytest.fixture
def people():
    return [
        {"name": "Bob", "age": 42, "team": "red"},
        {"name": "Ann", "age": 31, "team": "blue"},
        {"name": "Cid", "age": None, "team": "red"},
    ]


class TestArrayAccess:
    """Test key access with negative indexes."""

    def test_negative_index(self):
        assert arrays.get([1, 2, 3], -1) == 3
        assert arrays.has([1, 2, 3], -3)
        assert not arrays.has([1, 2, 3], -4)
        assert arrays.get([1, 2, 3], 5, "default") == "default"

    def test_set_returns_copy(self):
        original = [1, 2, 3]
        assert arrays.set(original, -1, 9) == [1, 2, 9]
        assert arrays.set(original, 3, 4) == [1, 2, 3, 4]
        assert original == [1, 2, 3]

        assert arrays.set({"a": 1}, "b", 2) == {"a": 1, "b": 2}

    def test_set_out_of_range(self):
        with pytest.raises(InvalidArgumentError):
            arrays.set([1], 5, 0)

    def test_contains(self):
        assert arrays.contains({"a": 1}, 1)
        assert not arrays.contains([1, 2], 3)


class TestArrayInsert:
    """Test insert_after() and insert_before()."""

    def test_insert_after(self):
        result = arrays.insert_after({"a": 1, "b": 2, "c": 3}, "a", {"x": 9})
        assert list(result.items()) == [("a", 1), ("x", 9), ("b", 2), ("c", 3)]

    def test_insert_after_missing_key_appends(self):
        result = arrays.insert_after({"a": 1}, "zzz", {"x": 9})
        assert list(result) == ["a", "x"]

    def test_insert_before(self):
        result = arrays.insert_before({"a": 1, "b": 2}, "b", {"x": 9})
        assert list(result) == ["a", "x", "b"]

    def test_insert_before_first_key_prepends(self):
        result = arrays.insert_before({"a": 1, "b": 2}, "a", {"x": 9})
        assert list(result) == ["x", "a", "b"]

    def test_existing_keys_are_kept(self):
        result = arrays.insert_after({"a": 1, "b": 2, "c": 3}, "a", {"c": 99})
        assert result == {"a": 1, "b": 2, "c": 3}


class TestArrayTransform:
    """Test the transforming helpers."""

    def test_group(self, people):
        grouped = arrays.group(people, "team")
        assert [p["name"] for p in grouped["red"]] == ["Bob", "Cid"]
        assert list(grouped) == ["red", "blue"]

    def test_ranges(self):
        assert arrays.ranges([1, 3, 7, 9]) == [[1, 3], [3, 7], [7, 9], [9, None]]
        assert arrays.ranges([]) == []

    def test_unset_value(self):
        assert arrays.unset_value([1, 2, 1], 1) == [2, 1]
        assert arrays.unset_value({"a": 1, "b": 2}, 2) == {"a": 1}

    def test_to_array(self):
        assert arrays.to_array("a") == ["a"]
        assert arrays.to_array((1, 2)) == [1, 2]
        assert arrays.to_array(None) == [None]

    def test_check_assoc(self):
        assert arrays.check_assoc({"a": 1})
        assert not arrays.check_assoc({0: 1})
        assert not arrays.check_assoc([1])

    def test_merge(self):
        assert arrays.merge({"a": 1}, {"a": 2, "b": 3}) == {"a": 2, "b": 3}
        assert arrays.merge([1], (2, 3)) == [1, 2, 3]
        assert arrays.merge({"a": 1}, [2]) == [1, 2]

    def test_sort(self, people):
        assert [p["name"] for p in arrays.sort(people, "[age]")] == ["Cid", "Ann", "Bob"]
        assert [p["name"] for p in arrays.sort(people, "[name]", reverse=True)] == ["Cid", "Bob", "Ann"]

    def test_sort_preserve_keys_and_comparison(self):
        data = {"x": Person("b"), "y": Person("A")}
        result = arrays.sort(
            data, "name", preserve_keys=True,
            comparison=lambda a, b: (a.lower() > b.lower()) - (a.lower() < b.lower()),
        )
        assert list(result) == ["y", "x"]

    def test_unique(self, people):
        assert [p["name"] for p in arrays.unique(people, "[team]")] == ["Bob", "Ann"]

    def test_collect(self, people):
        assert arrays.collect(people, "[name]") == ["Bob", "Ann", "Cid"]
        assert arrays.collect(people[:1], ["[name]", "[age]"]) == [["Bob", 42]]
        assert arrays.collect(people[:1], {"n": "[name]"}) == [{"n": "Bob"}]
        assert arrays.collect([], "[name]") == []

    def test_collect_objects(self):
        assert arrays.collect([Person("Ann"), {"x": 1}], "name") == ["Ann", None]

    def test_map(self):
        person = arrays.map({"name": "Ann", "age": 31}, Person("x"))
        assert person == Person("Ann", 31)

    def test_filter(self):
        assert arrays.filter([0, 1, "", "a"]) == [1, "a"]
        assert arrays.filter({"a": 1, "b": 2}, lambda v: v > 1) == {"b": 2}
        assert arrays.filter([1, 2, 3], lambda v: v > 1, invert=True) == [1]

    def test_filter_requires_callable(self):
        with pytest.raises(InvalidArgumentError):
            arrays.filter([1], "v > 1")

    def test_unset_column(self, people):
        assert arrays.unset_column(people[:1], "team") == [{"name": "Bob", "age": 42}]

    def test_first_last_index(self, people):
        assert arrays.first(people)["name"] == "Bob"
        assert arrays.first(iter([])) is None
        assert arrays.last({"a": 1, "b": 2}) == 2
        assert list(arrays.index(people, "[name]")) == ["Bob", "Ann", "Cid"]

    def test_push_unshift(self):
        original = [2]
        assert arrays.push(original, 3) == [2, 3]
        assert arrays.unshift(original, 1) == [1, 2]
        assert original == [2]

    def test_is_countable(self):
        assert arrays.is_countable([])
        assert not arrays.is_countable(iter([]))


class TestArrayStatistics:
    """Test average() and deviation()."""

    def test_average(self):
        assert arrays.average([1, 2, 3, 4]) == 2.5
        with pytest.raises(InvalidArgumentError):
            arrays.average([])

    def test_deviation(self):
        assert arrays.deviation([2, 4, 4, 4, 5, 5, 7, 9]) == pytest.approx(2.0)
        assert arrays.deviation([1, 2, 3, 4], sample=True) == pytest.approx(1.2909944)

    def test_deviation_degenerate(self, caplog):
        with caplog.at_level(logging.WARNING, logger="gears.util.arrays"):
            assert arrays.deviation([]) is None
            assert arrays.deviation([1], sample=True) is None
        assert "zero elements" in caplog.text


class TestArrayJson:
    """Test from_json()."""

    def test_from_json(self):
        assert arrays.from_json('{"a": 1}') == {"a": 1}
        assert arrays.from_json("null") == []

    def test_from_json_malformed(self):
        with pytest.raises(JsonParseError):
            arrays.from_json("{")


class TestStructure:
    """Test the tree converters."""

    def test_convert_list_to_tree(self):
        rows = [
            {"id": 1, "parent_id": None},
            {"id": 2, "parent_id": 1},
            {"id": 3, "parent_id": 2},
            {"id": 4, "parent_id": 99},
        ]

        tree = structure.convert_list_to_tree(rows)

        assert list(tree) == [1]
        assert tree[1]["children"][2]["children"][3]["children"] == {}
        assert 4 not in tree

    def test_convert_flat_to_tree(self):
        tree = structure.convert_flat_to_tree([
            {"id": "a", "parentId": ""},
            {"id": "b", "parentId": "a"},
        ], child_nodes_field="nodes")

        assert list(tree["a"]["nodes"]) == ["b"]


class TestNumbers:
    """Test number parsing and rounding."""

    @pytest.mark.parametrize("value,expected", [
        ("Price: 1,234.50 USD", 1234.5),
        ("-3.5e2", -350.0),
        (".5", 0.5),
        (7, 7.0),
        ("no digits", None),
    ])
    def test_parse(self, value, expected):
        assert numbers.parse(value) == expected

    def test_steps(self):
        assert numbers.round_step(12, 5) == 10
        assert numbers.round_step(12.5, 5) == 15
        assert numbers.round_step(-2.5) == -3
        assert numbers.floor_step(19, 10) == 10
        assert numbers.ceil_step(11, 10) == 20

    def test_standard_deviation(self):
        assert numbers.standard_deviation([1, 1, 1]) == 0.0
