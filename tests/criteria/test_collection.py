"""Unit tests for the ordered criteria collections."""

import pytest

from criteria_search_mcp.criteria import Criteria, CriteriaGroup, CriteriaList, Filter, Operator
from criteria_search_mcp.exceptions import InvalidInputError


def make_filter(left_condition="name", operator=Operator.EQ, value="John", id_="f-1"):
    return Filter(id=id_, left_condition=left_condition, operator=operator, value=value)


class TestOperator:
    """Test operator resolution."""

    def test_parse_codes_and_labels(self):
        assert Operator.parse(Operator.LT) is Operator.LT
        assert Operator.parse("rgx") is Operator.RGX
        assert Operator.parse("Not Contains") is Operator.NC
        assert Operator.parse("not contains") is Operator.NC
        assert Operator.parse(" GREATER THAN ") is Operator.GT

    def test_parse_unknown(self):
        assert Operator.parse("Between") is None
        assert Operator.parse("") is None
        assert Operator.parse(3) is None


class TestCriteria:
    """Test the generic ordered collection."""

    @pytest.fixture(autouse=True)
    def setup(self):
        self.criteria = Criteria()
        for term in ("a", "b", "c"):
            self.criteria.add(term)

    def test_starts_empty(self):
        criteria = Criteria()
        assert criteria.size() == 0
        assert criteria.all() == []

    def test_add_keeps_insertion_order(self):
        assert self.criteria.all() == ["a", "b", "c"]
        self.criteria.add("a")
        assert self.criteria.all() == ["a", "b", "c", "a"]

    def test_all_returns_a_copy(self):
        terms = self.criteria.all()
        terms.append("z")
        terms[0] = "changed"
        assert self.criteria.all() == ["a", "b", "c"]
        assert self.criteria.size() == 3

    def test_get(self):
        assert self.criteria.get(0) == "a"
        assert self.criteria.get(2) == "c"
        assert self.criteria.get(3) is None
        assert self.criteria.get(-1) is None

    def test_set_within_bounds(self):
        self.criteria.set(1, "B")
        assert self.criteria.all() == ["a", "B", "c"]
        assert self.criteria.size() == 3

    def test_set_beyond_bounds_grows_with_placeholders(self):
        self.criteria.set(5, "f")
        assert self.criteria.size() == 6
        assert self.criteria.all() == ["a", "b", "c", None, None, "f"]

    def test_set_at_end_appends(self):
        self.criteria.set(3, "d")
        assert self.criteria.all() == ["a", "b", "c", "d"]

    def test_set_negative_index_is_ignored(self):
        self.criteria.set(-1, "z")
        assert self.criteria.all() == ["a", "b", "c"]

    def test_insert_after_index(self):
        self.criteria.insert(0, "x")
        assert self.criteria.all() == ["a", "x", "b", "c"]

    def test_insert_after_last_index(self):
        self.criteria.insert(2, "x")
        assert self.criteria.all() == ["a", "b", "c", "x"]

    def test_insert_after_minus_one_prepends(self):
        self.criteria.insert(-1, "x")
        assert self.criteria.all() == ["x", "a", "b", "c"]

    def test_insert_out_of_range_clamps_to_end(self):
        self.criteria.insert(10, "x")
        assert self.criteria.all() == ["a", "b", "c", "x"]

    def test_insert_into_empty(self):
        criteria = Criteria()
        criteria.insert(0, "x")
        assert criteria.all() == ["x"]

    def test_remove(self):
        self.criteria.remove(1)
        assert self.criteria.all() == ["a", "c"]
        self.criteria.remove(0)
        assert self.criteria.all() == ["c"]

    def test_remove_out_of_range_is_noop(self):
        self.criteria.remove(3)
        self.criteria.remove(-1)
        assert self.criteria.size() == 3
        Criteria().remove(0)

    def test_clear(self):
        self.criteria.clear()
        assert self.criteria.size() == 0
        assert self.criteria.all() == []

    def test_len_iter_and_equality(self):
        assert len(self.criteria) == 3
        assert list(self.criteria) == ["a", "b", "c"]

        other = Criteria()
        for term in ("a", "b", "c"):
            other.add(term)
        assert other == self.criteria
        other.remove(0)
        assert other != self.criteria

    def test_works_with_objects(self):
        criteria = Criteria()
        criteria.add({"key": 1})
        criteria.all()[0]["key"] = 2
        # all() is a shallow copy, items themselves are shared
        assert criteria.get(0) == {"key": 2}


class TestCriteriaList:
    """Test the OR-group of filters."""

    def test_valid_filters_skip_blank_rows_and_placeholders(self):
        criteria_list = CriteriaList()
        criteria_list.add(make_filter(value="John"))
        criteria_list.add(make_filter(value="   "))
        criteria_list.add(make_filter(left_condition="", value="x"))
        criteria_list.set(4, make_filter(value="Jane"))

        valid = criteria_list.valid_filters()
        assert [f.value for f in valid] == ["John", "Jane"]

    def test_filters_with_same_content_but_different_ids_are_equal(self):
        assert make_filter(id_="1") == make_filter(id_="2")
        assert make_filter(value="a") != make_filter(value="b")

    def test_round_trip_through_list(self):
        criteria_list = CriteriaList()
        criteria_list.add(make_filter())
        criteria_list.add(make_filter(left_condition="age", operator=Operator.GT, value="30", id_="f-2"))

        raw = criteria_list.to_list()
        assert raw[1] == {"id": "f-2", "left_condition": "age", "operator": "GT", "value": "30"}
        assert CriteriaList.from_list(raw) == criteria_list

    def test_from_list_rejects_bad_shapes(self):
        with pytest.raises(InvalidInputError):
            CriteriaList.from_list({"left_condition": "a"})
        with pytest.raises(InvalidInputError):
            CriteriaList.from_list(["not a filter"])


class TestCriteriaGroup:
    """Test the AND-group of criteria lists."""

    def test_nested_operations(self):
        group = CriteriaGroup()
        first = CriteriaList()
        first.add(make_filter())
        group.add(first)

        group.get(0).add(make_filter(value="Jane"))
        assert group.get(0).size() == 2

        second = CriteriaList()
        group.insert(-1, second)
        assert group.get(0) is second
        assert group.get(1) is first

    def test_valid_filter_count(self):
        group = CriteriaGroup.from_list(
            [
                [{"left_condition": "name", "operator": "EQ", "value": "John"}, {"left_condition": "age", "value": ""}],
                [{"leftCondition": "dept", "operator": "Contains", "value": "IT"}],
            ]
        )
        assert group.size() == 2
        assert group.valid_filter_count() == 2
        assert group.get(1).get(0).operator is Operator.C

    def test_placeholders_survive_serialisation(self):
        group = CriteriaGroup()
        group.set(1, CriteriaList())
        raw = group.to_list()
        assert raw == [None, []]
        assert CriteriaGroup.from_list(raw).get(0) is None

    def test_from_list_rejects_bad_shapes(self):
        with pytest.raises(InvalidInputError):
            CriteriaGroup.from_list("[]")
        with pytest.raises(InvalidInputError, match="Criteria list 0"):
            CriteriaGroup.from_list([{"value": "x"}])
