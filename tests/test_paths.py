# tests/test_paths.py
import pytest

from atlas_search.exceptions import InvalidArgumentError, SchemaMismatchError
from atlas_search.query.paths import (
    AnalyzerPath,
    MultiPath,
    MultiQuery,
    SinglePath,
    SingleQuery,
    WildcardPath,
    analyzer,
    as_path,
    as_query,
    wildcard_path,
)
from atlas_search.schema import fields_of
from tests.models import Person

F = fields_of(Person)


class TestQuery:
    def test_string_becomes_single_query(self):
        q = as_query("foo")
        assert q == SingleQuery("foo")
        assert q.render() == "foo"

    def test_strings_become_multi_query(self):
        q = as_query(["foo", "bar"])
        assert q == MultiQuery(("foo", "bar"))
        assert q.render() == ["foo", "bar"]

    def test_empty_multi_query_renders_empty_list(self):
        assert as_query([]).render() == []

    def test_existing_query_is_reused(self):
        q = SingleQuery("foo")
        assert as_query(q) is q

    def test_none_is_rejected(self):
        with pytest.raises(InvalidArgumentError):
            as_query(None)

    def test_non_string_items_are_rejected(self):
        with pytest.raises(InvalidArgumentError):
            as_query(["foo", None])

    def test_numbers_are_rejected(self):
        with pytest.raises(InvalidArgumentError):
            as_query(42)


class TestPath:
    def test_single(self):
        p = as_path("x")
        assert p == SinglePath("x")
        assert p.render() == "x"

    def test_multi_keeps_order_and_duplicates(self):
        p = as_path(["y", "x", "y"])
        assert isinstance(p, MultiPath)
        assert p.render() == ["y", "x", "y"]

    def test_analyzer(self):
        assert analyzer("x", "english").render() == {"value": "x", "multi": "english"}

    def test_wildcard(self):
        assert wildcard_path("x.*").render() == {"wildcard": "x.*"}

    def test_wildcard_is_not_resolved(self):
        assert wildcard_path("first*").render(Person) == {"wildcard": "first*"}

    def test_existing_path_is_reused(self):
        p = AnalyzerPath("x", "english")
        assert as_path(p) is p

    @pytest.mark.parametrize("value", [None, "", 42, ["x", ""], []])
    def test_invalid_values_are_rejected(self, value):
        with pytest.raises(InvalidArgumentError):
            as_path(value)

    def test_wildcard_requires_pattern(self):
        with pytest.raises(InvalidArgumentError):
            WildcardPath("")

    def test_analyzer_requires_name(self):
        with pytest.raises(InvalidArgumentError):
            analyzer("x", None)


class TestTypedPath:
    def test_single_ref(self):
        assert as_path(F.first_name).render(Person) == "fn"

    def test_string_resolved_through_model(self):
        assert as_path("first_name").render(Person) == "fn"

    def test_multi_ref(self):
        assert as_path([F.first_name, F.last_name]).render(Person) == ["fn", "ln"]

    def test_analyzer_ref(self):
        assert analyzer(F.first_name, "english").render(Person) == {
            "value": "fn",
            "multi": "english",
        }

    def test_ref_without_schema_raises(self):
        with pytest.raises(SchemaMismatchError):
            as_path(F.first_name).render()

    def test_resolution_is_not_cached(self):
        p = as_path("first_name")
        assert p.render(Person) == "fn"
        assert p.render() == "first_name"
