# tests/test_facet.py
from datetime import datetime, timezone

import pytest

from atlas_search.exceptions import ArgumentOutOfRangeError, InvalidArgumentError
from atlas_search.query.facets import date_facet, facet, number_facet, string_facet
from atlas_search.query.operators import exists, text
from atlas_search.schema import fields_of
from tests.models import Person

F = fields_of(Person)


class TestStringFacet:
    def test_default_buckets_are_omitted(self):
        assert string_facet("s", "x").render() == {"type": "string", "path": "x"}
        assert string_facet("s", "x", 10).render() == {"type": "string", "path": "x"}

    def test_buckets(self):
        assert string_facet("s", "x", 100).render() == {
            "type": "string",
            "path": "x",
            "numBuckets": 100,
        }

    @pytest.mark.parametrize("buckets", [1, 1000])
    def test_bucket_bounds_are_inclusive(self, buckets):
        assert string_facet("s", "x", buckets).render()["numBuckets"] == buckets

    @pytest.mark.parametrize("buckets", [0, 1001])
    def test_buckets_out_of_range(self, buckets):
        with pytest.raises(ArgumentOutOfRangeError):
            string_facet("s", "x", buckets)

    def test_typed(self):
        assert string_facet("names", F.first_name).render(Person) == {
            "type": "string",
            "path": "fn",
        }


class TestNumberFacet:
    def test_boundaries(self):
        assert number_facet("n", "x", [0, 50, 100]).render() == {
            "type": "number",
            "path": "x",
            "boundaries": [0, 50, 100],
        }

    def test_default(self):
        assert number_facet("n", "x", [0, 50], "other").render() == {
            "type": "number",
            "path": "x",
            "boundaries": [0, 50],
            "default": "other",
        }

    @pytest.mark.parametrize("boundaries", [[], [1], [1, 1], [2, 1], [0, "1"], [0, True]])
    def test_invalid_boundaries(self, boundaries):
        with pytest.raises(InvalidArgumentError):
            number_facet("n", "x", boundaries)


class TestDateFacet:
    def test_boundaries(self):
        boundaries = [datetime(2000, 1, 1), datetime(2010, 1, 1), datetime(2020, 1, 1)]
        assert date_facet("d", F.birthday, boundaries, "older").render(Person) == {
            "type": "date",
            "path": "dob",
            "boundaries": boundaries,
            "default": "older",
        }

    def test_mixed_naive_and_aware_dates(self):
        boundaries = [datetime(2000, 1, 1), datetime(2010, 1, 1, tzinfo=timezone.utc)]
        with pytest.raises(InvalidArgumentError):
            date_facet("d", "x", boundaries)

    def test_numbers_are_not_dates(self):
        with pytest.raises(InvalidArgumentError):
            date_facet("d", "x", [0, 1])


class TestFacetOperator:
    def test_render(self):
        definition = facet(
            exists("x"),
            string_facet("string", "x", 100),
            number_facet("number", "y", [0, 50, 100]),
            date_facet("date", "z", [datetime(2000, 1, 1), datetime(2020, 1, 1)]),
        )
        assert definition.render() == {
            "facet": {
                "operator": {"exists": {"path": "x"}},
                "facets": {
                    "string": {"type": "string", "path": "x", "numBuckets": 100},
                    "number": {"type": "number", "path": "y", "boundaries": [0, 50, 100]},
                    "date": {
                        "type": "date",
                        "path": "z",
                        "boundaries": [datetime(2000, 1, 1), datetime(2020, 1, 1)],
                    },
                },
            }
        }

    def test_keys_equal_facet_names(self):
        definition = facet(text("foo", "x"), string_facet("a", "x"), string_facet("b", "y"))
        assert list(definition.render()["facet"]["facets"]) == ["a", "b"]

    def test_duplicate_names_are_rejected(self):
        with pytest.raises(InvalidArgumentError):
            facet(exists("x"), string_facet("a", "x"), string_facet("a", "y"))

    def test_needs_a_facet(self):
        with pytest.raises(InvalidArgumentError):
            facet(exists("x"))

    def test_needs_an_operator(self):
        with pytest.raises(InvalidArgumentError):
            facet(None, string_facet("a", "x"))

    def test_typed(self):
        definition = facet(exists(F.retired), string_facet("cities", F.address.city))
        assert definition.render(Person) == {
            "facet": {
                "operator": {"exists": {"path": "ret"}},
                "facets": {"cities": {"type": "string", "path": "address.city"}},
            }
        }
