# tests/test_range.py
from datetime import datetime

import pytest
from bson import Int64

from atlas_search.exceptions import InvalidArgumentError
from atlas_search.query.range import (
    LowerBoundedRange,
    RangeBound,
    RangeBuilder,
    RangeSearchDefinition,
    UpperBoundedRange,
    range_,
)
from atlas_search.query.paths import SinglePath
from atlas_search.query.score import constant
from atlas_search.schema import fields_of
from tests.models import Person

F = fields_of(Person)


def test_builder_has_no_bounds_yet():
    builder = range_("x")
    assert isinstance(builder, RangeBuilder)
    assert not isinstance(builder, RangeSearchDefinition)


@pytest.mark.parametrize(
    "method,key", [("gt", "gt"), ("gte", "gte"), ("lt", "lt"), ("lte", "lte")]
)
def test_single_bound(method, key):
    definition = getattr(range_("x"), method)(1)
    assert definition.render() == {"range": {"path": "x", key: 1}}


def test_lower_bound_returns_lower_bounded_range():
    definition = range_("x").gt(1)
    assert isinstance(definition, LowerBoundedRange)
    assert not hasattr(definition, "gte")


def test_upper_bound_returns_upper_bounded_range():
    definition = range_("x").lt(1)
    assert isinstance(definition, UpperBoundedRange)
    assert not hasattr(definition, "lte")


def test_both_bounds():
    definition = range_("x").gt(60.1).lt(60.2)
    assert type(definition) is RangeSearchDefinition
    assert definition.render() == {"range": {"path": "x", "gt": 60.1, "lt": 60.2}}


def test_order_of_calls_does_not_matter():
    assert range_("x").gt(60.1).lt(60.2).render() == range_("x").lt(60.2).gt(60.1).render()
    assert range_("x").gte(1).lte(5).render() == range_("x").lte(5).gte(1).render()


def test_complete_range_has_no_more_bound_methods():
    definition = range_("x").gte(1).lte(5)
    for method in ("gt", "gte", "lt", "lte"):
        assert not hasattr(definition, method)


def test_inclusive_bounds():
    assert range_("x").gte(1).lte(5).render() == {"range": {"path": "x", "gte": 1, "lte": 5}}


def test_int64_bounds():
    assert range_("x").gte(Int64(1)).render() == {"range": {"path": "x", "gte": Int64(1)}}


def test_dates():
    low, high = datetime(2000, 1, 1), datetime(2010, 1, 1)
    assert range_(F.birthday).gte(low).lt(high).render(Person) == {
        "range": {"path": "dob", "gte": low, "lt": high}
    }


def test_score():
    assert range_("x", constant(1)).gt(1).lt(2).render() == {
        "range": {"path": "x", "gt": 1, "lt": 2, "score": {"constant": {"value": 1}}}
    }


def test_multi_path():
    assert range_(["x", "y"]).gt(1).render() == {"range": {"path": ["x", "y"], "gt": 1}}


def test_mixed_kinds_are_rejected():
    with pytest.raises(InvalidArgumentError):
        range_("x").gt(1).lt(datetime(2000, 1, 1))


@pytest.mark.parametrize("value", [True, "1", None, [1]])
def test_bad_bound_values(value):
    with pytest.raises(InvalidArgumentError):
        range_("x").gt(value)


def test_requires_a_bound():
    with pytest.raises(InvalidArgumentError):
        RangeSearchDefinition(SinglePath("x"))


def test_direct_construction():
    definition = RangeSearchDefinition(SinglePath("x"), upper=RangeBound(10, True))
    assert definition.render() == {"range": {"path": "x", "lte": 10}}
