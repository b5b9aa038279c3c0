# tests/test_span.py
import pytest

from atlas_search.exceptions import ArgumentOutOfRangeError, InvalidArgumentError
from atlas_search.query.operators import text
from atlas_search.query.spans import (
    span,
    span_first,
    span_near,
    span_or,
    span_subtract,
    span_term,
)
from atlas_search.schema import fields_of
from tests.models import Person

F = fields_of(Person)


def test_term():
    assert span_term("foo", "x").render() == {"term": {"query": "foo", "path": "x"}}


def test_term_typed():
    assert span_term("foo", F.first_name).render(Person) == {"term": {"query": "foo", "path": "fn"}}


def test_first():
    assert span_first(span_term("foo", "x"), 5).render() == {
        "first": {"operator": {"term": {"query": "foo", "path": "x"}}, "endPositionLte": 5}
    }


@pytest.mark.parametrize("end", [0, -1])
def test_first_end_position_must_be_positive(end):
    with pytest.raises(ArgumentOutOfRangeError):
        span_first(span_term("foo", "x"), end)


def test_near():
    clauses = [span_term("foo", "x"), span_term("bar", "x")]
    assert span_near(clauses).render() == {
        "near": {
            "clauses": [
                {"term": {"query": "foo", "path": "x"}},
                {"term": {"query": "bar", "path": "x"}},
            ],
            "slop": 0,
            "inOrder": False,
        }
    }
    assert span_near(clauses, 5, True).render() == {
        "near": {
            "clauses": [
                {"term": {"query": "foo", "path": "x"}},
                {"term": {"query": "bar", "path": "x"}},
            ],
            "slop": 5,
            "inOrder": True,
        }
    }


def test_near_needs_clauses():
    with pytest.raises(InvalidArgumentError):
        span_near([])


def test_near_negative_slop():
    with pytest.raises(ArgumentOutOfRangeError):
        span_near([span_term("foo", "x")], -1)


def test_or():
    assert span_or(span_term("foo", "x"), span_term("bar", "x")).render() == {
        "or": {
            "clauses": [
                {"term": {"query": "foo", "path": "x"}},
                {"term": {"query": "bar", "path": "x"}},
            ]
        }
    }


def test_subtract():
    assert span_subtract(span_term("foo", "x"), span_term("bar", "x")).render() == {
        "subtract": {
            "include": {"term": {"query": "foo", "path": "x"}},
            "exclude": {"term": {"query": "bar", "path": "x"}},
        }
    }


def test_span_operator():
    definition = span(span_first(span_term("foo", "x"), 5))
    assert definition.render() == {
        "span": {
            "first": {"operator": {"term": {"query": "foo", "path": "x"}}, "endPositionLte": 5}
        }
    }


def test_span_operator_typed():
    definition = span(
        span_subtract(
            span_term("foo", F.first_name),
            span_near([span_term("bar", F.last_name), span_term("baz", "biography")], slop=2),
        )
    )
    assert definition.render(Person) == {
        "span": {
            "subtract": {
                "include": {"term": {"query": "foo", "path": "fn"}},
                "exclude": {
                    "near": {
                        "clauses": [
                            {"term": {"query": "bar", "path": "ln"}},
                            {"term": {"query": "baz", "path": "bio"}},
                        ],
                        "slop": 2,
                        "inOrder": False,
                    }
                },
            }
        }
    }


def test_operators_are_not_spans():
    with pytest.raises(InvalidArgumentError):
        span(text("foo", "x"))
    with pytest.raises(InvalidArgumentError):
        span_or(span_term("foo", "x"), text("foo", "x"))
