# atlas_search/query/spans.py
"""Positional (span) queries.

Examples:
    span(span_first(span_term("foo", "plot"), 5))
    span(span_near([span_term("foo", "x"), span_term("bar", "x")], slop=5, in_order=True))
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from atlas_search.exceptions import ArgumentOutOfRangeError, InvalidArgumentError
from atlas_search.query.operators import PathLike, QueryLike, SearchDefinition
from atlas_search.query.paths import PathDefinition, QueryDefinition, as_path, as_query
from atlas_search.schema import Schema, SchemaLike, as_schema
from atlas_search.validation import instance_of, integer, zero_or_greater


@dataclass(frozen=True)
class SpanDefinition(ABC):
    @abstractmethod
    def render(self, schema: SchemaLike = None) -> dict[str, Any]: ...


def _clauses(clauses: tuple[SpanDefinition, ...], name: str) -> None:
    instance_of(clauses, tuple, name)
    if not clauses:
        raise InvalidArgumentError(name, clauses, "at least one clause is required")
    for clause in clauses:
        instance_of(clause, SpanDefinition, name)


@dataclass(frozen=True)
class TermSpan(SpanDefinition):
    query: QueryDefinition
    path: PathDefinition

    def __post_init__(self) -> None:
        instance_of(self.query, QueryDefinition, "query")
        instance_of(self.path, PathDefinition, "path")

    def render(self, schema: SchemaLike = None) -> dict[str, Any]:
        return {"term": {"query": self.query.render(), "path": self.path.render(schema)}}


@dataclass(frozen=True)
class FirstSpan(SpanDefinition):
    """Matches ``operator`` only near the beginning of the field."""

    operator: SpanDefinition
    end_position_lte: int

    def __post_init__(self) -> None:
        instance_of(self.operator, SpanDefinition, "operator")
        integer(self.end_position_lte, "end_position_lte")
        if self.end_position_lte < 1:
            raise ArgumentOutOfRangeError(
                "end_position_lte",
                self.end_position_lte,
                f"value is less than one: {self.end_position_lte}",
            )

    def render(self, schema: SchemaLike = None) -> dict[str, Any]:
        return {
            "first": {
                "operator": self.operator.render(schema),
                "endPositionLte": self.end_position_lte,
            }
        }


@dataclass(frozen=True)
class NearSpan(SpanDefinition):
    clauses: tuple[SpanDefinition, ...]
    slop: int = 0
    in_order: bool = False

    def __post_init__(self) -> None:
        _clauses(self.clauses, "clauses")
        zero_or_greater(integer(self.slop, "slop"), "slop")
        instance_of(self.in_order, bool, "in_order")

    def render(self, schema: SchemaLike = None) -> dict[str, Any]:
        resolved = as_schema(schema)
        return {
            "near": {
                "clauses": [clause.render(resolved) for clause in self.clauses],
                "slop": self.slop,
                "inOrder": self.in_order,
            }
        }


@dataclass(frozen=True)
class OrSpan(SpanDefinition):
    clauses: tuple[SpanDefinition, ...]

    def __post_init__(self) -> None:
        _clauses(self.clauses, "clauses")

    def render(self, schema: SchemaLike = None) -> dict[str, Any]:
        resolved = as_schema(schema)
        return {"or": {"clauses": [clause.render(resolved) for clause in self.clauses]}}


@dataclass(frozen=True)
class SubtractSpan(SpanDefinition):
    """Matches of ``include`` that do not overlap a match of ``exclude``."""

    include: SpanDefinition
    exclude: SpanDefinition

    def __post_init__(self) -> None:
        instance_of(self.include, SpanDefinition, "include")
        instance_of(self.exclude, SpanDefinition, "exclude")

    def render(self, schema: SchemaLike = None) -> dict[str, Any]:
        resolved = as_schema(schema)
        return {
            "subtract": {
                "include": self.include.render(resolved),
                "exclude": self.exclude.render(resolved),
            }
        }


@dataclass(frozen=True)
class SpanSearchDefinition(SearchDefinition):
    operator_name = "span"

    definition: SpanDefinition

    def __post_init__(self) -> None:
        instance_of(self.definition, SpanDefinition, "definition")

    def _render_body(self, schema: Schema) -> dict[str, Any]:
        return self.definition.render(schema)


def span_term(query: QueryLike, path: PathLike) -> TermSpan:
    return TermSpan(as_query(query), as_path(path))


def span_first(operator: SpanDefinition, end_position_lte: int) -> FirstSpan:
    return FirstSpan(operator, end_position_lte)


def span_near(clauses: Iterable[SpanDefinition], slop: int = 0, in_order: bool = False) -> NearSpan:
    return NearSpan(tuple(clauses), slop, in_order)


def span_or(*clauses: SpanDefinition) -> OrSpan:
    return OrSpan(clauses)


def span_subtract(include: SpanDefinition, exclude: SpanDefinition) -> SubtractSpan:
    return SubtractSpan(include, exclude)


def span(definition: SpanDefinition) -> SpanSearchDefinition:
    """Wrap a span definition as a search operator."""
    return SpanSearchDefinition(definition)
