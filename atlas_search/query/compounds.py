# atlas_search/query/compounds.py
from collections.abc import Iterable
from dataclasses import dataclass, replace
from typing import Any

from atlas_search.exceptions import InvalidArgumentError
from atlas_search.query.operators import SearchDefinition, add_score, check_score
from atlas_search.query.score import ScoreDefinition
from atlas_search.schema import Schema
from atlas_search.validation import instance_of, integer, zero_or_greater

Clauses = tuple[SearchDefinition, ...]
ClauseArg = SearchDefinition | Iterable[SearchDefinition]


def _extend(
    existing: Clauses | None,
    clauses: tuple[ClauseArg, ...],
    name: str,
) -> Clauses:
    # A single non-operator argument is an iterable of clauses.
    if len(clauses) == 1 and not isinstance(clauses[0], SearchDefinition):
        if not isinstance(clauses[0], Iterable):
            instance_of(clauses[0], SearchDefinition, name)
        clauses = tuple(clauses[0])
    if not clauses:
        raise InvalidArgumentError(name, clauses, "at least one clause is required")
    for clause in clauses:
        instance_of(clause, SearchDefinition, name)
    return (existing or ()) + clauses


@dataclass(frozen=True)
class CompoundSearchDefinition(SearchDefinition):
    """Boolean combination of other operators.

    Every clause method returns a new compound; clauses given to the same
    method across calls accumulate in order.

    Examples:
        compound().must(text("foo", "title")).must_not(exists("deleted"))
        compound().should(a, b, c).minimum_should_match(2)
    """

    operator_name = "compound"

    must_clauses: Clauses | None = None
    must_not_clauses: Clauses | None = None
    should_clauses: Clauses | None = None
    filter_clauses: Clauses | None = None
    should_minimum: int = 0
    score: ScoreDefinition | None = None

    def __post_init__(self) -> None:
        for name in ("must_clauses", "must_not_clauses", "should_clauses", "filter_clauses"):
            clauses = getattr(self, name)
            if clauses is not None:
                instance_of(clauses, tuple, name)
                for clause in clauses:
                    instance_of(clause, SearchDefinition, name)
        integer(self.should_minimum, "minimum_should_match")
        zero_or_greater(self.should_minimum, "minimum_should_match")
        check_score(self.score)

    def must(self, *clauses: ClauseArg) -> "CompoundSearchDefinition":
        """Clauses that must all match; they contribute to the score."""
        return replace(self, must_clauses=_extend(self.must_clauses, clauses, "must"))

    def must_not(self, *clauses: ClauseArg) -> "CompoundSearchDefinition":
        """Clauses that must not match."""
        return replace(self, must_not_clauses=_extend(self.must_not_clauses, clauses, "must_not"))

    def should(self, *clauses: ClauseArg) -> "CompoundSearchDefinition":
        """Clauses that raise the score when they match."""
        return replace(self, should_clauses=_extend(self.should_clauses, clauses, "should"))

    def filter(self, *clauses: ClauseArg) -> "CompoundSearchDefinition":
        """Clauses that must all match without affecting the score."""
        return replace(self, filter_clauses=_extend(self.filter_clauses, clauses, "filter"))

    def minimum_should_match(self, value: int) -> "CompoundSearchDefinition":
        return replace(self, should_minimum=value)

    def _render_body(self, schema: Schema) -> dict[str, Any]:
        body: dict[str, Any] = {}
        for key, clauses in (
            ("must", self.must_clauses),
            ("mustNot", self.must_not_clauses),
            ("should", self.should_clauses),
            ("filter", self.filter_clauses),
        ):
            if clauses is not None:
                body[key] = [clause.render(schema) for clause in clauses]
        if self.should_minimum > 0:
            body["minimumShouldMatch"] = self.should_minimum
        return add_score(body, self.score, schema)


def compound(score: ScoreDefinition | None = None) -> CompoundSearchDefinition:
    return CompoundSearchDefinition(score=score)
