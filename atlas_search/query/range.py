# atlas_search/query/range.py
"""The range operator.

Bounds are added one at a time: ``range_(path)`` has no bound yet, the first
call fixes one side and the second call may only fix the other side.

Examples:
    range_("age").gte(18)                  # half-open, already usable
    range_("age").gte(18).lt(65)
    range_("born").lt(datetime(2000, 1, 1))
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from atlas_search.exceptions import InvalidArgumentError
from atlas_search.query.operators import PathLike, SearchDefinition, add_score, check_score
from atlas_search.query.paths import PathDefinition, as_path
from atlas_search.query.score import ScoreDefinition
from atlas_search.schema import Schema
from atlas_search.validation import instance_of, is_date, is_number

Bound = float | datetime


def _kind(value: Any, name: str) -> str:
    if is_number(value):
        return "number"
    if is_date(value):
        return "date"
    raise InvalidArgumentError(
        name, value, f"expected a number or a datetime, got {type(value).__name__}"
    )


@dataclass(frozen=True)
class RangeBound:
    value: Bound
    inclusive: bool


@dataclass(frozen=True)
class RangeSearchDefinition(SearchDefinition):
    operator_name = "range"

    path: PathDefinition
    lower: RangeBound | None = None
    upper: RangeBound | None = None
    score: ScoreDefinition | None = None

    def __post_init__(self) -> None:
        instance_of(self.path, PathDefinition, "path")
        if self.lower is None and self.upper is None:
            raise InvalidArgumentError("range", None, "at least one bound is required")
        kinds = set()
        for name, bound in (("lower", self.lower), ("upper", self.upper)):
            if bound is not None:
                instance_of(bound, RangeBound, name)
                kinds.add(_kind(bound.value, name))
        if len(kinds) > 1:
            raise InvalidArgumentError(
                "range", (self.lower, self.upper), "bounds must both be numbers or both datetimes"
            )
        check_score(self.score)

    def _render_body(self, schema: Schema) -> dict[str, Any]:
        body: dict[str, Any] = {"path": self.path.render(schema)}
        if self.lower is not None:
            body["gte" if self.lower.inclusive else "gt"] = self.lower.value
        if self.upper is not None:
            body["lte" if self.upper.inclusive else "lt"] = self.upper.value
        return add_score(body, self.score, schema)


class LowerBoundedRange(RangeSearchDefinition):
    """Range with only a lower bound; can still take an upper one."""

    def lt(self, value: Bound) -> RangeSearchDefinition:
        return RangeSearchDefinition(self.path, self.lower, RangeBound(value, False), self.score)

    def lte(self, value: Bound) -> RangeSearchDefinition:
        return RangeSearchDefinition(self.path, self.lower, RangeBound(value, True), self.score)


class UpperBoundedRange(RangeSearchDefinition):
    """Range with only an upper bound; can still take a lower one."""

    def gt(self, value: Bound) -> RangeSearchDefinition:
        return RangeSearchDefinition(self.path, RangeBound(value, False), self.upper, self.score)

    def gte(self, value: Bound) -> RangeSearchDefinition:
        return RangeSearchDefinition(self.path, RangeBound(value, True), self.upper, self.score)


@dataclass(frozen=True)
class RangeBuilder:
    path: PathDefinition
    score: ScoreDefinition | None = None

    def __post_init__(self) -> None:
        instance_of(self.path, PathDefinition, "path")
        check_score(self.score)

    def gt(self, value: Bound) -> LowerBoundedRange:
        return LowerBoundedRange(self.path, lower=RangeBound(value, False), score=self.score)

    def gte(self, value: Bound) -> LowerBoundedRange:
        return LowerBoundedRange(self.path, lower=RangeBound(value, True), score=self.score)

    def lt(self, value: Bound) -> UpperBoundedRange:
        return UpperBoundedRange(self.path, upper=RangeBound(value, False), score=self.score)

    def lte(self, value: Bound) -> UpperBoundedRange:
        return UpperBoundedRange(self.path, upper=RangeBound(value, True), score=self.score)


def range_(path: PathLike, score: ScoreDefinition | None = None) -> RangeBuilder:
    return RangeBuilder(as_path(path), score)
