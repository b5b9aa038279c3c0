# atlas_search/query/score.py
"""Score modifiers and the score function expression tree.

Examples:
    boost(2)
    boost_path("popularity", undefined=1)
    function(multiply(relevance(), log1p(path_fn("votes"))))
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from atlas_search.exceptions import ArgumentOutOfRangeError, InvalidArgumentError
from atlas_search.query.paths import Field, PathDefinition, as_path
from atlas_search.schema import SchemaLike, as_schema
from atlas_search.validation import greater_than_zero, instance_of, number, optional

# Score functions


@dataclass(frozen=True)
class ScoreFunction(ABC):
    """Node of an arithmetic expression computing a document's score."""

    @abstractmethod
    def render(self, schema: SchemaLike = None) -> dict[str, Any]: ...


@dataclass(frozen=True)
class PathFunction(ScoreFunction):
    path: PathDefinition
    undefined: float = 0

    def __post_init__(self) -> None:
        instance_of(self.path, PathDefinition, "path")
        number(self.undefined, "undefined")

    def render(self, schema: SchemaLike = None) -> dict[str, Any]:
        rendered = self.path.render(schema)
        if self.undefined == 0:
            return {"path": rendered}
        return {"path": {"value": rendered, "undefined": self.undefined}}


@dataclass(frozen=True)
class RelevanceFunction(ScoreFunction):
    def render(self, schema: SchemaLike = None) -> dict[str, Any]:
        return {"score": "relevance"}


@dataclass(frozen=True)
class ConstantFunction(ScoreFunction):
    value: float

    def __post_init__(self) -> None:
        number(self.value, "value")

    def render(self, schema: SchemaLike = None) -> dict[str, Any]:
        return {"constant": self.value}


@dataclass(frozen=True)
class _ArithmeticFunction(ScoreFunction):
    children: tuple[ScoreFunction, ...]

    operator = ""

    def __post_init__(self) -> None:
        instance_of(self.children, tuple, "children")
        if len(self.children) < 2:
            raise InvalidArgumentError(
                "children", self.children, f"{self.operator} needs at least two expressions"
            )
        for child in self.children:
            instance_of(child, ScoreFunction, "children")

    def render(self, schema: SchemaLike = None) -> dict[str, Any]:
        resolved = as_schema(schema)
        return {self.operator: [child.render(resolved) for child in self.children]}


@dataclass(frozen=True)
class AddFunction(_ArithmeticFunction):
    operator = "add"


@dataclass(frozen=True)
class MultiplyFunction(_ArithmeticFunction):
    operator = "multiply"


@dataclass(frozen=True)
class GaussFunction(ScoreFunction):
    """Gaussian decay of a numeric field around ``origin``."""

    path: PathDefinition
    origin: float
    scale: float
    decay: float | None = None
    offset: float | None = None

    def __post_init__(self) -> None:
        instance_of(self.path, PathDefinition, "path")
        number(self.origin, "origin")
        greater_than_zero(self.scale, "scale")
        optional(self.decay, number, "decay")
        if self.decay is not None and not 0 < self.decay < 1:
            raise ArgumentOutOfRangeError(
                "decay", self.decay, f"value is not strictly between 0 and 1: {self.decay}"
            )
        optional(self.offset, number, "offset")

    def render(self, schema: SchemaLike = None) -> dict[str, Any]:
        body: dict[str, Any] = {
            "path": self.path.render(schema),
            "origin": self.origin,
            "scale": self.scale,
        }
        if self.decay is not None:
            body["decay"] = self.decay
        if self.offset is not None:
            body["offset"] = self.offset
        return {"gauss": body}


@dataclass(frozen=True)
class _UnaryFunction(ScoreFunction):
    child: ScoreFunction

    operator = ""

    def __post_init__(self) -> None:
        instance_of(self.child, ScoreFunction, "child")

    def render(self, schema: SchemaLike = None) -> dict[str, Any]:
        return {self.operator: self.child.render(schema)}


@dataclass(frozen=True)
class LogFunction(_UnaryFunction):
    operator = "log"


@dataclass(frozen=True)
class Log1pFunction(_UnaryFunction):
    operator = "log1p"


def path_fn(path: Field | PathDefinition, undefined: float = 0) -> PathFunction:
    """Value of a numeric field; ``undefined`` replaces missing values."""
    return PathFunction(as_path(path), undefined)


def relevance() -> RelevanceFunction:
    return RelevanceFunction()


def constant_fn(value: float) -> ConstantFunction:
    return ConstantFunction(value)


def add(*functions: ScoreFunction) -> AddFunction:
    return AddFunction(functions)


def multiply(*functions: ScoreFunction) -> MultiplyFunction:
    return MultiplyFunction(functions)


def gauss(
    path: Field | PathDefinition,
    origin: float,
    scale: float,
    decay: float | None = None,
    offset: float | None = None,
) -> GaussFunction:
    return GaussFunction(as_path(path), origin, scale, decay, offset)


def log(function: ScoreFunction) -> LogFunction:
    return LogFunction(function)


def log1p(function: ScoreFunction) -> Log1pFunction:
    return Log1pFunction(function)


# Scores


@dataclass(frozen=True)
class ScoreDefinition(ABC):
    """How an operator modifies the relevance score of its matches."""

    @abstractmethod
    def render(self, schema: SchemaLike = None) -> dict[str, Any]: ...


@dataclass(frozen=True)
class BoostValueScore(ScoreDefinition):
    value: float

    def __post_init__(self) -> None:
        greater_than_zero(self.value, "value")

    def render(self, schema: SchemaLike = None) -> dict[str, Any]:
        return {"boost": {"value": self.value}}


@dataclass(frozen=True)
class BoostPathScore(ScoreDefinition):
    path: PathDefinition
    undefined: float = 0

    def __post_init__(self) -> None:
        instance_of(self.path, PathDefinition, "path")
        number(self.undefined, "undefined")

    def render(self, schema: SchemaLike = None) -> dict[str, Any]:
        body: dict[str, Any] = {"path": self.path.render(schema)}
        if self.undefined != 0:
            body["undefined"] = self.undefined
        return {"boost": body}


@dataclass(frozen=True)
class ConstantScore(ScoreDefinition):
    value: float

    def __post_init__(self) -> None:
        greater_than_zero(self.value, "value")

    def render(self, schema: SchemaLike = None) -> dict[str, Any]:
        return {"constant": {"value": self.value}}


@dataclass(frozen=True)
class FunctionScore(ScoreDefinition):
    function: ScoreFunction

    def __post_init__(self) -> None:
        instance_of(self.function, ScoreFunction, "function")

    def render(self, schema: SchemaLike = None) -> dict[str, Any]:
        return {"function": self.function.render(schema)}


def boost(value: float) -> BoostValueScore:
    """Multiply the score by a constant."""
    return BoostValueScore(value)


def boost_path(path: Field | PathDefinition, undefined: float = 0) -> BoostPathScore:
    """Multiply the score by the value of a numeric field."""
    return BoostPathScore(as_path(path), undefined)


def constant(value: float) -> ConstantScore:
    """Replace the score with a constant."""
    return ConstantScore(value)


def function(fn: ScoreFunction) -> FunctionScore:
    """Replace the score with the result of an expression."""
    return FunctionScore(fn)
