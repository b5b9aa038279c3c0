# atlas_search/query/paths.py
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from atlas_search.exceptions import InvalidArgumentError
from atlas_search.schema import FieldRef, SchemaLike, as_schema
from atlas_search.validation import instance_of, non_empty_string, not_none

Field = str | FieldRef


def check_field(value: Any, name: str = "field") -> Field:
    """Accept a non-empty field name or a FieldRef."""
    if isinstance(value, FieldRef):
        return value
    return non_empty_string(not_none(value, name), name)


# Queries


@dataclass(frozen=True)
class QueryDefinition(ABC):
    """The literal text an operator searches for."""

    @abstractmethod
    def render(self) -> str | list[str]: ...


@dataclass(frozen=True)
class SingleQuery(QueryDefinition):
    query: str

    def __post_init__(self) -> None:
        instance_of(self.query, str, "query")

    def render(self) -> str:
        return self.query


@dataclass(frozen=True)
class MultiQuery(QueryDefinition):
    queries: tuple[str, ...]

    def __post_init__(self) -> None:
        instance_of(self.queries, tuple, "queries")
        for item in self.queries:
            instance_of(item, str, "queries")

    def render(self) -> list[str]:
        return list(self.queries)


def as_query(value: str | Iterable[str] | QueryDefinition) -> QueryDefinition:
    """Build a query from a string or an iterable of strings.

    Examples:
        as_query("born")            # -> "born"
        as_query(["born", "dead"])  # -> ["born", "dead"]
    """
    match value:
        case QueryDefinition():
            return value
        case str():
            return SingleQuery(value)
        case None:
            raise InvalidArgumentError("query", value, "must not be None")
        case Iterable():
            return MultiQuery(tuple(value))
        case _:
            raise InvalidArgumentError(
                "query", value, f"expected a string or strings, got {type(value).__name__}"
            )


# Paths


@dataclass(frozen=True)
class PathDefinition(ABC):
    """The indexed field(s) an operator searches."""

    @abstractmethod
    def render(self, schema: SchemaLike = None) -> str | list[str] | dict[str, str]: ...


@dataclass(frozen=True)
class SinglePath(PathDefinition):
    field: Field

    def __post_init__(self) -> None:
        check_field(self.field)

    def render(self, schema: SchemaLike = None) -> str:
        return as_schema(schema).resolve(self.field)


@dataclass(frozen=True)
class MultiPath(PathDefinition):
    fields: tuple[Field, ...]

    def __post_init__(self) -> None:
        instance_of(self.fields, tuple, "fields")
        if not self.fields:
            raise InvalidArgumentError("fields", self.fields, "must not be empty")
        for item in self.fields:
            check_field(item, "fields")

    def render(self, schema: SchemaLike = None) -> list[str]:
        resolved = as_schema(schema)
        return [resolved.resolve(item) for item in self.fields]


@dataclass(frozen=True)
class AnalyzerPath(PathDefinition):
    """A field searched through one of its alternate (multi) analyzers."""

    field: Field
    analyzer: str

    def __post_init__(self) -> None:
        check_field(self.field)
        non_empty_string(self.analyzer, "analyzer")

    def render(self, schema: SchemaLike = None) -> dict[str, str]:
        return {"value": as_schema(schema).resolve(self.field), "multi": self.analyzer}


@dataclass(frozen=True)
class WildcardPath(PathDefinition):
    """Fields matched by a glob pattern; the pattern is never resolved."""

    pattern: str

    def __post_init__(self) -> None:
        non_empty_string(self.pattern, "pattern")

    def render(self, schema: SchemaLike = None) -> dict[str, str]:
        return {"wildcard": self.pattern}


def as_path(value: Field | Iterable[Field] | PathDefinition) -> PathDefinition:
    """Build a path from a name, a FieldRef, or an iterable of them.

    Examples:
        as_path("title")              # -> "title"
        as_path(["title", "plot"])    # -> ["title", "plot"]
        as_path(fields_of(Movie).title)
    """
    match value:
        case PathDefinition():
            return value
        case str() | FieldRef():
            return SinglePath(value)
        case None:
            raise InvalidArgumentError("path", value, "must not be None")
        case Iterable():
            return MultiPath(tuple(value))
        case _:
            raise InvalidArgumentError(
                "path", value, f"expected a field name or FieldRef, got {type(value).__name__}"
            )


def analyzer(field: Field, name: str) -> AnalyzerPath:
    """Search ``field`` through its alternate analyzer ``name``."""
    return AnalyzerPath(field, name)


def wildcard_path(pattern: str) -> WildcardPath:
    """Search every field whose name matches ``pattern`` (e.g. ``"title.*"``)."""
    return WildcardPath(pattern)
