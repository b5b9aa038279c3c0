# atlas_search/query/facets.py
"""Facets: bucketed counts computed alongside a search.

Examples:
    facet(
        text("born", "plot"),
        string_facet("genres", "genres", 5),
        number_facet("years", "year", [1980, 1990, 2000]),
    )
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from atlas_search.exceptions import InvalidArgumentError
from atlas_search.query.operators import PathLike, SearchDefinition
from atlas_search.query.paths import PathDefinition, as_path
from atlas_search.schema import Schema, SchemaLike
from atlas_search.validation import (
    between,
    instance_of,
    integer,
    is_date,
    is_number,
    non_empty_string,
)


@dataclass(frozen=True)
class SearchFacet(ABC):
    name: str

    @abstractmethod
    def render(self, schema: SchemaLike = None) -> dict[str, Any]: ...


@dataclass(frozen=True)
class StringFacet(SearchFacet):
    path: PathDefinition
    num_buckets: int = 10

    def __post_init__(self) -> None:
        non_empty_string(self.name, "name")
        instance_of(self.path, PathDefinition, "path")
        integer(self.num_buckets, "num_buckets")
        between(self.num_buckets, 1, 1000, "num_buckets")

    def render(self, schema: SchemaLike = None) -> dict[str, Any]:
        document: dict[str, Any] = {"type": "string", "path": self.path.render(schema)}
        if self.num_buckets != 10:
            document["numBuckets"] = self.num_buckets
        return document


@dataclass(frozen=True)
class _BoundaryFacet(SearchFacet):
    path: PathDefinition
    boundaries: tuple[Any, ...]
    default: str | None = None

    facet_type = ""

    @abstractmethod
    def _is_boundary(self, value: Any) -> bool: ...

    def __post_init__(self) -> None:
        non_empty_string(self.name, "name")
        instance_of(self.path, PathDefinition, "path")
        instance_of(self.boundaries, tuple, "boundaries")
        if len(self.boundaries) < 2:
            raise InvalidArgumentError(
                "boundaries", self.boundaries, "at least two values are required"
            )
        for value in self.boundaries:
            if not self._is_boundary(value):
                raise InvalidArgumentError(
                    "boundaries",
                    value,
                    f"expected a {self.facet_type} boundary, got {type(value).__name__}",
                )
        try:
            unordered = any(
                low >= high for low, high in zip(self.boundaries, self.boundaries[1:])
            )
        except TypeError as e:
            # Naive and aware datetimes do not compare.
            raise InvalidArgumentError("boundaries", self.boundaries, str(e)) from e
        if unordered:
            raise InvalidArgumentError(
                "boundaries", self.boundaries, "values must be strictly increasing"
            )
        if self.default is not None:
            non_empty_string(self.default, "default")

    def render(self, schema: SchemaLike = None) -> dict[str, Any]:
        document: dict[str, Any] = {
            "type": self.facet_type,
            "path": self.path.render(schema),
            "boundaries": list(self.boundaries),
        }
        if self.default is not None:
            document["default"] = self.default
        return document


@dataclass(frozen=True)
class NumberFacet(_BoundaryFacet):
    facet_type = "number"

    def _is_boundary(self, value: Any) -> bool:
        return is_number(value)


@dataclass(frozen=True)
class DateFacet(_BoundaryFacet):
    facet_type = "date"

    def _is_boundary(self, value: Any) -> bool:
        return is_date(value)


@dataclass(frozen=True)
class FacetSearchDefinition(SearchDefinition):
    operator_name = "facet"

    operator: SearchDefinition
    facets: tuple[SearchFacet, ...]

    def __post_init__(self) -> None:
        instance_of(self.operator, SearchDefinition, "operator")
        instance_of(self.facets, tuple, "facets")
        if not self.facets:
            raise InvalidArgumentError("facets", self.facets, "at least one facet is required")
        seen: set[str] = set()
        for item in self.facets:
            instance_of(item, SearchFacet, "facets")
            if item.name in seen:
                raise InvalidArgumentError(
                    "facets", item.name, f"duplicate facet name {item.name!r}"
                )
            seen.add(item.name)

    def _render_body(self, schema: Schema) -> dict[str, Any]:
        return {
            "operator": self.operator.render(schema),
            "facets": {item.name: item.render(schema) for item in self.facets},
        }


def string_facet(name: str, path: PathLike, num_buckets: int = 10) -> StringFacet:
    """Counts per distinct value; ``num_buckets`` caps the number of values (1..1000)."""
    return StringFacet(name, as_path(path), num_buckets)


def number_facet(
    name: str, path: PathLike, boundaries: Iterable[float], default: str | None = None
) -> NumberFacet:
    """Counts per numeric interval; ``default`` names the bucket for values outside them."""
    return NumberFacet(name, as_path(path), tuple(boundaries), default)


def date_facet(
    name: str, path: PathLike, boundaries: Iterable[Any], default: str | None = None
) -> DateFacet:
    return DateFacet(name, as_path(path), tuple(boundaries), default)


def facet(operator: SearchDefinition, *facets: SearchFacet) -> FacetSearchDefinition:
    return FacetSearchDefinition(operator, facets)
