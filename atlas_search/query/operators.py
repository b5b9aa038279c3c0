# atlas_search/query/operators.py
"""Search operators.

Every operator is a frozen dataclass; rendering produces the document the
``$search`` stage expects, e.g. ``{"text": {"query": "foo", "path": "bar"}}``.
Optional settings are only rendered when they differ from the server default.
"""

import copy
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar

from bson import ObjectId, json_util

from atlas_search.exceptions import InvalidArgumentError
from atlas_search.query.geo import (
    POLYGONS,
    SHAPES,
    GeoBox,
    GeoCircle,
    GeoPoint,
    GeoShapeRelation,
    encode_geometry,
    relation_name,
)
from atlas_search.query.options import FuzzyOptions
from atlas_search.query.paths import (
    Field,
    PathDefinition,
    QueryDefinition,
    as_path,
    as_query,
    check_field,
)
from atlas_search.query.score import ScoreDefinition
from atlas_search.schema import Schema, SchemaLike, as_schema
from atlas_search.validation import (
    instance_of,
    integer,
    is_date,
    is_number,
    number,
    optional,
    zero_or_greater,
)

QueryLike = str | Iterable[str] | QueryDefinition
PathLike = Field | Iterable[Field] | PathDefinition


@dataclass(frozen=True)
class SearchDefinition(ABC):
    """Base class for all search operators."""

    operator_name: ClassVar[str] = ""

    def render(self, schema: SchemaLike = None) -> dict[str, Any]:
        """Render this operator, resolving field references against ``schema``."""
        return {self.operator_name: self._render_body(as_schema(schema))}

    @abstractmethod
    def _render_body(self, schema: Schema) -> dict[str, Any]: ...


def check_score(score: ScoreDefinition | None) -> None:
    optional(score, instance_of, ScoreDefinition, "score")


def add_score(
    body: dict[str, Any], score: ScoreDefinition | None, schema: Schema
) -> dict[str, Any]:
    if score is not None:
        body["score"] = score.render(schema)
    return body


@dataclass(frozen=True)
class TextSearchDefinition(SearchDefinition):
    operator_name = "text"

    query: QueryDefinition
    path: PathDefinition
    fuzzy: FuzzyOptions | None = None
    score: ScoreDefinition | None = None

    def __post_init__(self) -> None:
        instance_of(self.query, QueryDefinition, "query")
        instance_of(self.path, PathDefinition, "path")
        optional(self.fuzzy, instance_of, FuzzyOptions, "fuzzy")
        check_score(self.score)

    def _render_body(self, schema: Schema) -> dict[str, Any]:
        body: dict[str, Any] = {"query": self.query.render(), "path": self.path.render(schema)}
        if self.fuzzy is not None:
            body["fuzzy"] = self.fuzzy.render()
        return add_score(body, self.score, schema)


@dataclass(frozen=True)
class PhraseSearchDefinition(SearchDefinition):
    operator_name = "phrase"

    query: QueryDefinition
    path: PathDefinition
    slop: int = 0
    score: ScoreDefinition | None = None

    def __post_init__(self) -> None:
        instance_of(self.query, QueryDefinition, "query")
        instance_of(self.path, PathDefinition, "path")
        zero_or_greater(integer(self.slop, "slop"), "slop")
        check_score(self.score)

    def _render_body(self, schema: Schema) -> dict[str, Any]:
        body: dict[str, Any] = {"query": self.query.render(), "path": self.path.render(schema)}
        if self.slop != 0:
            body["slop"] = self.slop
        return add_score(body, self.score, schema)


class AutocompleteTokenOrder(Enum):
    ANY = "any"
    SEQUENTIAL = "sequential"


@dataclass(frozen=True)
class AutocompleteSearchDefinition(SearchDefinition):
    operator_name = "autocomplete"

    query: QueryDefinition
    path: PathDefinition
    token_order: AutocompleteTokenOrder = AutocompleteTokenOrder.ANY
    fuzzy: FuzzyOptions | None = None
    score: ScoreDefinition | None = None

    def __post_init__(self) -> None:
        instance_of(self.query, QueryDefinition, "query")
        instance_of(self.path, PathDefinition, "path")
        instance_of(self.token_order, AutocompleteTokenOrder, "token_order")
        optional(self.fuzzy, instance_of, FuzzyOptions, "fuzzy")
        check_score(self.score)

    def _render_body(self, schema: Schema) -> dict[str, Any]:
        body: dict[str, Any] = {"query": self.query.render(), "path": self.path.render(schema)}
        if self.token_order is AutocompleteTokenOrder.SEQUENTIAL:
            body["tokenOrder"] = self.token_order.value
        if self.fuzzy is not None:
            body["fuzzy"] = self.fuzzy.render()
        return add_score(body, self.score, schema)


@dataclass(frozen=True)
class _PatternSearchDefinition(SearchDefinition):
    query: QueryDefinition
    path: PathDefinition
    allow_analyzed_field: bool = False
    score: ScoreDefinition | None = None

    def __post_init__(self) -> None:
        instance_of(self.query, QueryDefinition, "query")
        instance_of(self.path, PathDefinition, "path")
        instance_of(self.allow_analyzed_field, bool, "allow_analyzed_field")
        check_score(self.score)

    def _render_body(self, schema: Schema) -> dict[str, Any]:
        body: dict[str, Any] = {"query": self.query.render(), "path": self.path.render(schema)}
        if self.allow_analyzed_field:
            body["allowAnalyzedField"] = True
        return add_score(body, self.score, schema)


@dataclass(frozen=True)
class WildcardSearchDefinition(_PatternSearchDefinition):
    operator_name = "wildcard"


@dataclass(frozen=True)
class RegexSearchDefinition(_PatternSearchDefinition):
    operator_name = "regex"


@dataclass(frozen=True)
class QueryStringSearchDefinition(SearchDefinition):
    """Lucene-style query string; the string itself is passed through verbatim."""

    operator_name = "queryString"

    default_path: Field
    query: str
    score: ScoreDefinition | None = None

    def __post_init__(self) -> None:
        check_field(self.default_path, "default_path")
        instance_of(self.query, str, "query")
        check_score(self.score)

    def _render_body(self, schema: Schema) -> dict[str, Any]:
        body: dict[str, Any] = {
            "defaultPath": schema.resolve(self.default_path),
            "query": self.query,
        }
        return add_score(body, self.score, schema)


@dataclass(frozen=True)
class EqualsSearchDefinition(SearchDefinition):
    operator_name = "equals"

    path: Field
    value: bool | ObjectId
    score: ScoreDefinition | None = None

    def __post_init__(self) -> None:
        check_field(self.path, "path")
        instance_of(self.value, (bool, ObjectId), "value")
        check_score(self.score)

    def _render_body(self, schema: Schema) -> dict[str, Any]:
        body: dict[str, Any] = {"path": schema.resolve(self.path), "value": self.value}
        return add_score(body, self.score, schema)


@dataclass(frozen=True)
class ExistsSearchDefinition(SearchDefinition):
    operator_name = "exists"

    path: Field

    def __post_init__(self) -> None:
        check_field(self.path, "path")

    def _render_body(self, schema: Schema) -> dict[str, Any]:
        return {"path": schema.resolve(self.path)}


@dataclass(frozen=True)
class NearSearchDefinition(SearchDefinition):
    """Scores documents by proximity of a number, date or point to ``origin``."""

    operator_name = "near"

    path: PathDefinition
    origin: float | datetime | GeoPoint
    pivot: float
    score: ScoreDefinition | None = None

    def __post_init__(self) -> None:
        instance_of(self.path, PathDefinition, "path")
        origin = self.origin
        if not (is_number(origin) or is_date(origin) or isinstance(origin, GeoPoint)):
            raise InvalidArgumentError(
                "origin", self.origin, "expected a number, a datetime or a GeoPoint"
            )
        number(self.pivot, "pivot")
        check_score(self.score)

    def _render_body(self, schema: Schema) -> dict[str, Any]:
        origin = self.origin.render() if isinstance(self.origin, GeoPoint) else self.origin
        body: dict[str, Any] = {
            "path": self.path.render(schema),
            "origin": origin,
            "pivot": self.pivot,
        }
        return add_score(body, self.score, schema)


@dataclass(frozen=True)
class GeoWithinSearchDefinition(SearchDefinition):
    """Matches points inside exactly one of a polygon, a box or a circle."""

    operator_name = "geoWithin"

    path: PathDefinition
    geometry: Any = None
    box: GeoBox | None = None
    circle: GeoCircle | None = None
    score: ScoreDefinition | None = None

    def __post_init__(self) -> None:
        instance_of(self.path, PathDefinition, "path")
        given = [area for area in (self.geometry, self.box, self.circle) if area is not None]
        if len(given) != 1:
            raise InvalidArgumentError(
                "geometry", given, "exactly one of geometry, box or circle is required"
            )
        optional(self.geometry, encode_geometry, POLYGONS, "geometry")
        optional(self.box, instance_of, GeoBox, "box")
        optional(self.circle, instance_of, GeoCircle, "circle")
        check_score(self.score)

    def _render_body(self, schema: Schema) -> dict[str, Any]:
        body: dict[str, Any] = {"path": self.path.render(schema)}
        if self.geometry is not None:
            body["geometry"] = encode_geometry(self.geometry, POLYGONS)
        elif self.box is not None:
            body["box"] = self.box.render()
        elif self.circle is not None:
            body["circle"] = self.circle.render()
        return add_score(body, self.score, schema)


@dataclass(frozen=True)
class GeoShapeSearchDefinition(SearchDefinition):
    operator_name = "geoShape"

    path: PathDefinition
    geometry: Any
    relation: GeoShapeRelation
    score: ScoreDefinition | None = None

    def __post_init__(self) -> None:
        instance_of(self.path, PathDefinition, "path")
        encode_geometry(self.geometry, SHAPES)
        instance_of(self.relation, GeoShapeRelation, "relation")
        check_score(self.score)

    def _render_body(self, schema: Schema) -> dict[str, Any]:
        body: dict[str, Any] = {
            "path": self.path.render(schema),
            "geometry": encode_geometry(self.geometry, SHAPES),
            "relation": relation_name(self.relation),
        }
        return add_score(body, self.score, schema)


@dataclass(frozen=True)
class RawSearchDefinition(SearchDefinition):
    """A hand-written operator document, rendered as given."""

    document: Mapping[str, Any]

    def __post_init__(self) -> None:
        instance_of(self.document, Mapping, "document")

    def render(self, schema: SchemaLike = None) -> dict[str, Any]:
        return copy.deepcopy(dict(self.document))

    def _render_body(self, schema: Schema) -> dict[str, Any]:
        raise AssertionError("raw documents are rendered whole")


# Factories


def text(
    query: QueryLike,
    path: PathLike,
    fuzzy: FuzzyOptions | None = None,
    score: ScoreDefinition | None = None,
) -> TextSearchDefinition:
    """Full-text search of analyzed fields.

    Examples:
        text("born", "plot")
        text(["born", "dead"], ["plot", "title"], fuzzy=FuzzyOptions(max_edits=1))
    """
    return TextSearchDefinition(as_query(query), as_path(path), fuzzy, score)


def phrase(
    query: QueryLike,
    path: PathLike,
    slop: int = 0,
    score: ScoreDefinition | None = None,
) -> PhraseSearchDefinition:
    """Ordered sequence of terms; ``slop`` allows that many words in between."""
    return PhraseSearchDefinition(as_query(query), as_path(path), slop, score)


def autocomplete(
    query: QueryLike,
    path: PathLike,
    token_order: AutocompleteTokenOrder = AutocompleteTokenOrder.ANY,
    fuzzy: FuzzyOptions | None = None,
    score: ScoreDefinition | None = None,
) -> AutocompleteSearchDefinition:
    """Search-as-you-type over fields indexed for autocompletion."""
    return AutocompleteSearchDefinition(as_query(query), as_path(path), token_order, fuzzy, score)


def wildcard(
    query: QueryLike,
    path: PathLike,
    allow_analyzed_field: bool = False,
    score: ScoreDefinition | None = None,
) -> WildcardSearchDefinition:
    return WildcardSearchDefinition(as_query(query), as_path(path), allow_analyzed_field, score)


def regex(
    query: QueryLike,
    path: PathLike,
    allow_analyzed_field: bool = False,
    score: ScoreDefinition | None = None,
) -> RegexSearchDefinition:
    return RegexSearchDefinition(as_query(query), as_path(path), allow_analyzed_field, score)


def query_string(
    default_path: Field, query: str, score: ScoreDefinition | None = None
) -> QueryStringSearchDefinition:
    return QueryStringSearchDefinition(default_path, query, score)


def equals(
    field: Field, value: bool | ObjectId, score: ScoreDefinition | None = None
) -> EqualsSearchDefinition:
    """Exact match on a boolean or ObjectId field."""
    return EqualsSearchDefinition(field, value, score)


def exists(field: Field) -> ExistsSearchDefinition:
    return ExistsSearchDefinition(field)


def near(
    path: PathLike,
    origin: float | datetime | GeoPoint,
    pivot: float,
    score: ScoreDefinition | None = None,
) -> NearSearchDefinition:
    return NearSearchDefinition(as_path(path), origin, pivot, score)


def geo_within(
    path: PathLike, geometry: Any, score: ScoreDefinition | None = None
) -> GeoWithinSearchDefinition:
    """Points inside a Polygon or MultiPolygon."""
    return GeoWithinSearchDefinition(as_path(path), geometry=geometry, score=score)


def geo_within_box(
    path: PathLike, box: GeoBox, score: ScoreDefinition | None = None
) -> GeoWithinSearchDefinition:
    return GeoWithinSearchDefinition(as_path(path), box=box, score=score)


def geo_within_circle(
    path: PathLike, circle: GeoCircle, score: ScoreDefinition | None = None
) -> GeoWithinSearchDefinition:
    return GeoWithinSearchDefinition(as_path(path), circle=circle, score=score)


def geo_shape(
    path: PathLike,
    geometry: Any,
    relation: GeoShapeRelation,
    score: ScoreDefinition | None = None,
) -> GeoShapeSearchDefinition:
    """Shapes related to ``geometry`` by ``relation``."""
    return GeoShapeSearchDefinition(as_path(path), geometry, relation, score)


def raw(document: Mapping[str, Any] | str) -> RawSearchDefinition:
    """Wrap an operator document the builders do not cover.

    Accepts a mapping or a (relaxed or canonical) extended JSON string.
    """
    if isinstance(document, str):
        try:
            document = json_util.loads(document)
        except ValueError as e:
            raise InvalidArgumentError("document", document, f"not valid JSON: {e}") from e
    return RawSearchDefinition(document)
