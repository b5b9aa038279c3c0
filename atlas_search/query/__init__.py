# atlas_search/query/__init__.py
"""Search operators, paths, scores and their options."""

from atlas_search.query.compounds import CompoundSearchDefinition, compound
from atlas_search.query.facets import (
    DateFacet,
    FacetSearchDefinition,
    NumberFacet,
    SearchFacet,
    StringFacet,
    date_facet,
    facet,
    number_facet,
    string_facet,
)
from atlas_search.query.geo import GeoBox, GeoCircle, GeoPoint, GeoShapeRelation
from atlas_search.query.operators import (
    AutocompleteSearchDefinition,
    AutocompleteTokenOrder,
    EqualsSearchDefinition,
    ExistsSearchDefinition,
    GeoShapeSearchDefinition,
    GeoWithinSearchDefinition,
    NearSearchDefinition,
    PhraseSearchDefinition,
    QueryStringSearchDefinition,
    RawSearchDefinition,
    RegexSearchDefinition,
    SearchDefinition,
    TextSearchDefinition,
    WildcardSearchDefinition,
    autocomplete,
    equals,
    exists,
    geo_shape,
    geo_within,
    geo_within_box,
    geo_within_circle,
    near,
    phrase,
    query_string,
    raw,
    regex,
    text,
    wildcard,
)
from atlas_search.query.options import (
    CountOptions,
    CountType,
    FuzzyOptions,
    HighlightOptions,
    highlight,
)
from atlas_search.query.paths import (
    AnalyzerPath,
    MultiPath,
    MultiQuery,
    PathDefinition,
    QueryDefinition,
    SinglePath,
    SingleQuery,
    WildcardPath,
    analyzer,
    as_path,
    as_query,
    wildcard_path,
)
from atlas_search.query.range import (
    LowerBoundedRange,
    RangeBuilder,
    RangeSearchDefinition,
    UpperBoundedRange,
    range_,
)
from atlas_search.query.score import (
    ScoreDefinition,
    ScoreFunction,
    add,
    boost,
    boost_path,
    constant,
    constant_fn,
    function,
    gauss,
    log,
    log1p,
    multiply,
    path_fn,
    relevance,
)
from atlas_search.query.spans import (
    SpanDefinition,
    SpanSearchDefinition,
    span,
    span_first,
    span_near,
    span_or,
    span_subtract,
    span_term,
)

__all__ = [
    # Operators
    "SearchDefinition",
    "TextSearchDefinition",
    "PhraseSearchDefinition",
    "AutocompleteSearchDefinition",
    "AutocompleteTokenOrder",
    "WildcardSearchDefinition",
    "RegexSearchDefinition",
    "QueryStringSearchDefinition",
    "EqualsSearchDefinition",
    "ExistsSearchDefinition",
    "NearSearchDefinition",
    "GeoWithinSearchDefinition",
    "GeoShapeSearchDefinition",
    "RawSearchDefinition",
    "CompoundSearchDefinition",
    "RangeSearchDefinition",
    "RangeBuilder",
    "LowerBoundedRange",
    "UpperBoundedRange",
    "SpanSearchDefinition",
    "FacetSearchDefinition",
    "text",
    "phrase",
    "autocomplete",
    "wildcard",
    "regex",
    "query_string",
    "equals",
    "exists",
    "near",
    "geo_within",
    "geo_within_box",
    "geo_within_circle",
    "geo_shape",
    "raw",
    "compound",
    "range_",
    "span",
    "facet",
    # Paths and queries
    "PathDefinition",
    "SinglePath",
    "MultiPath",
    "AnalyzerPath",
    "WildcardPath",
    "QueryDefinition",
    "SingleQuery",
    "MultiQuery",
    "as_path",
    "as_query",
    "analyzer",
    "wildcard_path",
    # Scores
    "ScoreDefinition",
    "ScoreFunction",
    "boost",
    "boost_path",
    "constant",
    "function",
    "path_fn",
    "relevance",
    "constant_fn",
    "add",
    "multiply",
    "gauss",
    "log",
    "log1p",
    # Spans
    "SpanDefinition",
    "span_term",
    "span_first",
    "span_near",
    "span_or",
    "span_subtract",
    # Facets
    "SearchFacet",
    "StringFacet",
    "NumberFacet",
    "DateFacet",
    "string_facet",
    "number_facet",
    "date_facet",
    # Geo
    "GeoPoint",
    "GeoBox",
    "GeoCircle",
    "GeoShapeRelation",
    # Options
    "FuzzyOptions",
    "CountOptions",
    "CountType",
    "HighlightOptions",
    "highlight",
]
