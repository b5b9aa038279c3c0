# atlas_search/__init__.py
"""atlas_search - Typed builders for MongoDB Atlas Search queries."""

from atlas_search.exceptions import (
    ArgumentOutOfRangeError,
    AtlasSearchError,
    InvalidArgumentError,
    SchemaMismatchError,
)
from atlas_search.query import *  # noqa: F403
from atlas_search.query import __all__ as _query_all
from atlas_search.schema import FieldRef, ModelSchema, Schema, UntypedSchema, as_schema, fields_of
from atlas_search.stage import (
    meta_search_highlights,
    meta_search_score,
    search_meta,
    search_meta_stage,
    search_stage,
)

__all__ = [
    *_query_all,
    # Schemas
    "Schema",
    "UntypedSchema",
    "ModelSchema",
    "FieldRef",
    "fields_of",
    "as_schema",
    # Stages
    "search_stage",
    "search_meta_stage",
    "meta_search_score",
    "meta_search_highlights",
    "search_meta",
    # Errors
    "AtlasSearchError",
    "InvalidArgumentError",
    "ArgumentOutOfRangeError",
    "SchemaMismatchError",
]
