"""Aggregation stage and projection documents for search queries.

These helpers only build documents; appending them to a pipeline and running
it is left to the caller (``collection.aggregate([...])``).
"""

import logging
from typing import Any

from atlas_search.exceptions import InvalidArgumentError
from atlas_search.query.options import CountOptions, HighlightOptions
from atlas_search.query.operators import SearchDefinition
from atlas_search.schema import SchemaLike, as_schema
from atlas_search.validation import instance_of, non_empty_string, optional

logger = logging.getLogger(__name__)


def _query_body(query: SearchDefinition, schema: SchemaLike) -> dict[str, Any]:
    if query is None:
        raise InvalidArgumentError("query", query, "must not be None")
    instance_of(query, SearchDefinition, "query")
    return query.render(schema)


def search_stage(
    query: SearchDefinition,
    schema: SchemaLike = None,
    *,
    highlight: HighlightOptions | None = None,
    index: str | None = None,
    count: CountOptions | None = None,
    return_stored_source: bool = False,
) -> dict[str, Any]:
    """Build a ``$search`` stage.

    Args:
        query: Root operator of the search.
        schema: Schema used to resolve field references.
        highlight: Fields to return highlighted passages for.
        index: Search index name; the server uses ``default`` when omitted.
        count: How to count the matching documents.
        return_stored_source: Return only the fields stored on the index.

    Returns:
        ``{"$search": {...}}``, ready to be used as the first pipeline stage.
    """
    resolved = as_schema(schema)
    optional(highlight, instance_of, HighlightOptions, "highlight")
    optional(count, instance_of, CountOptions, "count")
    optional(index, non_empty_string, "index")

    body = _query_body(query, resolved)
    if highlight is not None:
        body["highlight"] = highlight.render(resolved)
    if count is not None:
        body["count"] = count.render()
    if index is not None:
        body["index"] = index
    if return_stored_source:
        body["returnStoredSource"] = True

    logger.debug("Built $search stage: %s", body)
    return {"$search": body}


def search_meta_stage(
    query: SearchDefinition,
    schema: SchemaLike = None,
    *,
    index: str | None = None,
    count: CountOptions | None = None,
) -> dict[str, Any]:
    """Build a ``$searchMeta`` stage returning only metadata (counts, facets)."""
    resolved = as_schema(schema)
    optional(count, instance_of, CountOptions, "count")
    optional(index, non_empty_string, "index")

    body = _query_body(query, resolved)
    if count is not None:
        body["count"] = count.render()
    if index is not None:
        body["index"] = index

    logger.debug("Built $searchMeta stage: %s", body)
    return {"$searchMeta": body}


def meta_search_score(field: str) -> dict[str, Any]:
    """Projection of the relevance score into ``field``."""
    return {non_empty_string(field, "field"): {"$meta": "searchScore"}}


def meta_search_highlights(field: str) -> dict[str, Any]:
    """Projection of the highlighted passages into ``field``."""
    return {non_empty_string(field, "field"): {"$meta": "searchHighlights"}}


def search_meta(field: Any, schema: SchemaLike = None) -> dict[str, Any]:
    """Projection of the ``$$SEARCH_META`` variable into a (possibly typed) field."""
    if field is None:
        raise InvalidArgumentError("field", field, "must not be None")
    return {as_schema(schema).resolve(field): "$$SEARCH_META"}
