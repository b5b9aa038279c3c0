# atlas_search/cli.py
import importlib
import logging
import os
import sys
from typing import Annotated, Any, Literal

import cyclopts
from bson import json_util

from atlas_search.exceptions import AtlasSearchError
from atlas_search.query.operators import SearchDefinition
from atlas_search.schema import as_schema
from atlas_search.stage import search_meta_stage, search_stage

logger = logging.getLogger(__name__)

INDEX_ENV_VAR = "ATLAS_SEARCH_INDEX"

app = cyclopts.App(
    name="atlas-search",
    help="Render Atlas Search query definitions as extended JSON.",
)


def _load_from_env() -> str | None:
    """Load the default search index name from the environment."""
    return os.environ.get(INDEX_ENV_VAR) or None


def _import_object(target: str) -> Any:
    """Import ``package.module:attribute``."""
    module_name, sep, attribute = target.partition(":")
    if not sep or not module_name or not attribute:
        raise ValueError(f"Expected MODULE:ATTRIBUTE, got {target!r}")
    module = importlib.import_module(module_name)
    obj: Any = module
    for part in attribute.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError:
            raise ValueError(f"{module_name!r} has no attribute {attribute!r}") from None
    return obj


def _load_definition(target: str) -> SearchDefinition:
    obj = _import_object(target)
    if callable(obj) and not isinstance(obj, SearchDefinition):
        obj = obj()
    if not isinstance(obj, SearchDefinition):
        raise ValueError(f"{target!r} is not a search definition: {type(obj).__name__}")
    return obj


@app.command(name="render")
def render(
    target: Annotated[
        str,
        cyclopts.Parameter(help="Definition to render, as MODULE:ATTRIBUTE (or a factory)"),
    ],
    schema: Annotated[
        str | None,
        cyclopts.Parameter(name=["--schema", "-s"], help="Pydantic model as MODULE:MODEL"),
    ] = None,
    stage: Annotated[
        Literal["search", "meta", "none"],
        cyclopts.Parameter(name="--stage", help="Wrap in $search, $searchMeta, or nothing"),
    ] = "search",
    index: Annotated[
        str | None,
        cyclopts.Parameter(
            name=["--index", "-i"], help=f"Search index name (default: ${INDEX_ENV_VAR})"
        ),
    ] = None,
    indent: Annotated[
        int,
        cyclopts.Parameter(name="--indent", help="JSON indentation"),
    ] = 2,
) -> None:
    """Print the document a search definition compiles to."""
    try:
        definition = _load_definition(target)
        resolved = as_schema(_import_object(schema)) if schema else None
        index = index or _load_from_env()

        if stage == "search":
            document = search_stage(definition, resolved, index=index)
        elif stage == "meta":
            document = search_meta_stage(definition, resolved, index=index)
        else:
            document = definition.render(resolved)
    except (AtlasSearchError, ImportError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    logger.info("Rendered %s (stage=%s, index=%s)", target, stage, index)
    print(json_util.dumps(document, json_options=json_util.RELAXED_JSON_OPTIONS, indent=indent))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
