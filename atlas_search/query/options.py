"""Option objects attached to operators and search stages."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from atlas_search.query.paths import Field, PathDefinition, as_path
from atlas_search.schema import SchemaLike
from atlas_search.validation import (
    between,
    greater_than_zero,
    instance_of,
    integer,
    optional,
    zero_or_greater,
)


@dataclass(frozen=True)
class FuzzyOptions:
    """Approximate matching for text and autocomplete.

    Attributes:
        max_edits: Maximum single-character edits per term (1 or 2).
        prefix_length: Leading characters that must match exactly.
        max_expansions: Maximum number of variations generated per term.
    """

    max_edits: int | None = None
    prefix_length: int | None = None
    max_expansions: int | None = None

    def __post_init__(self) -> None:
        optional(self.max_edits, integer, "max_edits")
        optional(self.max_edits, between, 1, 2, "max_edits")
        optional(self.prefix_length, integer, "prefix_length")
        optional(self.prefix_length, zero_or_greater, "prefix_length")
        optional(self.max_expansions, integer, "max_expansions")
        optional(self.max_expansions, greater_than_zero, "max_expansions")

    def render(self) -> dict[str, int]:
        document: dict[str, int] = {}
        if self.max_edits is not None:
            document["maxEdits"] = self.max_edits
        if self.prefix_length is not None:
            document["prefixLength"] = self.prefix_length
        if self.max_expansions is not None:
            document["maxExpansions"] = self.max_expansions
        return document


class CountType(Enum):
    LOWER_BOUND = "lowerBound"
    TOTAL = "total"


@dataclass(frozen=True)
class CountOptions:
    """How a search stage counts matching documents."""

    type: CountType = CountType.LOWER_BOUND
    threshold: int | None = None

    def __post_init__(self) -> None:
        instance_of(self.type, CountType, "type")
        optional(self.threshold, integer, "threshold")
        optional(self.threshold, greater_than_zero, "threshold")

    def render(self) -> dict[str, Any]:
        document: dict[str, Any] = {}
        if self.type is CountType.TOTAL:
            document["type"] = self.type.value
        if self.threshold is not None:
            document["threshold"] = self.threshold
        return document


@dataclass(frozen=True)
class HighlightOptions:
    """Which fields a search stage returns highlighted passages for."""

    path: PathDefinition
    max_chars_to_examine: int | None = None
    max_num_passages: int | None = None

    def __post_init__(self) -> None:
        instance_of(self.path, PathDefinition, "path")
        optional(self.max_chars_to_examine, integer, "max_chars_to_examine")
        optional(self.max_chars_to_examine, greater_than_zero, "max_chars_to_examine")
        optional(self.max_num_passages, integer, "max_num_passages")
        optional(self.max_num_passages, greater_than_zero, "max_num_passages")

    def render(self, schema: SchemaLike = None) -> dict[str, Any]:
        document: dict[str, Any] = {"path": self.path.render(schema)}
        if self.max_chars_to_examine is not None:
            document["maxCharsToExamine"] = self.max_chars_to_examine
        if self.max_num_passages is not None:
            document["maxNumPassages"] = self.max_num_passages
        return document


def highlight(
    path: Field | list[Field] | PathDefinition,
    max_chars_to_examine: int | None = None,
    max_num_passages: int | None = None,
) -> HighlightOptions:
    return HighlightOptions(as_path(path), max_chars_to_examine, max_num_passages)
