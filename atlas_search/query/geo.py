"""Geographic values used by the geo operators.

Geometries are accepted as GeoJSON mappings or as any object implementing the
``__geo_interface__`` protocol (shapely, geojson), and are rendered as plain
GeoJSON documents with list coordinates.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

from atlas_search.exceptions import InvalidArgumentError
from atlas_search.validation import between, greater_than_zero, number

POLYGONS = frozenset({"Polygon", "MultiPolygon"})
SHAPES = frozenset({"Point", "LineString", "Polygon", "MultiPolygon"})


@dataclass(frozen=True)
class GeoPoint:
    """A WGS84 position, longitude first as in GeoJSON."""

    longitude: float
    latitude: float

    def __post_init__(self) -> None:
        number(self.longitude, "longitude")
        number(self.latitude, "latitude")
        between(self.longitude, -180, 180, "longitude")
        between(self.latitude, -90, 90, "latitude")

    @property
    def __geo_interface__(self) -> dict[str, Any]:
        return {"type": "Point", "coordinates": (self.longitude, self.latitude)}

    def render(self) -> dict[str, Any]:
        return {"type": "Point", "coordinates": [self.longitude, self.latitude]}


def _listify(coordinates: Any) -> Any:
    if isinstance(coordinates, (list, tuple)):
        return [_listify(item) for item in coordinates]
    return coordinates


def encode_geometry(
    value: Any, allowed: frozenset[str] = SHAPES, name: str = "geometry"
) -> dict[str, Any]:
    """Encode ``value`` as a GeoJSON geometry document.

    Raises:
        InvalidArgumentError: If the value is not a geometry, or its type is
            not one of ``allowed``.
    """
    match value:
        case None:
            raise InvalidArgumentError(name, value, "must not be None")
        case GeoPoint():
            document = value.render()
        case Mapping():
            document = dict(value)
        case _ if hasattr(value, "__geo_interface__"):
            document = dict(value.__geo_interface__)
        case _:
            raise InvalidArgumentError(
                name, value, "expected a GeoJSON mapping or an object with __geo_interface__"
            )

    kind = document.get("type")
    if kind not in allowed:
        raise InvalidArgumentError(
            name, value, f"geometry type {kind!r} is not one of {', '.join(sorted(allowed))}"
        )
    if "coordinates" not in document:
        raise InvalidArgumentError(name, value, "geometry has no coordinates")
    return {"type": kind, "coordinates": _listify(document["coordinates"])}


def point(value: Any, name: str) -> dict[str, Any]:
    return encode_geometry(value, frozenset({"Point"}), name)


@dataclass(frozen=True)
class GeoBox:
    """Axis-aligned box given by its bottom-left and top-right corners."""

    bottom_left: Any
    top_right: Any

    def __post_init__(self) -> None:
        point(self.bottom_left, "bottom_left")
        point(self.top_right, "top_right")

    def render(self) -> dict[str, Any]:
        return {
            "bottomLeft": point(self.bottom_left, "bottom_left"),
            "topRight": point(self.top_right, "top_right"),
        }


@dataclass(frozen=True)
class GeoCircle:
    """Circle around ``center``; ``radius`` is in meters."""

    center: Any
    radius: float

    def __post_init__(self) -> None:
        point(self.center, "center")
        greater_than_zero(self.radius, "radius")

    def render(self) -> dict[str, Any]:
        return {"center": point(self.center, "center"), "radius": self.radius}


class GeoShapeRelation(Enum):
    CONTAINS = auto()
    DISJOINT = auto()
    INTERSECTS = auto()
    WITHIN = auto()


def relation_name(relation: GeoShapeRelation) -> str:
    match relation:
        case GeoShapeRelation.CONTAINS:
            return "contains"
        case GeoShapeRelation.DISJOINT:
            return "disjoint"
        case GeoShapeRelation.INTERSECTS:
            return "intersects"
        case GeoShapeRelation.WITHIN:
            return "within"
        case _:
            raise AssertionError(f"Unhandled geo shape relation: {relation!r}")

