"""
TopoJSON geometry objects.

The geometry value is a closed union of seven frozen dataclasses. Point
and MultiPoint hold positions; the line and polygon kinds hold arc
indexes only, which are resolved against the Topology's arcs when the
geometry is converted.
"""

from dataclasses import dataclass
from typing import Any, Union

from topojson_reader import extractors
from topojson_reader.arcs import ArcIndexes, Position
from topojson_reader.errors import GeometryUnknownTypeError


Bbox = tuple[float, ...]


@dataclass(frozen=True)
class Point:
    position: Position


@dataclass(frozen=True)
class MultiPoint:
    positions: tuple[Position, ...]


@dataclass(frozen=True)
class LineString:
    arcs: ArcIndexes


@dataclass(frozen=True)
class MultiLineString:
    arcs: tuple[ArcIndexes, ...]


@dataclass(frozen=True)
class Polygon:
    arcs: tuple[ArcIndexes, ...]


@dataclass(frozen=True)
class MultiPolygon:
    arcs: tuple[tuple[ArcIndexes, ...], ...]


@dataclass(frozen=True)
class GeometryCollection:
    geometries: tuple["Geometry", ...]


Value = Union[
    Point,
    MultiPoint,
    LineString,
    MultiLineString,
    Polygon,
    MultiPolygon,
    GeometryCollection,
]

GEOMETRY_TYPES = (
    "Point",
    "MultiPoint",
    "LineString",
    "MultiLineString",
    "Polygon",
    "MultiPolygon",
    "GeometryCollection",
)

COORDINATE_TYPES = (Point, MultiPoint)
ARC_TYPES = (LineString, MultiLineString, Polygon, MultiPolygon)


@dataclass(frozen=True)
class Geometry:
    """
    A TopoJSON geometry object.

    Any member of the source object that is not part of the geometry
    schema is kept in ``foreign_members`` so it survives a round trip.
    """

    value: Value
    bbox: Bbox | None = None
    properties: dict[str, Any] | None = None
    id: Any = None
    foreign_members: dict[str, Any] | None = None

    @property
    def type(self) -> str:
        return type(self.value).__name__

    def to_dict(self) -> dict[str, Any]:
        """Return the geometry as a TopoJSON object."""
        result: dict[str, Any] = {}
        if self.bbox is not None:
            result["bbox"] = list(self.bbox)
        result["type"] = self.type

        value = self.value
        if isinstance(value, Point):
            result["coordinates"] = list(value.position)
        elif isinstance(value, MultiPoint):
            result["coordinates"] = [list(p) for p in value.positions]
        elif isinstance(value, LineString):
            result["arcs"] = list(value.arcs)
        elif isinstance(value, (MultiLineString, Polygon)):
            result["arcs"] = [list(ring) for ring in value.arcs]
        elif isinstance(value, MultiPolygon):
            result["arcs"] = [[list(ring) for ring in polygon] for polygon in value.arcs]
        elif isinstance(value, GeometryCollection):
            result["geometries"] = [g.to_dict() for g in value.geometries]
        else:
            raise TypeError(f"Unsupported geometry value: {value!r}")

        if self.id is not None:
            result["id"] = self.id
        if self.properties is not None:
            result["properties"] = dict(self.properties)
        if self.foreign_members:
            result.update(self.foreign_members)
        return result


@dataclass(frozen=True)
class NamedGeometry:
    """One member of a Topology's 'objects'."""

    name: str
    geometry: Geometry


def parse_geometry(obj: dict[str, Any]) -> Geometry:
    """
    Parse a TopoJSON geometry object.

    Args:
        obj: Decoded JSON object. It is not modified.

    Returns:
        The parsed Geometry.

    Raises:
        TopoJSONError: The first violated expectation found.
    """
    obj = dict(obj)
    geom_type = extractors.get_type(obj)

    value: Value
    if geom_type == "Point":
        value = Point(extractors.get_position(obj))
    elif geom_type == "MultiPoint":
        value = MultiPoint(extractors.get_positions(obj))
    elif geom_type == "LineString":
        value = LineString(extractors.get_arc_indexes(obj))
    elif geom_type == "MultiLineString":
        value = MultiLineString(extractors.get_arc_indexes_1d(obj))
    elif geom_type == "Polygon":
        value = Polygon(extractors.get_arc_indexes_1d(obj))
    elif geom_type == "MultiPolygon":
        value = MultiPolygon(extractors.get_arc_indexes_2d(obj))
    elif geom_type == "GeometryCollection":
        value = GeometryCollection(
            tuple(parse_geometry(g) for g in extractors.get_geometry_objects(obj))
        )
    else:
        raise GeometryUnknownTypeError(geom_type)

    return Geometry(
        value=value,
        bbox=extractors.get_bbox(obj),
        id=extractors.get_id(obj),
        properties=extractors.get_properties(obj),
        foreign_members=extractors.get_foreign_members(obj),
    )
