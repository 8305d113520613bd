"""
Converter module for transforming TopoJSON to GeoJSON.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import geojson

from topojson_reader.arcs import ArcIndexes, ArcStore
from topojson_reader.config import DEFAULT_PRECISION
from topojson_reader.errors import (
    ExpectedTypeError,
    TopoJSONError,
    UnknownObjectKeyError,
    UnsupportedNestedCollectionError,
)
from topojson_reader.geometry import (
    Geometry,
    GeometryCollection,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
    Value,
)
from topojson_reader.topojson import TopoJSON, parse, parse_topojson
from topojson_reader.topology import Topology

logger = logging.getLogger(__name__)

# Members a foreign member may not overwrite on the output Feature.
RESERVED_FEATURE_KEYS = ("type", "id", "geometry", "properties", "bbox")


@dataclass
class ConversionResult:
    """Result of a Topology to GeoJSON conversion."""

    geojson: geojson.FeatureCollection
    """The converted GeoJSON FeatureCollection."""

    object_name: str
    """Name of the Topology object that was converted."""

    feature_count: int
    """Number of features converted."""

    warnings: list[str] = field(default_factory=list)
    """Non-fatal warnings encountered during conversion."""

    metadata: dict[str, Any] = field(default_factory=dict)
    """Additional information about the source Topology."""

    def __post_init__(self) -> None:
        """Validate the result after initialization."""
        if not isinstance(self.geojson, dict):
            raise ValueError("geojson must be a dictionary")
        if self.geojson.get("type") != "FeatureCollection":
            raise ValueError(f"Invalid GeoJSON type: {self.geojson.get('type')}")


def _build(
    geometry_class: type[geojson.geometry.Geometry],
    coordinates: list[Any],
    precision: int | None,
) -> geojson.geometry.Geometry:
    """Build a geojson geometry, rounding only when a precision is given."""
    if precision is not None:
        return geometry_class(coordinates, precision=precision)
    # geojson rounds to 6 places unless told otherwise; keep decoded values.
    geometry = geometry_class()
    geometry["coordinates"] = coordinates
    return geometry


def _decode_value(
    value: Value,
    store: ArcStore,
    precision: int | None,
) -> geojson.geometry.Geometry:
    """Decode a non-collection geometry value to a GeoJSON geometry."""

    def line(indexes: ArcIndexes) -> list[list[float]]:
        return [list(position) for position in store.ring(indexes)]

    if isinstance(value, Point):
        return _build(geojson.Point, list(store.point(value.position)), precision)

    if isinstance(value, MultiPoint):
        return _build(
            geojson.MultiPoint, [list(store.point(p)) for p in value.positions], precision
        )

    if isinstance(value, LineString):
        return _build(geojson.LineString, line(value.arcs), precision)

    if isinstance(value, MultiLineString):
        return _build(geojson.MultiLineString, [line(ixs) for ixs in value.arcs], precision)

    if isinstance(value, Polygon):
        return _build(geojson.Polygon, [line(ixs) for ixs in value.arcs], precision)

    if isinstance(value, MultiPolygon):
        return _build(
            geojson.MultiPolygon,
            [[line(ixs) for ixs in polygon] for polygon in value.arcs],
            precision,
        )

    if isinstance(value, GeometryCollection):
        # topojson-client maps a collection of collections to features that
        # each carry a GeometryCollection; that shape is not produced here.
        raise UnsupportedNestedCollectionError()

    raise TypeError(f"Unsupported geometry value: {value!r}")


def _to_feature(
    geometry: Geometry,
    store: ArcStore,
    precision: int | None,
    warnings: list[str],
) -> geojson.Feature:
    """Build one Feature, carrying over bbox, id, properties and foreign members."""
    extra: dict[str, Any] = {}
    if geometry.bbox is not None:
        extra["bbox"] = list(geometry.bbox)

    feature = geojson.Feature(
        id=geometry.id,
        geometry=_decode_value(geometry.value, store, precision),
        properties=dict(geometry.properties) if geometry.properties else None,
        **extra,
    )

    for key, value in (geometry.foreign_members or {}).items():
        if key in RESERVED_FEATURE_KEYS:
            message = f"Foreign member '{key}' conflicts with a Feature member and was skipped"
            logger.warning(message)
            warnings.append(message)
            continue
        feature[key] = value

    return feature


def _convert(
    topology: Topology,
    object_name: str,
    precision: int | None,
    warnings: list[str],
) -> tuple[geojson.FeatureCollection, ArcStore]:
    geometry = topology.get(object_name)
    if geometry is None:
        raise UnknownObjectKeyError(object_name, topology.list_names())

    store = ArcStore(topology.arcs, topology.transform)

    if isinstance(geometry.value, GeometryCollection):
        features = [
            _to_feature(child, store, precision, warnings)
            for child in geometry.value.geometries
        ]
    else:
        features = [_to_feature(geometry, store, precision, warnings)]

    logger.debug(
        "Converted object '%s': %d feature(s), %d of %d arc(s) decoded",
        object_name,
        len(features),
        store.decoded_count,
        len(store),
    )

    return geojson.FeatureCollection(features), store


def convert(
    topology: Topology,
    object_name: str,
    precision: int | None = DEFAULT_PRECISION,
) -> geojson.FeatureCollection:
    """
    Convert one object of a Topology to a GeoJSON FeatureCollection.

    Works like topojson-client's ``feature`` function: a GeometryCollection
    yields one Feature per member geometry, any other geometry yields a
    single Feature. Only the arcs referenced by the object are decoded.

    Args:
        topology: Parsed Topology.
        object_name: Name of the object to convert. If several objects share
            the name, the first one is used.
        precision: Decimal places kept in output coordinates. None (the
            default) writes decoded coordinates unrounded.

    Returns:
        GeoJSON FeatureCollection.

    Raises:
        UnknownObjectKeyError: If no object is called ``object_name``.
        ArcIndexOutOfRangeError: If a geometry references a missing arc.
        UnsupportedNestedCollectionError: If a GeometryCollection contains
            another GeometryCollection.
    """
    feature_collection, _ = _convert(topology, object_name, precision, [])
    return feature_collection


class TopologyConverter:
    """Converter for TopoJSON files and documents."""

    format_name = "TopoJSON"
    file_extensions = [".topojson", ".json"]

    def __init__(self, precision: int | None = DEFAULT_PRECISION) -> None:
        self.precision = precision

    @classmethod
    def can_handle(cls, file_path: str | Path) -> bool:
        """Check if the file extension is one this converter reads."""
        return Path(file_path).suffix.lower() in cls.file_extensions

    def validate_source(self, source: str | Path) -> None:
        """
        Validate a source file before reading it.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            ValueError: If the file extension is not supported.
        """
        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {source}")

        if not self.can_handle(path):
            raise ValueError(
                f"Cannot handle file type: {path.suffix}. "
                f"Supported: {', '.join(self.file_extensions)}"
            )

    def load(self, source: TopoJSON | str | Path | dict[str, Any]) -> Topology:
        """
        Load a Topology from a parsed Topology, a file path or a JSON dictionary.

        Raises:
            ExpectedTypeError: If the document is a bare geometry.
            TopoJSONError: If the document is not valid TopoJSON.
        """
        parsed: TopoJSON
        if isinstance(source, (Topology, Geometry)):
            parsed = source
        elif isinstance(source, dict):
            parsed = parse_topojson(source)
        else:
            self.validate_source(source)
            with open(source, "rb") as f:
                parsed = parse(f.read())

        if not isinstance(parsed, Topology):
            raise ExpectedTypeError(expected="Topology", actual=parsed.type)
        return parsed

    def convert(
        self,
        source: TopoJSON | str | Path | dict[str, Any],
        object_name: str | None = None,
    ) -> ConversionResult:
        """
        Convert TopoJSON to GeoJSON.

        Args:
            source: Parsed Topology, file path or TopoJSON dictionary.
            object_name: Name of the object to convert. If None, converts the first.

        Returns:
            ConversionResult with the GeoJSON data.
        """
        warnings: list[str] = []
        topology = self.load(source)

        names = topology.list_names()
        if not names:
            raise TopoJSONError("TopoJSON contains no objects")

        if object_name is None:
            object_name = names[0]
            if len(names) > 1:
                warnings.append(
                    f"Multiple objects found, using '{object_name}'. "
                    f"Available: {', '.join(names)}"
                )

        feature_collection, store = _convert(topology, object_name, self.precision, warnings)

        return ConversionResult(
            geojson=feature_collection,
            object_name=object_name,
            feature_count=len(feature_collection["features"]),
            warnings=warnings,
            metadata={
                "objects": names,
                "arc_count": len(store),
                "decoded_arc_count": store.decoded_count,
                "quantized": topology.transform is not None,
            },
        )

    def convert_from_bytes(self, data: bytes, object_name: str | None = None) -> ConversionResult:
        """Convert TopoJSON from bytes."""
        return self.convert(parse(data), object_name=object_name)
