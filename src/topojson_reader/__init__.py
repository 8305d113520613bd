"""
TopoJSON Reader - Parse TopoJSON and convert it to GeoJSON.

Parses Topology and geometry documents into immutable typed objects and
converts named Topology objects to GeoJSON FeatureCollections, decoding
quantized and delta-encoded arcs on demand.
"""

from topojson_reader.arcs import (
    ArcStore,
    build_ring,
    decode_arc,
    decode_point,
    resolve_arc_index,
)
from topojson_reader.converter import (
    ConversionResult,
    TopologyConverter,
    convert,
)
from topojson_reader.errors import TopoJSONError
from topojson_reader.geometry import (
    Geometry,
    GeometryCollection,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    NamedGeometry,
    Point,
    Polygon,
    parse_geometry,
)
from topojson_reader.topojson import TopoJSON, dumps, parse, parse_topojson, to_dict
from topojson_reader.topology import Topology, parse_topology
from topojson_reader.transform import TransformParams
from topojson_reader.validators import (
    TopologyValidator,
    ValidationResult,
    ValidationWarning,
    validate_topology,
)

__version__ = "0.1.0"
__all__ = [
    # Reading and writing
    "parse",
    "parse_topojson",
    "parse_geometry",
    "parse_topology",
    "dumps",
    "to_dict",
    # Model
    "TopoJSON",
    "Topology",
    "TransformParams",
    "Geometry",
    "NamedGeometry",
    "Point",
    "MultiPoint",
    "LineString",
    "MultiLineString",
    "Polygon",
    "MultiPolygon",
    "GeometryCollection",
    # Arcs
    "ArcStore",
    "build_ring",
    "decode_arc",
    "decode_point",
    "resolve_arc_index",
    # Conversion
    "convert",
    "ConversionResult",
    "TopologyConverter",
    # Validation
    "TopologyValidator",
    "ValidationResult",
    "ValidationWarning",
    "validate_topology",
    # Errors
    "TopoJSONError",
    # Version
    "__version__",
]
