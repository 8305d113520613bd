"""
Typed accessors over decoded JSON values.

The parsers only look at generic JSON (the output of ``json.loads``)
through this module. Getters remove the members they read from the
object, so whatever is left afterwards is a foreign member.
"""

from typing import Any

from topojson_reader.arcs import Arc, ArcIndexes, Position
from topojson_reader.errors import (
    BboxExpectedArrayError,
    BboxExpectedNumericValuesError,
    ExpectedArrayValueError,
    ExpectedIntegerValueError,
    ExpectedNumberValueError,
    ExpectedObjectValueError,
    ExpectedStringValueError,
    MissingPropertyError,
    PositionTooShortError,
    PropertiesExpectedObjectOrNullError,
    ScaleExpectedArrayError,
    ScaleExpectedNumericValuesError,
    TopologyExpectedArcsError,
    TopologyExpectedObjectsError,
    TransformExpectedScaleError,
    TransformExpectedTranslateError,
    TranslateExpectedArrayError,
    TranslateExpectedNumericValuesError,
)
from topojson_reader.transform import TransformParams

JsonObject = dict[str, Any]

_MISSING = object()


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def expect_property(obj: JsonObject, name: str) -> Any:
    """Remove and return the member ``name``, failing if it is absent."""
    value = obj.pop(name, _MISSING)
    if value is _MISSING:
        raise MissingPropertyError(name)
    return value


def expect_string(value: Any) -> str:
    if not isinstance(value, str):
        raise ExpectedStringValueError()
    return value


def expect_number(value: Any) -> float:
    if not _is_number(value):
        raise ExpectedNumberValueError()
    try:
        return float(value)
    except OverflowError as e:
        # JSON integers are unbounded; floats are not.
        raise ExpectedNumberValueError() from e


def expect_integer(value: Any) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ExpectedIntegerValueError()
    return value


def expect_array(value: Any) -> list[Any]:
    if not isinstance(value, list):
        raise ExpectedArrayValueError()
    return value


def expect_object(value: Any) -> JsonObject:
    if not isinstance(value, dict):
        raise ExpectedObjectValueError()
    return value


def get_type(obj: JsonObject) -> str:
    """Remove and return the 'type' member, which must be a string."""
    return expect_string(expect_property(obj, "type"))


def _to_position(value: Any) -> Position:
    position = tuple(expect_number(item) for item in expect_array(value))
    if len(position) < 2:
        raise PositionTooShortError()
    return position


def _to_positions(value: Any) -> tuple[Position, ...]:
    return tuple(_to_position(item) for item in expect_array(value))


def _to_arc_indexes(value: Any) -> ArcIndexes:
    return tuple(expect_integer(item) for item in expect_array(value))


def _to_arc_indexes_1d(value: Any) -> tuple[ArcIndexes, ...]:
    return tuple(_to_arc_indexes(item) for item in expect_array(value))


def get_position(obj: JsonObject) -> Position:
    """Read a single position from 'coordinates' (Point)."""
    return _to_position(expect_property(obj, "coordinates"))


def get_positions(obj: JsonObject) -> tuple[Position, ...]:
    """Read a list of positions from 'coordinates' (MultiPoint)."""
    return _to_positions(expect_property(obj, "coordinates"))


def get_arc_indexes(obj: JsonObject) -> ArcIndexes:
    """Read one list of arc indexes from 'arcs' (LineString)."""
    return _to_arc_indexes(expect_property(obj, "arcs"))


def get_arc_indexes_1d(obj: JsonObject) -> tuple[ArcIndexes, ...]:
    """Read a list of arc index lists from 'arcs' (MultiLineString, Polygon)."""
    return _to_arc_indexes_1d(expect_property(obj, "arcs"))


def get_arc_indexes_2d(obj: JsonObject) -> tuple[tuple[ArcIndexes, ...], ...]:
    """Read a list of polygons of arc index lists from 'arcs' (MultiPolygon)."""
    value = expect_property(obj, "arcs")
    return tuple(_to_arc_indexes_1d(item) for item in expect_array(value))


def get_geometry_objects(obj: JsonObject) -> list[JsonObject]:
    """Read the member objects of 'geometries' (GeometryCollection)."""
    value = expect_property(obj, "geometries")
    return [expect_object(item) for item in expect_array(value)]


def get_named_objects(obj: JsonObject) -> list[tuple[str, JsonObject]]:
    """Read the 'objects' member of a Topology as (name, object) pairs."""
    value = obj.pop("objects", None)
    if not isinstance(value, dict):
        raise TopologyExpectedObjectsError()
    return [(name, expect_object(member)) for name, member in value.items()]


def get_arcs(obj: JsonObject) -> tuple[Arc, ...]:
    """Read the raw, still encoded, 'arcs' member of a Topology."""
    value = obj.pop("arcs", _MISSING)
    if value is _MISSING:
        raise TopologyExpectedArcsError()
    return tuple(_to_positions(arc) for arc in expect_array(value))


def get_bbox(obj: JsonObject) -> tuple[float, ...] | None:
    value = obj.pop("bbox", _MISSING)
    if value is _MISSING:
        return None
    if not isinstance(value, list):
        raise BboxExpectedArrayError()
    if not all(_is_number(item) for item in value):
        raise BboxExpectedNumericValuesError()
    try:
        return tuple(float(item) for item in value)
    except OverflowError as e:
        raise BboxExpectedNumericValuesError() from e


def get_id(obj: JsonObject) -> Any:
    return obj.pop("id", None)


def get_properties(obj: JsonObject) -> JsonObject | None:
    """Read 'properties'; null is handled as if the member were absent."""
    value = obj.pop("properties", None)
    if value is None:
        return None
    if not isinstance(value, dict):
        raise PropertiesExpectedObjectOrNullError()
    return value


def get_foreign_members(obj: JsonObject) -> JsonObject | None:
    """Return the members left unconsumed, or None if there are none."""
    return dict(obj) if obj else None


def _to_pair(
    value: Any,
    array_error: type[Exception],
    numbers_error: type[Exception],
) -> tuple[float, float]:
    if not isinstance(value, list):
        raise array_error()
    if len(value) != 2 or not all(_is_number(item) for item in value):
        raise numbers_error()
    try:
        return (float(value[0]), float(value[1]))
    except OverflowError as e:
        raise numbers_error() from e


def get_transform(obj: JsonObject) -> TransformParams | None:
    """Read the optional 'transform' member of a Topology."""
    value = obj.pop("transform", _MISSING)
    if value is _MISSING:
        return None

    transform = expect_object(value)
    if "scale" not in transform:
        raise TransformExpectedScaleError()
    scale = _to_pair(
        transform["scale"], ScaleExpectedArrayError, ScaleExpectedNumericValuesError
    )
    if "translate" not in transform:
        raise TransformExpectedTranslateError()
    translate = _to_pair(
        transform["translate"],
        TranslateExpectedArrayError,
        TranslateExpectedNumericValuesError,
    )

    return TransformParams(scale=scale, translate=translate)
