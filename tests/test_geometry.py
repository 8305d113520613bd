"""Tests for geometry parsing."""

import dataclasses

import pytest

from topojson_reader.errors import (
    ExpectedIntegerValueError,
    GeometryUnknownTypeError,
    MissingPropertyError,
    PositionTooShortError,
    PropertiesExpectedObjectOrNullError,
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
    parse_geometry,
)


class TestParseGeometry:
    """Test parsing of each geometry kind."""

    def test_point(self) -> None:
        """Test parsing a Point."""
        geometry = parse_geometry({"type": "Point", "coordinates": [1.1, 2.1]})
        assert geometry == Geometry(value=Point((1.1, 2.1)))
        assert geometry.type == "Point"

    def test_multi_point(self) -> None:
        """Test parsing a MultiPoint."""
        geometry = parse_geometry({"type": "MultiPoint", "coordinates": [[0, 0], [1, 2]]})
        assert geometry.value == MultiPoint(((0.0, 0.0), (1.0, 2.0)))

    def test_line_string(self) -> None:
        """Test parsing a LineString."""
        geometry = parse_geometry({"type": "LineString", "arcs": [0, -2]})
        assert geometry.value == LineString((0, -2))

    def test_multi_line_string(self) -> None:
        """Test parsing a MultiLineString."""
        geometry = parse_geometry({"type": "MultiLineString", "arcs": [[0], [1, 2]]})
        assert geometry.value == MultiLineString(((0,), (1, 2)))

    def test_polygon(self) -> None:
        """Test parsing a Polygon."""
        geometry = parse_geometry({"type": "Polygon", "arcs": [[1]]})
        assert geometry.value == Polygon(((1,),))

    def test_multi_polygon(self) -> None:
        """Test parsing a MultiPolygon."""
        geometry = parse_geometry({"type": "MultiPolygon", "arcs": [[[0]], [[1], [-3]]]})
        assert geometry.value == MultiPolygon((((0,),), ((1,), (-3,))))

    def test_geometry_collection(self) -> None:
        """Test parsing a GeometryCollection with member attributes."""
        geometry = parse_geometry(
            {
                "type": "GeometryCollection",
                "properties": {"prop0": 0},
                "geometries": [
                    {"type": "Point", "coordinates": [100.0, 0.0], "properties": {"prop1": 1}},
                    {"type": "LineString", "arcs": [0]},
                ],
            }
        )
        assert isinstance(geometry.value, GeometryCollection)
        assert geometry.properties == {"prop0": 0}
        first, second = geometry.value.geometries
        assert first.properties == {"prop1": 1}
        assert second.value == LineString((0,))

    def test_empty_geometry_collection(self) -> None:
        """Test a collection without members."""
        geometry = parse_geometry({"type": "GeometryCollection", "geometries": []})
        assert geometry.value == GeometryCollection(())

    def test_does_not_modify_input(self) -> None:
        """Test that the caller's dictionary is left untouched."""
        obj = {"type": "Point", "coordinates": [1, 2], "id": 3, "extra": "x"}
        parse_geometry(obj)
        assert obj == {"type": "Point", "coordinates": [1, 2], "id": 3, "extra": "x"}


class TestGeometryMembers:
    """Test bbox, id, properties and foreign members."""

    def test_members(self) -> None:
        """Test that optional members are captured."""
        geometry = parse_geometry(
            {
                "type": "Point",
                "coordinates": [1, 2],
                "bbox": [1, 2, 1, 2],
                "id": "a",
                "properties": {"name": "x"},
                "other_member": True,
            }
        )
        assert geometry.bbox == (1.0, 2.0, 1.0, 2.0)
        assert geometry.id == "a"
        assert geometry.properties == {"name": "x"}
        assert geometry.foreign_members == {"other_member": True}

    def test_null_properties_and_id(self) -> None:
        """Test that null properties and id are treated as absent."""
        geometry = parse_geometry(
            {"type": "Point", "coordinates": [1, 2], "properties": None, "id": None}
        )
        assert geometry.properties is None
        assert geometry.id is None
        assert geometry.foreign_members is None

    def test_properties_not_object(self) -> None:
        """Test properties that are neither an object nor null."""
        with pytest.raises(PropertiesExpectedObjectOrNullError):
            parse_geometry({"type": "Point", "coordinates": [1, 2], "properties": "x"})

    def test_frozen(self) -> None:
        """Test that parsed geometries are immutable."""
        geometry = parse_geometry({"type": "Point", "coordinates": [1, 2]})
        with pytest.raises(dataclasses.FrozenInstanceError):
            geometry.id = 1  # type: ignore[misc]


class TestGeometryErrors:
    """Test geometry parse errors."""

    def test_coordinates_instead_of_arcs(self) -> None:
        """Test a LineString given coordinates."""
        with pytest.raises(MissingPropertyError) as exc_info:
            parse_geometry({"coordinates": [0], "type": "LineString"})
        assert exc_info.value.name == "arcs"

    def test_missing_type(self) -> None:
        """Test a geometry without a type."""
        with pytest.raises(MissingPropertyError) as exc_info:
            parse_geometry({"coordinates": [0, 0]})
        assert exc_info.value.name == "type"

    @pytest.mark.parametrize("geom_type", ["Feature", "Topology", "point"])
    def test_unknown_type(self, geom_type: str) -> None:
        """Test names that are not geometry types."""
        with pytest.raises(GeometryUnknownTypeError) as exc_info:
            parse_geometry({"type": geom_type})
        assert exc_info.value.actual == geom_type

    def test_short_point(self) -> None:
        """Test a Point with a single coordinate."""
        with pytest.raises(PositionTooShortError):
            parse_geometry({"type": "Point", "coordinates": [5]})

    def test_short_multi_point_member(self) -> None:
        """Test a MultiPoint with one short position."""
        with pytest.raises(PositionTooShortError):
            parse_geometry({"type": "MultiPoint", "coordinates": [[0, 0], [1]]})

    def test_float_arc_index(self) -> None:
        """Test that arc indexes must be integers."""
        with pytest.raises(ExpectedIntegerValueError):
            parse_geometry({"type": "LineString", "arcs": [0.5]})

    def test_error_in_collection_member(self) -> None:
        """Test that a bad member fails the whole collection."""
        with pytest.raises(MissingPropertyError):
            parse_geometry({"type": "GeometryCollection", "geometries": [{"type": "Polygon"}]})


class TestGeometryToDict:
    """Test conversion back to TopoJSON objects."""

    def test_point(self) -> None:
        """Test the members of a serialized Point."""
        geometry = Geometry(value=Point((1.1, 2.1)), id=5, properties={"a": 1})
        assert geometry.to_dict() == {
            "type": "Point",
            "coordinates": [1.1, 2.1],
            "id": 5,
            "properties": {"a": 1},
        }

    def test_omits_absent_members(self) -> None:
        """Test that absent members are not written."""
        assert Geometry(value=LineString((0,))).to_dict() == {"type": "LineString", "arcs": [0]}

    def test_multi_polygon(self) -> None:
        """Test nested arc index lists."""
        geometry = Geometry(value=MultiPolygon((((0,),), ((1,), (-3,)))))
        assert geometry.to_dict()["arcs"] == [[[0]], [[1], [-3]]]

    def test_foreign_members(self) -> None:
        """Test that foreign members are written at the top level."""
        geometry = Geometry(value=Point((0.0, 0.0)), foreign_members={"title": "x"})
        assert geometry.to_dict()["title"] == "x"
