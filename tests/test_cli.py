"""Tests for the CLI module."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from topojson_reader.cli import main

TOPOLOGY = {
    "type": "Topology",
    "transform": {"scale": [0.5, 0.5], "translate": [10, 20]},
    "objects": {
        "land": {"type": "Polygon", "arcs": [[0]], "properties": {"name": "Land"}},
        "cities": {
            "type": "GeometryCollection",
            "geometries": [
                {"type": "Point", "coordinates": [0, 0]},
                {"type": "Point", "coordinates": [2, 2]},
            ],
        },
    },
    "arcs": [[[0, 0], [2, 0], [0, 2], [-2, 0], [0, -2]]],
}


@pytest.fixture
def topology_file(tmp_path: Path) -> Path:
    """Write a small Topology to disk."""
    path = tmp_path / "world.topojson"
    path.write_text(json.dumps(TOPOLOGY), encoding="utf-8")
    return path


@pytest.fixture
def point_file(tmp_path: Path) -> Path:
    """Write an untransformed Topology with one fractional Point."""
    path = tmp_path / "point.topojson"
    path.write_text(
        json.dumps(
            {
                "type": "Topology",
                "objects": {"pt": {"type": "Point", "coordinates": [1.26, 2.54]}},
                "arcs": [],
            }
        ),
        encoding="utf-8",
    )
    return path


class TestCLI:
    """Test CLI commands."""

    def test_help(self) -> None:
        """Test main help."""
        runner = CliRunner()
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "TopoJSON Reader" in result.output
        assert "convert" in result.output
        assert "Examples" in result.output

    def test_version(self) -> None:
        """Test version option."""
        runner = CliRunner()
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "topojson-reader" in result.output

    def test_info_command(self) -> None:
        """Test info command."""
        runner = CliRunner()
        result = runner.invoke(main, ["info"])
        assert result.exit_code == 0
        assert "CONFIGURATION" in result.output
        assert "TOPOJSON_READER_PRECISION" in result.output

    def test_invalid_log_level(self) -> None:
        """Test rejection of an unknown log level."""
        runner = CliRunner()
        result = runner.invoke(main, ["--log-level", "chatty", "info"])
        assert result.exit_code == 2
        assert "Unknown log level" in result.output

    def test_log_level_from_env(self) -> None:
        """Test that the environment sets the default log level."""
        runner = CliRunner(env={"TOPOJSON_READER_LOG_LEVEL": "debug"})
        result = runner.invoke(main, ["info"])
        assert result.exit_code == 0, result.output

    def test_invalid_log_level_from_env(self) -> None:
        """Test an unknown log level in the environment."""
        runner = CliRunner(env={"TOPOJSON_READER_LOG_LEVEL": "chatty"})
        result = runner.invoke(main, ["info"])
        assert result.exit_code == 1
        assert "Unknown log level" in result.output

    def test_bad_precision_from_env(self) -> None:
        """Test a precision in the environment that is not an integer."""
        runner = CliRunner(env={"TOPOJSON_READER_PRECISION": "six"})
        result = runner.invoke(main, ["info"])
        assert result.exit_code == 1
        assert "TOPOJSON_READER_PRECISION" in result.output

    def test_convert_help(self) -> None:
        """Test convert command help."""
        runner = CliRunner()
        result = runner.invoke(main, ["convert", "--help"])
        assert result.exit_code == 0
        assert "--object" in result.output
        assert "--precision" in result.output


class TestConvertCommand:
    """Test the convert command."""

    def test_convert_named_object(self, topology_file: Path, tmp_path: Path) -> None:
        """Test converting a named object to a file."""
        output = tmp_path / "cities.geojson"
        runner = CliRunner()
        result = runner.invoke(
            main, ["convert", str(topology_file), str(output), "--object", "cities"]
        )

        assert result.exit_code == 0, result.output
        assert "Converted 2 features" in result.output
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["type"] == "FeatureCollection"
        assert data["features"][1]["geometry"]["coordinates"] == [11.0, 21.0]

    def test_convert_first_object(self, topology_file: Path, tmp_path: Path) -> None:
        """Test that the first object is used by default."""
        output = tmp_path / "out.geojson"
        runner = CliRunner()
        result = runner.invoke(main, ["convert", str(topology_file), str(output), "--pretty"])

        assert result.exit_code == 0, result.output
        assert "Object: land" in result.output
        assert "Multiple objects found" in result.output
        text = output.read_text(encoding="utf-8")
        assert "\n" in text
        ring = json.loads(text)["features"][0]["geometry"]["coordinates"][0]
        assert ring == [[10.0, 20.0], [11.0, 20.0], [11.0, 21.0], [10.0, 21.0], [10.0, 20.0]]

    def test_convert_unknown_object(self, topology_file: Path, tmp_path: Path) -> None:
        """Test error for an unknown object name."""
        runner = CliRunner()
        result = runner.invoke(
            main,
            ["convert", str(topology_file), str(tmp_path / "out.geojson"), "-o", "rivers"],
        )
        assert result.exit_code == 1
        assert "Object 'rivers' not found" in result.output

    def test_convert_precision_from_env(self, topology_file: Path, tmp_path: Path) -> None:
        """Test reading the precision from the environment."""
        output = tmp_path / "out.geojson"
        runner = CliRunner(env={"TOPOJSON_READER_PRECISION": "0"})
        result = runner.invoke(
            main, ["convert", str(topology_file), str(output), "-o", "cities"]
        )
        assert result.exit_code == 0, result.output
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["features"][1]["geometry"]["coordinates"] == [11, 21]

    def test_convert_precision_option_overrides_env(self, point_file: Path, tmp_path: Path) -> None:
        """Test that --precision wins over the environment."""
        output = tmp_path / "out.geojson"
        runner = CliRunner(env={"TOPOJSON_READER_PRECISION": "0"})
        result = runner.invoke(main, ["convert", str(point_file), str(output), "--precision", "1"])
        assert result.exit_code == 0, result.output
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["features"][0]["geometry"]["coordinates"] == [1.3, 2.5]

    def test_convert_unrounded_by_default(self, point_file: Path, tmp_path: Path) -> None:
        """Test that coordinates are written exactly without a precision."""
        output = tmp_path / "out.geojson"
        runner = CliRunner(env={"TOPOJSON_READER_PRECISION": None})
        result = runner.invoke(main, ["convert", str(point_file), str(output)])
        assert result.exit_code == 0, result.output
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["features"][0]["geometry"]["coordinates"] == [1.26, 2.54]

    def test_convert_malformed_input(self, tmp_path: Path) -> None:
        """Test error for a file that is not JSON."""
        source = tmp_path / "broken.topojson"
        source.write_text("{", encoding="utf-8")
        runner = CliRunner()
        result = runner.invoke(main, ["convert", str(source), str(tmp_path / "out.geojson")])
        assert result.exit_code == 1
        assert "Malformed JSON" in result.output


class TestNamesCommand:
    """Test the names command."""

    def test_names(self, topology_file: Path) -> None:
        """Test listing object names in order."""
        runner = CliRunner()
        result = runner.invoke(main, ["names", str(topology_file)])
        assert result.exit_code == 0
        assert result.output.split() == ["land", "cities"]

    def test_names_missing_file(self, tmp_path: Path) -> None:
        """Test error for a missing file."""
        runner = CliRunner()
        result = runner.invoke(main, ["names", str(tmp_path / "missing.topojson")])
        assert result.exit_code == 2


class TestValidateCommand:
    """Test the validate command."""

    def test_validate_valid(self, topology_file: Path) -> None:
        """Test validating a valid Topology."""
        runner = CliRunner()
        result = runner.invoke(main, ["validate", str(topology_file)])
        assert result.exit_code == 0, result.output
        assert "Objects: 2" in result.output
        assert "Topology is valid" in result.output

    def test_validate_broken_reference(self, tmp_path: Path) -> None:
        """Test validating a Topology with a missing arc."""
        source = tmp_path / "broken.topojson"
        source.write_text(
            json.dumps(
                {
                    "type": "Topology",
                    "objects": {"line": {"type": "LineString", "arcs": [3]}},
                    "arcs": [],
                }
            ),
            encoding="utf-8",
        )
        runner = CliRunner()
        result = runner.invoke(main, ["validate", str(source)])
        assert result.exit_code == 1
        assert "arc_index_out_of_range" in result.output
        assert "line: LineString references 1 missing arc(s)" in result.output

    def test_validate_verbose(self, tmp_path: Path) -> None:
        """Test that info entries are shown only with --verbose."""
        source = tmp_path / "empty.topojson"
        source.write_text('{"type":"Topology","objects":{},"arcs":[]}', encoding="utf-8")
        runner = CliRunner()

        quiet = runner.invoke(main, ["validate", str(source)])
        assert quiet.exit_code == 0
        assert "no_objects" not in quiet.output

        verbose = runner.invoke(main, ["validate", str(source), "--verbose"])
        assert verbose.exit_code == 0
        assert "no_objects" in verbose.output

    def test_validate_unparseable(self, tmp_path: Path) -> None:
        """Test validating a document that fails to parse."""
        source = tmp_path / "bad.topojson"
        source.write_text('{"type":"Topology","objects":{}}', encoding="utf-8")
        runner = CliRunner()
        result = runner.invoke(main, ["validate", str(source)])
        assert result.exit_code == 1
        assert "Validation failed" in result.output
