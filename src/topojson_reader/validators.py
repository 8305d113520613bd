"""
Topology validation module.

Conversion resolves arcs lazily, so a broken reference only surfaces when
the object using it is converted. The validator walks every object up
front and reports problems without modifying the data.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, Optional

from topojson_reader.geometry import (
    Bbox,
    Geometry,
    GeometryCollection,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)
from topojson_reader.topology import Topology


@dataclass
class ValidationWarning:
    """A single validation warning."""

    object_name: Optional[str]
    """Name of the Topology object with the issue, or None for global issues."""

    path: Optional[str]
    """Location inside the object, e.g. 'geometries/2'."""

    warning_type: str
    """Category of warning (e.g., 'arc_index_out_of_range', 'short_arc')."""

    message: str
    """Human-readable warning message."""

    severity: str = "warning"
    """Severity level: 'info', 'warning', 'error'."""

    details: dict[str, Any] = field(default_factory=dict)
    """Additional details about the issue."""


@dataclass
class ValidationResult:
    """Result of topology validation."""

    valid: bool
    """Whether every object can be converted (no errors, warnings OK)."""

    warnings: list[ValidationWarning] = field(default_factory=list)
    """List of validation warnings."""

    object_count: int = 0
    """Number of named objects validated."""

    arc_count: int = 0
    """Number of arcs in the Topology."""

    @property
    def warning_count(self) -> int:
        """Number of warnings."""
        return len([w for w in self.warnings if w.severity == "warning"])

    @property
    def error_count(self) -> int:
        """Number of errors."""
        return len([w for w in self.warnings if w.severity == "error"])

    def get_warnings_by_type(self, warning_type: str) -> list[ValidationWarning]:
        """Get all warnings of a specific type."""
        return [w for w in self.warnings if w.warning_type == warning_type]

    def to_summary(self) -> str:
        """Generate a human-readable summary."""
        lines = [
            f"Validated {self.object_count} objects and {self.arc_count} arcs",
            f"  Warnings: {self.warning_count}",
            f"  Errors: {self.error_count}",
        ]

        if self.warnings:
            lines.append("\nIssues found:")
            types: dict[str, int] = {}
            for w in self.warnings:
                types[w.warning_type] = types.get(w.warning_type, 0) + 1

            for wtype, count in sorted(types.items()):
                lines.append(f"  - {wtype}: {count}")

        return "\n".join(lines)


def _iter_arc_indexes(geometry: Geometry) -> Iterator[int]:
    value = geometry.value
    if isinstance(value, LineString):
        yield from value.arcs
    elif isinstance(value, (MultiLineString, Polygon)):
        for ring in value.arcs:
            yield from ring
    elif isinstance(value, MultiPolygon):
        for polygon in value.arcs:
            for ring in polygon:
                yield from ring


class TopologyValidator:
    """
    Validates a parsed Topology and provides warnings.

    Errors mark problems that make conversion fail or produce unusable
    coordinates; warnings and info entries are reported only.
    """

    BBOX_LENGTHS = (4, 6)

    def __init__(
        self,
        check_arcs: bool = True,
        check_unused_arcs: bool = True,
        max_warnings: int = 100,
    ) -> None:
        """
        Initialize the validator.

        Args:
            check_arcs: Check the shape of every stored arc.
            check_unused_arcs: Report arcs no object references.
            max_warnings: Maximum warnings to collect.
        """
        self.check_arcs = check_arcs
        self.check_unused_arcs = check_unused_arcs
        self.max_warnings = max_warnings

    def validate(self, topology: Topology) -> ValidationResult:
        """
        Validate a Topology.

        Args:
            topology: Parsed Topology to validate.

        Returns:
            ValidationResult with warnings and statistics.
        """
        warnings: list[ValidationWarning] = []
        used_arcs: set[int] = set()

        if not topology.objects:
            warnings.append(
                ValidationWarning(
                    None, None, "no_objects", "Topology contains no objects", severity="info"
                )
            )

        warnings.extend(self._check_bbox(topology.bbox, None, None))

        if topology.transform is not None and 0.0 in topology.transform.scale:
            warnings.append(
                ValidationWarning(
                    None,
                    None,
                    "zero_scale",
                    "Transform scale contains 0; all positions collapse on that axis",
                    details={"scale": list(topology.transform.scale)},
                )
            )

        if self.check_arcs:
            warnings.extend(self._check_arcs(topology))

        for named in topology.objects:
            warnings.extend(
                self._check_geometry(
                    named.geometry, named.name, "", len(topology.arcs), used_arcs, depth=0
                )
            )

        if self.check_unused_arcs:
            unused = sorted(set(range(len(topology.arcs))) - used_arcs)
            if unused:
                warnings.append(
                    ValidationWarning(
                        None,
                        None,
                        "unused_arcs",
                        f"{len(unused)} arc(s) are not referenced by any object",
                        severity="info",
                        details={"arcs": unused[:20]},
                    )
                )

        valid = not any(w.severity == "error" for w in warnings)

        if len(warnings) > self.max_warnings:
            warnings = warnings[: self.max_warnings]
            warnings.append(
                ValidationWarning(
                    None,
                    None,
                    "max_warnings_reached",
                    f"Maximum warnings ({self.max_warnings}) reached, remaining issues omitted",
                    severity="info",
                )
            )

        return ValidationResult(
            valid=valid,
            warnings=warnings,
            object_count=len(topology.objects),
            arc_count=len(topology.arcs),
        )

    def _check_bbox(
        self,
        bbox: Bbox | None,
        object_name: str | None,
        path: str | None,
    ) -> list[ValidationWarning]:
        if bbox is None or len(bbox) in self.BBOX_LENGTHS:
            return []
        return [
            ValidationWarning(
                object_name,
                path,
                "bbox_length",
                f"Bounding box has {len(bbox)} values, expected 4 or 6",
                details={"bbox": list(bbox)},
            )
        ]

    def _check_arcs(self, topology: Topology) -> list[ValidationWarning]:
        warnings: list[ValidationWarning] = []
        for i, arc in enumerate(topology.arcs):
            if len(arc) < 2:
                warnings.append(
                    ValidationWarning(
                        None,
                        f"arcs/{i}",
                        "short_arc",
                        f"Arc {i} has {len(arc)} position(s), expected at least 2",
                    )
                )
            if any(len(position) < 2 for position in arc):
                warnings.append(
                    ValidationWarning(
                        None,
                        f"arcs/{i}",
                        "short_position",
                        f"Arc {i} has a position with fewer than 2 values",
                        severity="error",
                    )
                )
        return warnings

    def _check_geometry(
        self,
        geometry: Geometry,
        object_name: str,
        path: str,
        arc_count: int,
        used_arcs: set[int],
        depth: int,
    ) -> list[ValidationWarning]:
        warnings = self._check_bbox(geometry.bbox, object_name, path or None)
        value = geometry.value

        if isinstance(value, GeometryCollection):
            if depth > 0:
                warnings.append(
                    ValidationWarning(
                        object_name,
                        path or None,
                        "nested_collection",
                        "Nested GeometryCollection cannot be converted to features",
                        severity="error",
                    )
                )
            for i, child in enumerate(value.geometries):
                child_path = f"{path}/geometries/{i}" if path else f"geometries/{i}"
                warnings.extend(
                    self._check_geometry(
                        child, object_name, child_path, arc_count, used_arcs, depth + 1
                    )
                )
            return warnings

        if isinstance(value, (Point, MultiPoint)):
            positions = [value.position] if isinstance(value, Point) else value.positions
            if any(len(position) < 2 for position in positions):
                warnings.append(
                    ValidationWarning(
                        object_name,
                        path or None,
                        "short_position",
                        f"{geometry.type} has a position with fewer than 2 values",
                        severity="error",
                    )
                )
            return warnings

        bad: list[int] = []
        for index in _iter_arc_indexes(geometry):
            offset = ~index if index < 0 else index
            if offset >= arc_count:
                bad.append(index)
            else:
                used_arcs.add(offset)

        if bad:
            warnings.append(
                ValidationWarning(
                    object_name,
                    path or None,
                    "arc_index_out_of_range",
                    f"{geometry.type} references {len(bad)} missing arc(s)",
                    severity="error",
                    details={"indexes": bad[:20], "arc_count": arc_count},
                )
            )
        return warnings


def validate_topology(topology: Topology, **options: Any) -> ValidationResult:
    """
    Convenience function to validate a Topology.

    Args:
        topology: Parsed Topology.
        **options: Options passed to TopologyValidator.

    Returns:
        ValidationResult with warnings.
    """
    validator = TopologyValidator(**options)
    return validator.validate(topology)

