"""
TopoJSON Topology objects.
"""

import logging
from dataclasses import dataclass
from typing import Any

from topojson_reader import extractors
from topojson_reader.arcs import Arc
from topojson_reader.errors import ExpectedTypeError
from topojson_reader.geometry import Bbox, Geometry, NamedGeometry, parse_geometry
from topojson_reader.transform import TransformParams

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Topology:
    """
    A TopoJSON Topology.

    ``objects`` keeps the order of the source document. ``arcs`` holds the
    raw positions exactly as stored in the document; they are decoded with
    ``transform`` only when a geometry referencing them is converted.
    """

    objects: tuple[NamedGeometry, ...] = ()
    arcs: tuple[Arc, ...] = ()
    transform: TransformParams | None = None
    bbox: Bbox | None = None
    foreign_members: dict[str, Any] | None = None

    def list_names(self) -> list[str]:
        """Return the names of the Topology's objects, in order."""
        return [named.name for named in self.objects]

    def get(self, name: str) -> Geometry | None:
        """Return the first object called ``name``, or None."""
        for named in self.objects:
            if named.name == name:
                return named.geometry
        return None

    def to_dict(self) -> dict[str, Any]:
        """Return the Topology as a TopoJSON object."""
        objects: dict[str, Any] = {}
        for named in self.objects:
            # Same object as get() for repeated names.
            if named.name not in objects:
                objects[named.name] = named.geometry.to_dict()

        result: dict[str, Any] = {
            "type": "Topology",
            "arcs": [[list(position) for position in arc] for arc in self.arcs],
            "objects": objects,
        }
        if self.bbox is not None:
            result["bbox"] = list(self.bbox)
        if self.transform is not None:
            result["transform"] = self.transform.to_dict()
        if self.foreign_members:
            result.update(self.foreign_members)
        return result


def parse_topology(obj: dict[str, Any]) -> Topology:
    """
    Parse a TopoJSON Topology object.

    Args:
        obj: Decoded JSON object. It is not modified.

    Returns:
        The parsed Topology. Arcs are stored undecoded.

    Raises:
        TopoJSONError: The first violated expectation found.
    """
    obj = dict(obj)
    topo_type = extractors.get_type(obj)
    if topo_type != "Topology":
        raise ExpectedTypeError(expected="Topology", actual=topo_type)

    bbox = extractors.get_bbox(obj)
    objects = tuple(
        NamedGeometry(name=name, geometry=parse_geometry(member))
        for name, member in extractors.get_named_objects(obj)
    )
    transform = extractors.get_transform(obj)
    arcs = extractors.get_arcs(obj)

    logger.debug(
        "Parsed Topology with %d object(s) and %d arc(s)%s",
        len(objects),
        len(arcs),
        " (quantized)" if transform else "",
    )

    return Topology(
        objects=objects,
        arcs=arcs,
        transform=transform,
        bbox=bbox,
        foreign_members=extractors.get_foreign_members(obj),
    )
