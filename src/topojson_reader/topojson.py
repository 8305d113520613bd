"""
Reading and writing TopoJSON documents.

A TopoJSON document is either a Topology or a single geometry object,
told apart by its 'type' member.
"""

import json
import logging
from typing import Any, Union

from topojson_reader import extractors
from topojson_reader.errors import (
    MalformedJSONError,
    MissingPropertyError,
    TopoJSONUnknownTypeError,
)
from topojson_reader.geometry import GEOMETRY_TYPES, Geometry, parse_geometry
from topojson_reader.topology import Topology, parse_topology

logger = logging.getLogger(__name__)

TopoJSON = Union[Geometry, Topology]


def parse_topojson(obj: dict[str, Any]) -> TopoJSON:
    """
    Parse a decoded TopoJSON object.

    Args:
        obj: Decoded JSON object. It is not modified.

    Returns:
        A Topology, or a Geometry when the document is a bare geometry.

    Raises:
        TopoJSONError: If the document is not valid TopoJSON.
    """
    if "type" not in obj:
        raise MissingPropertyError("type")
    topo_type = extractors.expect_string(obj["type"])

    if topo_type == "Topology":
        return parse_topology(obj)
    if topo_type in GEOMETRY_TYPES:
        return parse_geometry(obj)
    raise TopoJSONUnknownTypeError(topo_type)


def parse(text: str | bytes) -> TopoJSON:
    """
    Parse TopoJSON text.

    Args:
        text: JSON document, as text or UTF-8 bytes.

    Returns:
        A Topology or a Geometry.

    Raises:
        MalformedJSONError: If the text is not a JSON object.
        TopoJSONError: If the object is not valid TopoJSON.
    """
    if isinstance(text, bytes):
        text = text.decode("utf-8")

    try:
        obj = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedJSONError(f"Malformed JSON: {e}") from e

    if not isinstance(obj, dict):
        raise MalformedJSONError()

    result = parse_topojson(obj)
    logger.debug("Parsed TopoJSON %s", type(result).__name__)
    return result


def to_dict(topojson: TopoJSON) -> dict[str, Any]:
    """Return a Topology or Geometry as a TopoJSON object."""
    return topojson.to_dict()


def dumps(topojson: TopoJSON, **kwargs: Any) -> str:
    """
    Serialize a Topology or Geometry to TopoJSON text.

    The default output is compact with sorted keys. Keyword arguments are
    passed to ``json.dumps`` and override those defaults.
    """
    kwargs.setdefault("separators", (",", ":"))
    kwargs.setdefault("sort_keys", True)
    return json.dumps(to_dict(topojson), **kwargs)
