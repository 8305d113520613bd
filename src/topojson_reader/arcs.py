"""
Arc resolution and coordinate decoding.

Arcs are stored once per Topology and referenced by index from
geometries. A negative index ``i`` refers to arc ``~i`` (``-i - 1``)
traversed in reverse. When the Topology is quantized, arc positions are
delta-encoded: each raw value is an increment on the previous position.
"""

from collections.abc import Iterable, Sequence

from topojson_reader.errors import ArcIndexOutOfRangeError
from topojson_reader.transform import TransformParams


Position = tuple[float, ...]
Arc = tuple[Position, ...]
ArcIndexes = tuple[int, ...]


def decode_arc(arc: Sequence[Position], transform: TransformParams | None) -> list[Position]:
    """
    Decode a raw arc into absolute positions.

    Without a transform, positions are returned unchanged. With one, the
    x and y values are summed cumulatively and the running sums mapped
    through the transform.

    Args:
        arc: Raw positions as stored in the Topology.
        transform: Quantization transform, if the Topology has one.

    Returns:
        List of decoded positions, the same length as ``arc``.
    """
    if transform is None:
        return [tuple(position) for position in arc]

    decoded: list[Position] = []
    x, y = 0.0, 0.0

    for position in arc:
        x += position[0]
        y += position[1]
        decoded.append(transform.apply(x, y) + tuple(position[2:]))

    return decoded


def decode_point(position: Sequence[float], transform: TransformParams | None) -> Position:
    """Decode a single position. Points are quantized but never delta-encoded."""
    if transform is None:
        return tuple(position)
    return transform.apply(position[0], position[1]) + tuple(position[2:])


def resolve_arc_index(index: int, arc_count: int) -> tuple[int, bool]:
    """
    Split a signed arc index into an arc offset and a reversal flag.

    Raises:
        ArcIndexOutOfRangeError: If the offset is not below ``arc_count``.
    """
    if index < 0:
        offset, reversed_ = ~index, True
    else:
        offset, reversed_ = index, False

    if offset >= arc_count:
        raise ArcIndexOutOfRangeError(index, arc_count)

    return offset, reversed_


def build_ring(
    indexes: Iterable[int],
    arcs: Sequence[Sequence[Position]],
    transform: TransformParams | None,
) -> list[Position]:
    """Concatenate the decoded arcs referenced by ``indexes``."""
    return ArcStore(arcs, transform).ring(indexes)


class ArcStore:
    """
    Read-only view over a Topology's arcs that decodes them on demand.

    Decoded arcs are memoized, so an arc shared by many rings is decoded
    once per store. Create one store per conversion.
    """

    def __init__(
        self,
        arcs: Sequence[Sequence[Position]],
        transform: TransformParams | None = None,
    ) -> None:
        self.arcs = arcs
        self.transform = transform
        self._decoded: dict[int, list[Position]] = {}

    def __len__(self) -> int:
        return len(self.arcs)

    def decode(self, offset: int) -> list[Position]:
        """Return the decoded positions of the arc at ``offset``, forward."""
        if offset not in self._decoded:
            self._decoded[offset] = decode_arc(self.arcs[offset], self.transform)
        return self._decoded[offset]

    def resolve(self, index: int) -> list[Position]:
        """Return the positions of a signed arc index, reversed if negative."""
        offset, reversed_ = resolve_arc_index(index, len(self.arcs))
        positions = self.decode(offset)
        if reversed_:
            return positions[::-1]
        return list(positions)

    def ring(self, indexes: Iterable[int]) -> list[Position]:
        """
        Build one line or ring from a sequence of arc indexes.

        Arcs are appended verbatim: the shared endpoint between consecutive
        arcs appears twice in the result.
        """
        coordinates: list[Position] = []
        for index in indexes:
            coordinates.extend(self.resolve(index))
        return coordinates

    def point(self, position: Sequence[float]) -> Position:
        """Decode a Point or MultiPoint position."""
        return decode_point(position, self.transform)

    @property
    def decoded_count(self) -> int:
        """Number of arcs decoded so far."""
        return len(self._decoded)
