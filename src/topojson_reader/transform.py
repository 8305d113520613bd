"""
Quantization transform of a Topology.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class TransformParams:
    """
    Affine transform mapping quantized integer coordinates to positions.

    Each decoded coordinate is ``value * scale + translate`` on the x and
    y axes. Further dimensions are never transformed.
    """

    scale: tuple[float, float]
    translate: tuple[float, float]

    def apply(self, x: float, y: float) -> tuple[float, float]:
        """Map a quantized (x, y) pair to real-world coordinates."""
        return (
            x * self.scale[0] + self.translate[0],
            y * self.scale[1] + self.translate[1],
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the TopoJSON representation of the transform."""
        return {"scale": list(self.scale), "translate": list(self.translate)}
