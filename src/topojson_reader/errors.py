"""
Error types raised while parsing and converting TopoJSON.

Every error derives from TopoJSONError, itself a ValueError, so callers
can catch a single type for any malformed document.
"""

from typing import Any


class TopoJSONError(ValueError):
    """Base class for all TopoJSON parsing and conversion errors."""

    message = "Invalid TopoJSON"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class MalformedJSONError(TopoJSONError):
    message = "Input is not a JSON object"


class MissingPropertyError(TopoJSONError):
    """A required member is absent from a JSON object."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Expected property '{name}'")


class ExpectedStringValueError(TopoJSONError):
    message = "Expected a string value"


class ExpectedNumberValueError(TopoJSONError):
    message = "Expected a numeric value"


class ExpectedIntegerValueError(TopoJSONError):
    message = "Expected an integer value"


class ExpectedArrayValueError(TopoJSONError):
    message = "Expected an array value"


class ExpectedObjectValueError(TopoJSONError):
    message = "Expected an object value"


class ExpectedTypeError(TopoJSONError):
    """The 'type' member holds a value other than the one required."""

    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected type '{expected}', found '{actual}'")


class TopoJSONUnknownTypeError(TopoJSONError):
    def __init__(self, actual: str) -> None:
        self.actual = actual
        super().__init__(f"Unknown TopoJSON type: {actual}")


class GeometryUnknownTypeError(TopoJSONError):
    def __init__(self, actual: str) -> None:
        self.actual = actual
        super().__init__(f"Unknown geometry type: {actual}")


class PositionTooShortError(TopoJSONError):
    message = "Expected a position to have at least two numbers"


class BboxExpectedArrayError(TopoJSONError):
    message = "Expected 'bbox' to be an array"


class BboxExpectedNumericValuesError(TopoJSONError):
    message = "Expected 'bbox' to contain only numbers"


class PropertiesExpectedObjectOrNullError(TopoJSONError):
    message = "Expected 'properties' to be an object or null"


class TopologyExpectedObjectsError(TopoJSONError):
    message = "Expected Topology to have an 'objects' object"


class TopologyExpectedArcsError(TopoJSONError):
    message = "Expected Topology to have an 'arcs' member"


class TransformExpectedScaleError(TopoJSONError):
    message = "Expected 'transform' to have a 'scale' member"


class TransformExpectedTranslateError(TopoJSONError):
    message = "Expected 'transform' to have a 'translate' member"


class ScaleExpectedArrayError(TopoJSONError):
    message = "Expected 'scale' to be an array"


class ScaleExpectedNumericValuesError(TopoJSONError):
    message = "Expected 'scale' to contain two numbers"


class TranslateExpectedArrayError(TopoJSONError):
    message = "Expected 'translate' to be an array"


class TranslateExpectedNumericValuesError(TopoJSONError):
    message = "Expected 'translate' to contain two numbers"


class UnknownObjectKeyError(TopoJSONError):
    """The requested object name is not present in the Topology."""

    def __init__(self, name: str, available: Any = None) -> None:
        self.name = name
        message = f"Object '{name}' not found in TopoJSON"
        if available:
            message += f". Available: {', '.join(available)}"
        super().__init__(message)


class ArcIndexOutOfRangeError(TopoJSONError):
    """An arc index points past the end of the Topology's arcs."""

    def __init__(self, index: int, arc_count: int) -> None:
        self.index = index
        self.arc_count = arc_count
        super().__init__(f"Arc index {index} is out of range ({arc_count} arcs)")


class UnsupportedNestedCollectionError(TopoJSONError):
    message = "Nested GeometryCollections cannot be converted to features"
