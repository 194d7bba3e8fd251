"""
Exceptions raised by planar extrusion.

``NotPlanarError`` and ``ExtrusionFailedError`` are reported to the user by the
host adapter; ``InvalidInputError`` ends a solve without a message.
"""


class PlanarExtrudeError(Exception):
    """Base class for all planar extrusion errors."""


class NotPlanarError(PlanarExtrudeError, ValueError):
    def __init__(self, message: str = "Curve is not planar") -> None:
        super().__init__(message)


class InvalidInputError(PlanarExtrudeError, ValueError):
    def __init__(self, message: str = "Invalid input") -> None:
        super().__init__(message)


class ExtrusionFailedError(PlanarExtrudeError, RuntimeError):
    def __init__(self, message: str = "Extrusion failed") -> None:
        super().__init__(message)
