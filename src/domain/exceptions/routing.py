class ShapeError(Exception):
    """Base exception for shape reconstruction failures."""


class NoNearbyVertex(ShapeError):
    """Raised when a query point cannot be snapped to a graph vertex."""


class ShapeNotFound(ShapeError):
    """Raised when no walk connects the two snapped vertices."""


class EmptyPathError(ValueError):
    """Raised when an empty path is added to a route graph."""
