"""
Errors raised at the layout engine's input boundary.
"""


class LayoutError(ValueError):
    """Base class for rejected layout input."""


class InvalidIntervalError(LayoutError):
    def __init__(self, message: str, interval_id=None):
        super().__init__(message)
        self.interval_id = interval_id


class InvalidReferenceDateError(LayoutError):
    pass
