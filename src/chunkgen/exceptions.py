"""Custom exceptions for chunk generation."""


class ChunkGenError(Exception):
    """Base exception for chunk generation errors."""

    pass


class InvalidGridError(ChunkGenError, ValueError):
    """Raised when a height grid is empty, not 2D, or ragged."""

    pass


class InvalidConfigError(ChunkGenError, ValueError):
    """Raised when generation parameters violate a precondition."""

    pass
