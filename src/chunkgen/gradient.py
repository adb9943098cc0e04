"""Finite-difference gradients of height grids."""

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .exceptions import InvalidGridError


def _as_height_array(grid: ArrayLike) -> NDArray[np.float64]:
    """Validate a height grid and convert it to float64."""
    try:
        values = np.asarray(grid, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidGridError(f"Height grid must be rectangular and numeric: {e}") from e

    if values.ndim != 2:
        raise InvalidGridError(f"Height grid must be 2D, got shape {values.shape}")
    if values.size == 0:
        raise InvalidGridError(f"Height grid must be non-empty, got shape {values.shape}")
    return values


def _axis_derivative(values: NDArray[np.float64], axis: int) -> NDArray[np.float64]:
    """Forward/backward differences at the edges, central inside."""
    if values.shape[axis] < 2:
        return np.zeros_like(values)
    return np.gradient(values, axis=axis, edge_order=1)


def compute_gradient(grid: ArrayLike) -> NDArray[np.float32]:
    """Compute per-cell gradient vectors of a height grid.

    Args:
        grid: 2D height grid indexed [y, x].

    Returns:
        Read-only float32 array of shape (rows, cols, 2) holding (dx, dy).

    Raises:
        InvalidGridError: If the grid is empty, not 2D, or ragged.
    """
    values = _as_height_array(grid)

    grad_x = _axis_derivative(values, axis=1)
    grad_y = _axis_derivative(values, axis=0)

    gradient = np.stack([grad_x, grad_y], axis=-1).astype(np.float32)
    gradient.flags.writeable = False
    return gradient


def gradient_magnitude(gradient: ArrayLike) -> NDArray[np.float32]:
    """Compute slope magnitude |(dx, dy)| from a gradient grid."""
    gradient = np.asarray(gradient, dtype=np.float32)
    return np.sqrt(gradient[..., 0] ** 2 + gradient[..., 1] ** 2).astype(np.float32)
