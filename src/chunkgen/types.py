"""Core types for chunk generation."""

from enum import Enum

import numpy as np
from numpy.typing import NDArray


class NoiseKind(str, Enum):
    """Noise primitive sampled by a fractal layer."""

    GRADIENT = "gradient"
    CELL = "cell"


# Shape (rows, cols), values 0-255
HeightGrid = NDArray[np.uint8]

# Shape (rows, cols, 2); [..., 0] is dx, [..., 1] is dy
GradientGrid = NDArray[np.float32]

HEIGHT_MIN = 0
HEIGHT_MAX = 255
