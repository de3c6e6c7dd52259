import math
import numpy as np

from convolution import to_square_matrix
from errors import DegenerateRangeError

def light_map(matrix, max_value=None, min_value=None):
    """
    Rescales a matrix into grayscale intensities in [0, 255].

    The scale is inverted: min maps to 255 (white) and max to 0 (black).
    Pass the global max/min of a whole set of feature maps so that every
    tile shares one scale; by default the matrix's own extrema are used.

    Returns:
        2D int array of the same shape as `matrix`
    """
    values = np.asarray(matrix, dtype=np.float64)
    if values.ndim == 1:
        values = to_square_matrix(values, what='matrix')

    if max_value is None:
        max_value = float(np.max(values))
    if min_value is None:
        min_value = float(np.min(values))

    if not (math.isfinite(max_value) and math.isfinite(min_value)) or max_value == min_value:
        raise DegenerateRangeError(max_value, min_value)

    scaled = np.floor((values - min_value) / (max_value - min_value) * 255)
    return (255 - scaled).astype(np.int64)
