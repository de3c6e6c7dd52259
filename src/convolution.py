import math
import numpy as np
from tqdm import tqdm

from errors import InvalidShapeError, MissingFilterError
from filters import get_filters

def _square_side(length, what):
    side = math.isqrt(length)
    if side * side != length or side == 0:
        raise InvalidShapeError(f"{what} has {length} values, which is not a non-empty square")
    return side

def to_square_matrix(values, what='input'):
    """
    Returns a fresh 2D float array for a flat square sequence or a 2D square matrix.
    The caller's buffer is never modified.
    """
    try:
        arr = np.array(values, dtype=np.float64)
    except ValueError as e:
        raise InvalidShapeError(f"{what} has rows of different lengths") from e

    if arr.ndim == 1:
        side = _square_side(arr.size, what)
        return arr.reshape(side, side)

    if arr.ndim == 2 and arr.shape[0] == arr.shape[1] and arr.shape[0] > 0:
        return arr

    raise InvalidShapeError(f"{what} must be flat or a square 2D matrix, got shape {arr.shape}")

def pad_input(matrix, pad_size, trailing=None):
    """
    Zero-pads a 2D matrix.

    `pad_size` goes on the top and left, `trailing` (defaults to `pad_size`)
    on the bottom and right.
    """
    if trailing is None:
        trailing = pad_size
    return np.pad(np.asarray(matrix, dtype=np.float64),
                  ((pad_size, trailing), (pad_size, trailing)),
                  mode='constant', constant_values=0.0)

def convolve(input, filter):
    """
    Same-padded 2D convolution (stride 1, no bias, no kernel flip).

    Args:
        input: flat square sequence or square 2D matrix
        filter: flat sequence of filter_size**2 weights

    Returns:
        2D float array with the same side as the input
    """
    kernel = to_square_matrix(filter, what='filter')
    image = to_square_matrix(input)

    filter_size = kernel.shape[0]
    input_size = image.shape[0]

    # For even filters the extra row/column goes on the bottom/right
    pad_size = (filter_size - 1) // 2
    padded = pad_input(image, pad_size, filter_size - 1 - pad_size)

    output = np.zeros((input_size, input_size), dtype=np.float64)
    for i in range(input_size):
        for j in range(input_size):
            window = padded[i:i + filter_size, j:j + filter_size]
            output[i, j] = np.sum(window * kernel)

    return output

def calculate_features(layers, input):
    """
    Feature maps of the first convolution layer.

    Args:
        layers: ordered list of FilteredLayer / PlainLayer
        input: the image, flat or 2D

    Returns:
        list with one 2D feature map per first-layer filter
    """
    filters = get_filters(layers)
    if not filters or not filters[0]:
        raise MissingFilterError("The model has no first-layer convolution filters")

    features = []
    for f in tqdm(filters[0], desc="Convolving", leave=False):
        features.append(convolve(input, f))

    return features
