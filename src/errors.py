class FeatureMapError(Exception):
    """Base class for everything the feature map pipeline raises."""

class InvalidShapeError(FeatureMapError, ValueError):
    """A matrix or filter is not square, or its size doesn't match its layer."""

class DegenerateRangeError(FeatureMapError, ValueError):
    """A light map was asked to rescale a range that is empty (max == min) or not finite."""

    def __init__(self, max_value, min_value):
        super().__init__(f"Cannot rescale values into [0, 255]: max={max_value} min={min_value}")
        self.max_value = max_value
        self.min_value = min_value

class MissingFilterError(FeatureMapError, LookupError):
    """The model has no convolution layer with filters."""
