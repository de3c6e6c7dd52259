from collections.abc import Mapping

from errors import InvalidShapeError

class Filter:
    """
    One convolution filter.

    `w` holds the weights either as a sequence or as an insertion-ordered
    mapping (ConvNetJS stores them as {"0": w0, "1": w1, ...}).
    """
    def __init__(self, w):
        self.w = w

    def values(self):
        if isinstance(self.w, Mapping):
            return [float(v) for v in self.w.values()]
        return [float(v) for v in self.w]

class PlainLayer:
    """A layer without filters (pooling, activation, softmax, ...)."""
    has_filters = False

    def __init__(self, layer_type='plain'):
        self.layer_type = layer_type

    def __repr__(self):
        return f"PlainLayer({self.layer_type!r})"

class FilteredLayer:
    """A convolution layer: `filters` plus the width/height/depth of each filter."""
    has_filters = True

    def __init__(self, filters, width, height, depth=1, layer_type='conv'):
        self.filters = [f if isinstance(f, Filter) else Filter(f) for f in filters]
        self.width = width
        self.height = height
        self.depth = depth
        self.layer_type = layer_type

    @property
    def filter_size(self):
        return self.width * self.height * self.depth

    def __repr__(self):
        return (f"FilteredLayer({len(self.filters)} filters, "
                f"{self.width}x{self.height}x{self.depth})")

def max_filter_size(layers):
    """Largest width * height * depth over the layers that have filters (0 if none)."""
    sizes = [layer.filter_size for layer in layers if layer.has_filters]
    return max(sizes, default=0)

def get_filters(layers):
    """
    Collect the filters of a model.

    Args:
        layers: ordered list of FilteredLayer / PlainLayer

    Returns:
        filters[layer][filter] = flat list of weights. Layers without filters
        are dropped, so row 0 is always the first convolution layer.
    """
    filter_rows = []

    for index, layer in enumerate(layers):
        if not layer.has_filters:
            continue

        row = []
        for j, f in enumerate(layer.filters):
            weights = f.values()
            if len(weights) != layer.filter_size:
                raise InvalidShapeError(
                    f"Filter {j} of layer {index} has {len(weights)} weights, "
                    f"expected {layer.width}x{layer.height}x{layer.depth} = {layer.filter_size}")
            row.append(weights)

        filter_rows.append(row)

    return filter_rows
