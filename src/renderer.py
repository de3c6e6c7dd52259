import math
import numpy as np
from PIL import Image, ImageDraw

from light_map import light_map

class Heading:
    def __init__(self, text, id=None):
        self.text = text
        self.id = id

class Tile:
    """
    One feature map on screen.

    `surface` is the drawing surface (an RGB PIL image of a fixed pixel size);
    `width_pct` / `height_pct` size it relative to its container and row.
    """
    def __init__(self, surface_size=(300, 150)):
        self.surface = Image.new('RGB', surface_size, 'white')
        self.width_pct = None
        self.height_pct = None

class Row:
    def __init__(self, height_pct, class_name='FM-row'):
        self.height_pct = height_pct
        self.class_name = class_name
        self.children = []

    def append(self, tile):
        self.children.append(tile)
        return tile

class Container:
    """
    The display surface the renderer draws into.

    It is created by the caller and passed in, the renderer only replaces its
    children. `client_width` / `client_height` are its size in pixels.
    """
    def __init__(self, client_width, client_height, id='featureMap'):
        if client_width <= 0 or client_height <= 0:
            raise ValueError(f"Container needs a positive size, got {client_width}x{client_height}")
        self.client_width = client_width
        self.client_height = client_height
        self.id = id
        self.children = []

    def append(self, child):
        self.children.append(child)
        return child

    def clear(self):
        while self.children:
            self.children.pop()

    @property
    def rows(self):
        return [c for c in self.children if isinstance(c, Row)]

    @property
    def tiles(self):
        return [t for row in self.rows for t in row.children]

    def snapshot(self, background='white'):
        """Composes all rows and tiles into one RGB image of the container's size."""
        canvas = Image.new('RGB', (self.client_width, self.client_height), background)

        y = 0.0
        for row in self.rows:
            row_height = row.height_pct / 100 * self.client_height
            x = 0
            for tile in row.children:
                w = max(1, round(tile.width_pct / 100 * self.client_width))
                h = max(1, round(tile.height_pct / 100 * row_height))
                canvas.paste(tile.surface.resize((w, h), Image.NEAREST), (x, round(y)))
                x += w
            y += row_height

        return canvas

def plot_2d_matrix(matrix, surface):
    """
    Paints a 2D intensity matrix onto a PIL image as a grid of gray cells.

    Cell width is the surface width over the number of rows and cell height
    the surface height over the number of columns.
    """
    draw = ImageDraw.Draw(surface)

    size_x = surface.width / len(matrix)
    size_y = surface.height / len(matrix[0])

    y = 0.0
    for i in range(len(matrix)):
        x = 0.0

        for j in range(len(matrix[0])):
            color = int(matrix[i][j])
            draw.rectangle([x, y, x + size_x, y + size_y], fill=(color, color, color))
            x += size_x

        y += size_y

    return surface

def display_feature_maps(features, container, rows=2, tile_size=(300, 150)):
    """
    Renders one tile per feature map into `container`, replacing its content.

    All tiles share one intensity scale (the global max/min over every
    feature map). Tiles fill `rows` rows left to right; the last row may
    be short.
    """
    if rows < 1:
        raise ValueError(f"Need at least one row of tiles, got rows={rows}")

    container.clear()
    container.append(Heading('Feature Maps', id='fm-title'))

    if not features:
        return container

    flat = np.concatenate([np.asarray(f, dtype=np.float64).ravel() for f in features])
    max_value = float(flat.max())
    min_value = float(flat.min())

    row_length = math.ceil(len(features) / rows)
    remaining = len(features)

    for i in range(0, len(features), row_length):
        row = Row(height_pct=100 / rows)

        dimension = min(container.client_width / (row_length + 1),
                        container.client_height / (rows + 1))
        tile_width = 100 * dimension / container.client_width
        tile_height = 100 * dimension / container.client_height * rows

        for j in range(row_length):
            if remaining <= 0:
                break
            remaining -= 1

            tile = Tile(tile_size)
            plot_2d_matrix(light_map(features[i + j], max_value, min_value), tile.surface)
            tile.width_pct = tile_width
            tile.height_pct = tile_height
            row.append(tile)

        container.append(row)

    return container
