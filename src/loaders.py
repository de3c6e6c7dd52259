import os
import json
import torch
import torch.nn as nn
import numpy as np
from PIL import Image

from filters import Filter, FilteredLayer, PlainLayer
from models import FirstLayerNet

def layers_from_module(model):
    """
    Turns a torch model into an ordered list of layers.

    Every nn.Conv2d becomes a FilteredLayer with one flat filter per output
    channel; every other leaf module becomes a PlainLayer.
    """
    layers = []
    for module in model.modules():
        if list(module.children()):
            continue

        if isinstance(module, nn.Conv2d):
            weights = module.weight.detach().cpu()
            # Weight shape: [out_channels, in_channels, kH, kW]
            out_c, in_c, kh, kw = weights.shape
            filters = [Filter(weights[o].flatten().tolist()) for o in range(out_c)]
            layers.append(FilteredLayer(filters, width=kw, height=kh, depth=in_c,
                                        layer_type=type(module).__name__))
        else:
            layers.append(PlainLayer(type(module).__name__))

    return layers

def layers_from_convnetjs(net_json):
    """
    Reads the layers of a ConvNetJS network snapshot (net.toJSON()).

    Accepts either {"layers": [...]} or a wrapper with a "net" key.
    """
    if 'net' in net_json:
        net_json = net_json['net']

    layers = []
    for layer in net_json['layers']:
        if 'filters' in layer:
            filters = [Filter(f['w']) for f in layer['filters']]
            depth = layer.get('in_depth')
            if depth is None:
                depth = layer['filters'][0].get('depth', 1) if layer['filters'] else 1
            layers.append(FilteredLayer(filters, width=layer['sx'], height=layer['sy'],
                                        depth=depth, layer_type=layer.get('layer_type', 'conv')))
        else:
            layers.append(PlainLayer(layer.get('layer_type', 'plain')))

    return layers

def load_layers(model_path, map_location='cpu'):
    """Loads the layers of a model from a ConvNetJS .json snapshot or a FirstLayerNet .pth state dict."""
    ext = os.path.splitext(model_path)[1].lower()

    if ext == '.json':
        with open(model_path, 'r') as f:
            return layers_from_convnetjs(json.load(f))
    elif ext in ('.pth', '.pt'):
        model = FirstLayerNet()
        model.load_state_dict(torch.load(model_path, map_location=map_location, weights_only=True))
        model.eval()
        return layers_from_module(model)
    else:
        raise ValueError(f"Unknown model file type: {model_path}")

def load_image(image_path, size=24):
    """Loads an image as a (size, size) grayscale array scaled to [0, 1]."""
    img = Image.open(image_path).convert("L")
    img = img.resize((size, size), Image.BILINEAR)
    return np.array(img, dtype=np.float32) / 255.0

def create_synthetic_image(size=24):
    """A bright disc on a diagonal gradient, for trying the viewer without a real image."""
    y, x = np.ogrid[:size, :size]
    img = (x + y) / (2.0 * size) * 0.5

    center = size // 2
    radius = size // 3
    mask = (x - center)**2 + (y - center)**2 <= radius**2
    img = np.where(mask, 0.9, img)

    return img.astype(np.float32)
