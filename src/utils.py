import yaml
import torch
import random
import numpy as np

DEFAULT_CONFIG = {
    'experiment_name': 'first_layer_features',
    'seed': 42,
    'model': {'path': None},
    'image': {'path': 'synthetic', 'size': 24},
    'display': {
        'rows': 2,
        'container_width': 960,
        'container_height': 540,
        'tile_width': 300,
        'tile_height': 150,
    },
    'output': {'dir': 'feature_map_output'},
}

def load_config(config_path=None):
    """Loads a YAML configuration file on top of DEFAULT_CONFIG."""
    config = {k: (dict(v) if isinstance(v, dict) else v) for k, v in DEFAULT_CONFIG.items()}
    if config_path is None:
        return config

    with open(config_path, 'r') as f:
        loaded = yaml.safe_load(f) or {}

    for key, value in loaded.items():
        if isinstance(value, dict) and isinstance(config.get(key), dict):
            config[key].update(value)
        else:
            config[key] = value
    return config

def set_seed(seed=42):
    """Sets seed for reproducibility."""
    torch.manual_seed(seed)
    np.random.seed(seed)
    random.seed(seed)
