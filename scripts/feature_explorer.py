import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import argparse
import sys
import os

# --- PATH SETUP ---
# Add src to path
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

from models import FirstLayerNet
from utils import load_config, set_seed
from filters import max_filter_size
from loaders import load_layers, layers_from_module, load_image, create_synthetic_image
from convolution import calculate_features
from renderer import Container, display_feature_maps

def prepare_layers(model_path):
    """Loads the model layers, or falls back to a randomly initialized FirstLayerNet."""
    if model_path and os.path.exists(model_path):
        layers = load_layers(model_path)
        print(f"✅ Loaded model from {model_path}")
        return layers

    if model_path:
        print(f"⚠️ Model file not found: {model_path}")
    print("   Using random initialization (Patterns will look like noise).")
    model = FirstLayerNet()
    model.eval()
    return layers_from_module(model)

def prepare_image(image_path, size):
    if image_path and image_path != 'synthetic':
        if os.path.exists(image_path):
            print(f"✅ Loaded image: {image_path}")
            return load_image(image_path, size)
        print(f"⚠️ Image not found: {image_path}")
        print("   Falling back to synthetic image...")
    return create_synthetic_image(size)

def explore(config):
    set_seed(config['seed'])
    display = config['display']
    out_dir = config['output']['dir']
    os.makedirs(out_dir, exist_ok=True)

    print(f"Running {config['experiment_name']}")

    # 1. Model + image
    layers = prepare_layers(config['model']['path'])
    filtered = [layer for layer in layers if layer.has_filters]
    print(f"   {len(layers)} layers, {len(filtered)} with filters, "
          f"largest filter: {max_filter_size(layers)} weights")

    image = prepare_image(config['image']['path'], config['image']['size'])

    # 2. First layer feature maps
    features = calculate_features(layers, image)
    print(f"   Computed {len(features)} feature maps of {features[0].shape[0]}x{features[0].shape[1]}")

    # 3. Tile them into the display surface
    container = Container(display['container_width'], display['container_height'])
    display_feature_maps(features, container, rows=display['rows'],
                         tile_size=(display['tile_width'], display['tile_height']))
    grid = container.snapshot()

    # 4. Save input + grid side by side
    fig, axes = plt.subplots(1, 2, figsize=(16, 6), gridspec_kw={'width_ratios': [1, 3]})
    axes[0].imshow(image, cmap='gray')
    axes[0].set_title('Input Image', fontsize=14, fontweight='bold')
    axes[0].axis('off')

    axes[1].imshow(grid)
    axes[1].set_title(f'Feature Maps ({len(features)} filters, {display["rows"]} rows)',
                      fontsize=14, fontweight='bold')
    axes[1].axis('off')

    plt.tight_layout()
    save_path = os.path.join(out_dir, 'feature_maps.png')
    plt.savefig(save_path, dpi=150, bbox_inches='tight')
    plt.close()
    print(f"✅ Visualization saved to '{save_path}'")
    return save_path

if __name__ == "__main__":
    # Example usage: python feature_explorer.py --config ../configs/default.yaml --image digit.png
    parser = argparse.ArgumentParser()
    parser.add_argument('--config', type=str, default=None, help="Path to yaml config")
    parser.add_argument('--model', type=str, default=None, help="ConvNetJS .json or FirstLayerNet .pth")
    parser.add_argument('--image', type=str, default=None, help="Input image, or 'synthetic'")
    parser.add_argument('--rows', type=int, default=None, help="Number of tile rows")
    args = parser.parse_args()

    config = load_config(args.config)
    if args.model:
        config['model']['path'] = args.model
    if args.image:
        config['image']['path'] = args.image
    if args.rows:
        config['display']['rows'] = args.rows

    explore(config)
