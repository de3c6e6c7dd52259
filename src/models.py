import torch
import torch.nn as nn

class ConvBlock(nn.Module):
    def __init__(self, in_channels, out_channels, kernel_size, pool_size):
        super().__init__()
        self.block = nn.Sequential(
            nn.Conv2d(in_channels, out_channels, kernel_size, padding=kernel_size // 2),
            nn.ReLU(inplace=True),
            nn.MaxPool2d(pool_size)
        )

    def forward(self, x):
        return self.block(x)

class FirstLayerNet(nn.Module):
    """
    Small grayscale digit classifier (the layout of the ConvNetJS MNIST demo).

    INPUT (1ch, 24x24)
      -> [conv1] 8 filters 5x5, ReLU, pool 2   -> 8ch, 12x12
      -> [conv2] 16 filters 5x5, ReLU, pool 3  -> 16ch, 4x4
      -> [fc] 10 class logits

    Only conv1 is visualized: its filters are single-channel, so each one
    is a square kernel that can be convolved with the grayscale input.
    """
    def __init__(self, num_filters=8, kernel_size=5, num_classes=10, input_size=24):
        super().__init__()
        self.conv1 = ConvBlock(1, num_filters, kernel_size, 2)
        self.conv2 = ConvBlock(num_filters, num_filters * 2, kernel_size, 3)

        out_size = input_size // 2 // 3
        self.fc = nn.Linear(num_filters * 2 * out_size * out_size, num_classes)

    def forward(self, x):
        x = self.conv1(x)
        x = self.conv2(x)
        x = torch.flatten(x, 1)
        # Logits output (No Softmax)
        return self.fc(x)
