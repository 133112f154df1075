import torch
import torch.nn as nn
from ..consts import FEATURES_NUM


class DiabetesClassifier(nn.Module):
    """Two layer perceptron, outputs probability of diabetes for every record"""

    def __init__(self, input_size: int = FEATURES_NUM, hidden_size: int = 8):
        super(DiabetesClassifier, self).__init__()
        self.hidden = nn.Sequential(nn.Linear(input_size, hidden_size), nn.ReLU())
        self.head = nn.Sequential(nn.Linear(hidden_size, 1), nn.Sigmoid())

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        x = self.hidden(x)
        x = self.head(x)
        return torch.flatten(x)
