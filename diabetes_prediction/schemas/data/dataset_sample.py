import torch
from dataclasses import dataclass


@dataclass
class DiabetesSample:
    """Contains diabetes sample/batch"""

    features: torch.Tensor  # 8 features per record
    label: torch.Tensor  # single value: 1 if patient has diabetes else 0


@dataclass
class DiabetesSampleWithPrediction(DiabetesSample):
    """Extends sample interface with field for predicted probability"""

    score: torch.Tensor

    def get_predicted_label(self, threshold: float) -> torch.Tensor:
        return (self.score >= threshold).to(torch.float32)
