import torch
from enum import Enum
from pathlib import Path
from typing import Optional
from pydantic import BaseModel, FilePath
from ..consts import DEFAULT_PREDICTION_THRESHOLD
from ..nn.models import DiabetesClassifier
from ..schemas.data.diabetes_record import DiabetesRecord


class ModelNotTrainedError(ValueError):
    """Prediction was requested before any model was trained"""


class PredictionLabel(Enum):
    POSITIVE = "Positive"
    NEGATIVE = "Negative"


class Prediction(BaseModel):
    score: float
    label: PredictionLabel


def save_trained_model(model: DiabetesClassifier, weights_file: Path) -> None:
    weights_file.parent.mkdir(parents=True, exist_ok=True)
    torch.save(model.state_dict(), weights_file)


def load_trained_model(weights_file: FilePath, hidden_size: int) -> DiabetesClassifier:
    model = DiabetesClassifier(hidden_size=hidden_size)
    state_dict = torch.load(weights_file, map_location="cpu", weights_only=True)
    model.load_state_dict(state_dict)
    model.eval()
    return model


@torch.no_grad()
def predict_record(
    model: Optional[DiabetesClassifier],
    record: DiabetesRecord,
    threshold: float = DEFAULT_PREDICTION_THRESHOLD,
) -> Prediction:
    """Classifies single record, score equal to threshold counts as positive"""

    if model is None:
        raise ModelNotTrainedError("Please train the model first")

    model.eval()
    features = torch.tensor([record.to_features()], dtype=torch.float32)
    score: float = model(features)[0].item()
    label = PredictionLabel.POSITIVE if score >= threshold else PredictionLabel.NEGATIVE
    return Prediction(score=score, label=label)
