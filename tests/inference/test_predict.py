import pytest
import torch
from pathlib import Path
from tempfile import TemporaryDirectory
from diabetes_prediction.inference.predict import (
    ModelNotTrainedError,
    PredictionLabel,
    load_trained_model,
    predict_record,
    save_trained_model,
)
from diabetes_prediction.nn.models import DiabetesClassifier
from diabetes_prediction.schemas.data.diabetes_record import DiabetesRecord


class ConstantScoreModel(DiabetesClassifier):
    def __init__(self, score: float):
        super().__init__()
        self._score = score

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        return torch.full((x.shape[0],), self._score)


def test_predict_without_model_raises():
    with pytest.raises(ModelNotTrainedError):
        predict_record(None, DiabetesRecord())


def test_score_equal_to_threshold_is_positive():
    prediction = predict_record(ConstantScoreModel(0.5), DiabetesRecord())
    assert prediction.label == PredictionLabel.POSITIVE
    assert prediction.label.value == "Positive"


def test_low_score_is_negative():
    prediction = predict_record(ConstantScoreModel(0.2), DiabetesRecord())
    assert prediction.label == PredictionLabel.NEGATIVE
    assert prediction.score == pytest.approx(0.2)


def test_custom_threshold():
    prediction = predict_record(
        ConstantScoreModel(0.2), DiabetesRecord(), threshold=0.1
    )
    assert prediction.label == PredictionLabel.POSITIVE


def test_record_features_order():
    record = DiabetesRecord(
        pregnancies=1,
        glucose=2,
        blood_pressure=3,
        skin_thickness=4,
        insulin=5,
        bmi=6,
        diabetes_pedigree_function=7,
        age=8,
    )
    assert record.to_features() == [1, 2, 3, 4, 5, 6, 7, 8]
    assert DiabetesRecord().to_features() == [0] * 8


def test_save_and_load_model():
    model = DiabetesClassifier(hidden_size=4)
    record = DiabetesRecord(glucose=120, bmi=30, age=45)
    with TemporaryDirectory() as tmp_dir:
        weights_file = Path(tmp_dir) / "weights" / "model.pt"
        save_trained_model(model, weights_file)
        loaded_model = load_trained_model(weights_file, hidden_size=4)

    expected = predict_record(model, record)
    actual = predict_record(loaded_model, record)
    assert actual.score == pytest.approx(expected.score)
