import torch
from tqdm import tqdm
from typing import List, Optional, Tuple
from torch.utils.data import Dataset
from ..nn.models import DiabetesClassifier
from ..schemas.data.dataset_sample import DiabetesSample, DiabetesSampleWithPrediction


class DiabetesPredsMemCacher(Dataset):
    """Simple cacher implementation that computes predictions once and stores them in memory"""

    def __init__(self, base_dataset: Dataset, model: DiabetesClassifier):
        super().__init__()
        self._base_dataset = base_dataset
        self._model = model
        self._model.eval()
        self._predictions_cache: List[Optional[torch.Tensor]] = [
            None for _ in range(len(self._base_dataset))
        ]

    def __len__(self):
        return len(self._base_dataset)

    @torch.no_grad()
    def __getitem__(self, index) -> DiabetesSampleWithPrediction:
        sample: DiabetesSample = self._base_dataset[index]
        score: torch.Tensor
        if self._predictions_cache[index] is None:
            score = self._model(sample.features.unsqueeze(0))[0]
            self._predictions_cache[index] = score
        else:
            score = self._predictions_cache[index]

        output_sample = DiabetesSampleWithPrediction(
            features=sample.features, label=sample.label, score=score
        )
        return output_sample


def collect_labels_and_scores(
    dataset: DiabetesPredsMemCacher,
) -> Tuple[List[int], List[float]]:
    """Returns ground truth labels and predicted scores aligned by sample index"""

    labels: List[int] = []
    scores: List[float] = []
    for sample in tqdm(dataset, desc="Predicting scores"):
        labels.append(int(sample.label.item()))
        scores.append(sample.score.item())
    return labels, scores


def compute_accuracy(dataset: DiabetesPredsMemCacher, threshold: float) -> float:
    if len(dataset) == 0:
        raise ValueError("Accuracy is undefined for empty dataset")
    correct = sum(
        int(sample.get_predicted_label(threshold).item() == sample.label.item())
        for sample in dataset
    )
    return correct / len(dataset)
