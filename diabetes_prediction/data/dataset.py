import torch
import pandas as pd
from typing import List, Tuple
from torch.utils.data import Dataset, Subset, default_collate
from pydantic import FilePath, ValidationError
from ..consts import FEATURE_COLUMNS, LABEL_COLUMN
from ..schemas.data.diabetes_record import DiabetesRecord
from ..schemas.data.dataset_sample import DiabetesSample


def read_diabetes_csv(csv_file: FilePath) -> List[DiabetesRecord]:
    """Reads csv with header, every row is validated into `DiabetesRecord`"""

    data_frame = pd.read_csv(csv_file, skip_blank_lines=True)
    missing_columns = [
        column
        for column in FEATURE_COLUMNS + [LABEL_COLUMN]
        if column not in data_frame.columns
    ]
    if missing_columns:
        raise ValueError(f"Columns {missing_columns} are missing in {csv_file}")

    # rows without any values, e.g. trailing separators
    data_frame = data_frame[FEATURE_COLUMNS + [LABEL_COLUMN]].dropna(how="all")
    data_frame = data_frame.astype("float64")
    records: List[DiabetesRecord] = []
    for index, row in enumerate(data_frame.to_dict(orient="records")):
        try:
            records.append(DiabetesRecord.model_validate(row))
        except ValidationError as err:
            raise ValueError(f"Row {index} in {csv_file} is invalid: {err}") from err
    return records


class DiabetesDatasetReader(Dataset):
    """
    Dataset of patient records, expects csv with the following columns

    Pregnancies,Glucose,BloodPressure,SkinThickness,Insulin,BMI,DiabetesPedigreeFunction,Age,Outcome
    6,148,72,35,0,33.6,0.627,50,1
    ...
    """

    def __init__(self, csv_file: FilePath):
        super().__init__()
        self._csv_file = csv_file
        self._records: List[DiabetesRecord] = read_diabetes_csv(csv_file)

    @staticmethod
    def collate_samples(batch: List[DiabetesSample]) -> DiabetesSample:
        collated_batch = DiabetesSample(
            features=default_collate([sample.features for sample in batch]),
            label=default_collate([sample.label for sample in batch]),
        )
        return collated_batch

    def __len__(self) -> int:
        return len(self._records)

    def __getitem__(self, index) -> DiabetesSample:
        record = self._records[index]
        sample = DiabetesSample(
            features=torch.tensor(record.to_features(), dtype=torch.float32),
            label=torch.tensor(record.outcome, dtype=torch.float32),
        )
        return sample


def split_train_val(dataset: Dataset, val_fraction: float) -> Tuple[Subset, Subset]:
    """Takes last `val_fraction` of samples for validation, without shuffling"""

    if not 0 <= val_fraction < 1:
        raise ValueError(f"val_fraction should be in [0, 1), got {val_fraction}")
    val_size = int(len(dataset) * val_fraction)
    train_size = len(dataset) - val_size
    train_ds = Subset(dataset, list(range(train_size)))
    val_ds = Subset(dataset, list(range(train_size, len(dataset))))
    return train_ds, val_ds
