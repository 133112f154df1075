from enum import Enum
from typing import Dict, Optional
from pathlib import Path
from pydantic import BaseModel, Field


class OptimizerKind(Enum):
    SGD = "SGD"
    ADAM = "ADAM"


class TrainConfig(BaseModel):
    # data
    csv_file: Path
    val_fraction: float = Field(default=0.2, ge=0.0, lt=1.0)

    # arch
    hidden_size: int = 8

    # opt
    optimizer_kind: OptimizerKind = OptimizerKind.ADAM
    optimizer_kwargs: Dict[str, float] = {}

    # training
    batch_size: int = 32
    epochs_num: int = 100
    shuffle: bool = True

    # evaluation
    prediction_threshold: float = Field(default=0.5, ge=0.0, le=1.0)

    # log
    clearml_project: Optional[str] = None  # "DiabetesPrediction"
    clearml_task_name: Optional[str] = None
    output_folder: Path = Path("outputs")

    class Config:
        use_enum_values = True

    def model_post_init(self, __context):
        if isinstance(self.optimizer_kind, str):
            self.optimizer_kind = OptimizerKind[self.optimizer_kind]
