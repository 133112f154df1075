from pathlib import Path
from os.path import dirname, abspath
from typing import List


REPO_FOLDER = Path(dirname(dirname(abspath(__file__))))
CONFIGS_FOLDER = REPO_FOLDER / "configs"

# DATASET
# feature columns in the order the classifier consumes them
FEATURE_COLUMNS: List[str] = [
    "Pregnancies",
    "Glucose",
    "BloodPressure",
    "SkinThickness",
    "Insulin",
    "BMI",
    "DiabetesPedigreeFunction",
    "Age",
]
LABEL_COLUMN = "Outcome"
FEATURES_NUM = len(FEATURE_COLUMNS)

# EVALUATION
THRESHOLDS_NUM = 100
# 0.00, 0.01, ..., 0.99
DEFAULT_THRESHOLDS: List[float] = [i / THRESHOLDS_NUM for i in range(THRESHOLDS_NUM)]
DEFAULT_PREDICTION_THRESHOLD = 0.5
# markers are drawn only on every n-th curve point
CURVE_MARKER_EVERY = 10

# TRAINING
TRAIN_SEED = 22
