import numpy as np
from typing import List, Sequence
from scipy.stats import hmean
from sklearn.metrics import auc
from ..schemas.metrics.pr_curve import PRCurvePoint, BestF1Point
from ..schemas.metrics.roc_curve import ROCCurvePoint


def get_best_f1_score_point(
    pr_points: List[PRCurvePoint], thresholds: Sequence[float]
) -> BestF1Point:
    if len(pr_points) == 0:
        raise ValueError("At least one PR point is required")
    if len(pr_points) != len(thresholds):
        raise ValueError("PR points and thresholds should have same number of elements")

    precision = np.array([point.precision for point in pr_points])
    recall = np.array([point.recall for point in pr_points])
    # harmonic mean is 0 as soon as precision or recall is 0
    f1_scores: np.ndarray = hmean(np.vstack((precision, recall)), axis=0)
    max_f1_index = int(np.argmax(f1_scores))
    best_point = BestF1Point(
        prcn=precision[max_f1_index],
        rcl=recall[max_f1_index],
        thrd=thresholds[max_f1_index],
        f1=f1_scores[max_f1_index],
    )
    return best_point


def compute_roc_auc(roc_points: List[ROCCurvePoint]) -> float:
    """Area under swept ROC points, curve is closed with (0, 0) and (1, 1)"""

    fpr = np.array([0.0, 1.0] + [point.fpr for point in roc_points])
    tpr = np.array([0.0, 1.0] + [point.tpr for point in roc_points])
    order = np.lexsort((tpr, fpr))
    return float(auc(fpr[order], tpr[order]))
