"""
Precision-Recall and ROC curves computed over a sweep of decision thresholds

For every threshold a sample is predicted positive when its score is
greater than or equal to the threshold. Confusion counts are recomputed
from scratch for each threshold, and every rate whose denominator is zero
is reported as 0 so curves never contain NaN.
"""

import math
import warnings
import numpy as np
from typing import List, Sequence, Tuple
from ..consts import DEFAULT_THRESHOLDS
from ..schemas.metrics.confusion import ConfusionCounts
from ..schemas.metrics.pr_curve import PRCurvePoint
from ..schemas.metrics.roc_curve import ROCCurvePoint


CURVES = Tuple[List[PRCurvePoint], List[ROCCurvePoint]]


class InvalidInputError(ValueError):
    """Labels and scores can not be evaluated"""


class ScoreRangeWarning(UserWarning):
    """Some scores lie outside of [0, 1]"""


class DegenerateThresholdWarning(UserWarning):
    """Some rate at a threshold has zero denominator and was replaced by 0"""


def _safe_ratio(numerator: int, denominator: int) -> float:
    if denominator == 0:
        return 0.0
    return numerator / denominator


def validate_inputs(
    true_labels: Sequence[float],
    predicted_scores: Sequence[float],
    thresholds: Sequence[float] = DEFAULT_THRESHOLDS,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Checks labels, scores and thresholds and converts them to numpy arrays

    Returns:
        boolean array of positive labels and float array of scores
    """

    try:
        labels_arr = np.asarray(true_labels, dtype=np.float64).reshape(-1)
        scores_arr = np.asarray(predicted_scores, dtype=np.float64).reshape(-1)
    except (TypeError, ValueError) as err:
        raise InvalidInputError(f"Labels and scores should be numeric: {err}") from err

    if len(labels_arr) == 0 or len(scores_arr) == 0:
        raise InvalidInputError("Labels and scores should not be empty")
    if len(labels_arr) != len(scores_arr):
        raise InvalidInputError(
            f"Labels and scores should have same number of elements, "
            f"got {len(labels_arr)} labels and {len(scores_arr)} scores"
        )

    non_binary_mask = (labels_arr != 0) & (labels_arr != 1)
    if non_binary_mask.any():
        bad_index = int(np.flatnonzero(non_binary_mask)[0])
        raise InvalidInputError(
            f"Labels should be 0 or 1, got {labels_arr[bad_index]} at index {bad_index}"
        )

    for threshold in thresholds:
        try:
            is_finite = math.isfinite(threshold)
        except TypeError as err:
            raise InvalidInputError(
                f"Threshold should be a real number, got {threshold!r}"
            ) from err
        if not is_finite:
            raise InvalidInputError(f"Threshold should be finite, got {threshold}")

    out_of_range_num = int(np.sum(~((scores_arr >= 0) & (scores_arr <= 1))))
    if out_of_range_num > 0:
        warnings.warn(
            f"{out_of_range_num} scores lie outside of [0, 1]",
            ScoreRangeWarning,
            stacklevel=3,
        )

    return labels_arr == 1, scores_arr


def confusion_counts_to_points(
    counts: ConfusionCounts,
    threshold: float,
    warn_degenerate: bool = False,
) -> Tuple[PRCurvePoint, ROCCurvePoint]:
    """Derives PR and ROC points from confusion counts at a single threshold"""

    precision = _safe_ratio(counts.tp, counts.tp + counts.fp)
    recall = _safe_ratio(counts.tp, counts.tp + counts.fn)
    # kept separate from recall: same formula, different curve
    tpr = _safe_ratio(counts.tp, counts.tp + counts.fn)
    fpr = _safe_ratio(counts.fp, counts.fp + counts.tn)

    if warn_degenerate:
        zero_denominators = [
            name
            for name, denominator in (
                ("precision", counts.predicted_positives),
                ("recall", counts.actual_positives),
                ("fpr", counts.actual_negatives),
            )
            if denominator == 0
        ]
        if zero_denominators:
            warnings.warn(
                f"Threshold {threshold}: zero denominator for "
                f"{', '.join(zero_denominators)}, reported as 0",
                DegenerateThresholdWarning,
                stacklevel=3,
            )

    pr_point = PRCurvePoint(precision=precision, recall=recall)
    roc_point = ROCCurvePoint(tpr=tpr, fpr=fpr)
    return pr_point, roc_point


def _count_at_threshold(
    positives: np.ndarray, scores: np.ndarray, threshold: float
) -> ConfusionCounts:
    predicted_positive = scores >= threshold
    tp = int(np.sum(predicted_positive & positives))
    fp = int(np.sum(predicted_positive & ~positives))
    tn = int(np.sum(~predicted_positive & ~positives))
    fn = int(np.sum(~predicted_positive & positives))
    return ConfusionCounts(tp=tp, fp=fp, tn=tn, fn=fn)


def compute_confusion_counts(
    true_labels: Sequence[float],
    predicted_scores: Sequence[float],
    threshold: float,
) -> ConfusionCounts:
    positives, scores = validate_inputs(true_labels, predicted_scores, [threshold])
    return _count_at_threshold(positives, scores, threshold)


def compute_curves(
    true_labels: Sequence[float],
    predicted_scores: Sequence[float],
    thresholds: Sequence[float] = DEFAULT_THRESHOLDS,
    warn_degenerate: bool = False,
) -> CURVES:
    """
    Computes Precision-Recall and ROC points for every threshold

    Args:
        true_labels: ground truth labels, 0 or 1
        predicted_scores: model confidences, aligned with labels by index
        thresholds: decision thresholds, output points follow their order
        warn_degenerate: emit DegenerateThresholdWarning for thresholds
            where some rate had zero denominator

    Returns:
        PR points and ROC points, one per threshold

    Raises:
        InvalidInputError: on empty input, length mismatch, non binary label
            or threshold that is not a finite number,
            nothing is computed in that case
    """

    positives, scores = validate_inputs(true_labels, predicted_scores, thresholds)

    pr_points: List[PRCurvePoint] = []
    roc_points: List[ROCCurvePoint] = []
    for threshold in thresholds:
        counts = _count_at_threshold(positives, scores, threshold)
        pr_point, roc_point = confusion_counts_to_points(
            counts, threshold, warn_degenerate=warn_degenerate
        )
        pr_points.append(pr_point)
        roc_points.append(roc_point)
    return pr_points, roc_points


def compute_curves_sorted(
    true_labels: Sequence[float],
    predicted_scores: Sequence[float],
    thresholds: Sequence[float] = DEFAULT_THRESHOLDS,
    warn_degenerate: bool = False,
) -> CURVES:
    """
    Same curves as `compute_curves`, but scores are sorted once and
    confusion counts are taken from running sums, O((N + T) log N)
    """

    positives, scores = validate_inputs(true_labels, predicted_scores, thresholds)

    # NaN never passes `>=`, so such samples are always predicted negative
    comparable = ~np.isnan(scores)
    positives_total = int(np.sum(positives))
    negatives_total = len(positives) - positives_total

    order = np.argsort(scores[comparable], kind="stable")
    sorted_scores = scores[comparable][order]
    sorted_positives = positives[comparable][order]
    # positives_before[k] - positives among the k lowest scores
    positives_before = np.concatenate(([0], np.cumsum(sorted_positives)))
    comparable_num = len(sorted_scores)
    comparable_positives = int(positives_before[-1])

    pr_points: List[PRCurvePoint] = []
    roc_points: List[ROCCurvePoint] = []
    for threshold in thresholds:
        first_predicted_positive = int(
            np.searchsorted(sorted_scores, threshold, side="left")
        )
        tp = comparable_positives - int(positives_before[first_predicted_positive])
        fp = comparable_num - first_predicted_positive - tp
        counts = ConfusionCounts(
            tp=tp,
            fp=fp,
            tn=negatives_total - fp,
            fn=positives_total - tp,
        )
        pr_point, roc_point = confusion_counts_to_points(
            counts, threshold, warn_degenerate=warn_degenerate
        )
        pr_points.append(pr_point)
        roc_points.append(roc_point)
    return pr_points, roc_points
