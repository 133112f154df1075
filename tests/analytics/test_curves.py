import math
import warnings
import numpy as np
import pytest
from sklearn.metrics import confusion_matrix
from diabetes_prediction.analytics.curves import (
    InvalidInputError,
    ScoreRangeWarning,
    DegenerateThresholdWarning,
    compute_curves,
    compute_curves_sorted,
    compute_confusion_counts,
)
from diabetes_prediction.consts import DEFAULT_THRESHOLDS


def _random_inputs(seed: int, samples_num: int = 300):
    rng = np.random.RandomState(seed)
    labels = rng.randint(0, 2, size=samples_num)
    # rounded scores to get ties with thresholds
    scores = np.round(np.clip(labels * 0.3 + rng.rand(samples_num) * 0.7, 0, 1), 2)
    return labels.tolist(), scores.tolist()


def test_default_thresholds():
    assert len(DEFAULT_THRESHOLDS) == 100
    assert DEFAULT_THRESHOLDS[0] == 0.0
    assert DEFAULT_THRESHOLDS[1] == 0.01
    assert DEFAULT_THRESHOLDS[-1] == 0.99
    assert DEFAULT_THRESHOLDS == sorted(DEFAULT_THRESHOLDS)


def test_small_dataset_points():
    pr_points, roc_points = compute_curves(
        [1, 1, 0, 0], [0.9, 0.4, 0.3, 0.2], thresholds=[0.0, 0.5, 1.0]
    )

    assert [(p.precision, p.recall) for p in pr_points] == [
        (0.5, 1.0),
        (1.0, 0.5),
        (0.0, 0.0),
    ]
    assert [(p.tpr, p.fpr) for p in roc_points] == [
        (1.0, 1.0),
        (0.5, 0.0),
        (0.0, 0.0),
    ]


def test_small_dataset_counts():
    counts = compute_confusion_counts([1, 1, 0, 0], [0.9, 0.4, 0.3, 0.2], 0.5)
    assert (counts.tp, counts.fp, counts.tn, counts.fn) == (1, 0, 2, 1)

    counts = compute_confusion_counts([1, 1, 0, 0], [0.9, 0.4, 0.3, 0.2], 1.0)
    assert (counts.tp, counts.fp, counts.tn, counts.fn) == (0, 0, 2, 2)


def test_score_equal_to_threshold_is_positive():
    counts = compute_confusion_counts([1, 0], [0.5, 0.5], 0.5)
    assert counts.tp == 1
    assert counts.fp == 1


def test_length_mismatch_raises():
    with pytest.raises(InvalidInputError):
        compute_curves([1, 0, 1], [0.1, 0.2, 0.3, 0.4])


def test_empty_input_raises():
    with pytest.raises(InvalidInputError):
        compute_curves([], [])


def test_non_binary_label_raises():
    with pytest.raises(InvalidInputError, match="index 2"):
        compute_curves([1, 0, 2], [0.1, 0.2, 0.3])


def test_non_numeric_input_raises():
    with pytest.raises(InvalidInputError):
        compute_curves(["yes", "no"], [0.1, 0.2])


def test_non_finite_threshold_raises():
    with pytest.raises(InvalidInputError):
        compute_curves([1, 0], [0.1, 0.2], thresholds=[0.5, float("nan")])


def test_non_numeric_threshold_raises():
    with pytest.raises(InvalidInputError, match="real number"):
        compute_curves([1, 0], [0.1, 0.2], thresholds=["0.5"])
    with pytest.raises(InvalidInputError):
        compute_curves_sorted([1, 0], [0.1, 0.2], thresholds=[None])


def test_invalid_input_is_value_error():
    with pytest.raises(ValueError):
        compute_curves([1], [0.1, 0.2])


def test_float_labels_are_accepted():
    pr_points, _ = compute_curves([1.0, 0.0], [0.9, 0.1], thresholds=[0.5])
    assert pr_points[0].precision == 1.0
    assert pr_points[0].recall == 1.0


def test_no_actual_positives():
    pr_points, roc_points = compute_curves([0, 0, 0], [0.2, 0.6, 0.9])

    for pr_point, roc_point in zip(pr_points, roc_points):
        assert pr_point.recall == 0
        assert roc_point.tpr == 0
        assert not math.isnan(pr_point.precision)
        assert not math.isnan(roc_point.fpr)


def test_no_actual_negatives():
    _, roc_points = compute_curves([1, 1], [0.2, 0.6])
    assert all(point.fpr == 0 for point in roc_points)


def test_threshold_above_max_score():
    pr_points, roc_points = compute_curves(
        [1, 0, 1, 0], [0.1, 0.2, 0.3, 0.4], thresholds=[0.5]
    )
    assert pr_points[0].precision == 0
    assert pr_points[0].recall == 0
    assert roc_points[0].tpr == 0
    assert roc_points[0].fpr == 0


def test_zero_threshold_recalls_everything():
    labels, scores = _random_inputs(seed=1)
    pr_points, roc_points = compute_curves(labels, scores, thresholds=[0.0])
    assert pr_points[0].recall == 1.0
    assert roc_points[0].tpr == 1.0
    assert roc_points[0].fpr == 1.0


def test_length_and_bounds_invariants():
    labels, scores = _random_inputs(seed=2)
    pr_points, roc_points = compute_curves(labels, scores)

    assert len(pr_points) == len(roc_points) == len(DEFAULT_THRESHOLDS)
    for pr_point, roc_point in zip(pr_points, roc_points):
        assert 0 <= pr_point.precision <= 1
        assert 0 <= pr_point.recall <= 1
        assert 0 <= roc_point.tpr <= 1
        assert 0 <= roc_point.fpr <= 1
        assert pr_point.recall == roc_point.tpr


def test_recall_does_not_increase_with_threshold():
    labels, scores = _random_inputs(seed=3)
    pr_points, roc_points = compute_curves(labels, scores)
    recalls = [point.recall for point in pr_points]
    fprs = [point.fpr for point in roc_points]
    assert recalls == sorted(recalls, reverse=True)
    assert fprs == sorted(fprs, reverse=True)


def test_actual_class_totals_are_constant():
    labels, scores = _random_inputs(seed=4, samples_num=50)
    positives_num = sum(labels)
    for threshold in DEFAULT_THRESHOLDS[::7]:
        counts = compute_confusion_counts(labels, scores, threshold)
        assert counts.total == len(labels)
        assert counts.actual_positives == positives_num
        assert counts.actual_negatives == len(labels) - positives_num


def test_counts_match_sklearn_confusion_matrix():
    labels, scores = _random_inputs(seed=5)
    for threshold in [0.0, 0.25, 0.5, 0.75, 0.99]:
        predicted = [int(score >= threshold) for score in scores]
        tn, fp, fn, tp = confusion_matrix(labels, predicted, labels=[0, 1]).ravel()
        counts = compute_confusion_counts(labels, scores, threshold)
        assert (counts.tp, counts.fp, counts.tn, counts.fn) == (tp, fp, tn, fn)


@pytest.mark.parametrize("seed", [6, 7, 8])
def test_sorted_sweep_matches_direct_sweep(seed):
    labels, scores = _random_inputs(seed=seed)
    assert compute_curves_sorted(labels, scores) == compute_curves(labels, scores)


def test_sorted_sweep_with_unordered_thresholds():
    labels, scores = _random_inputs(seed=9)
    thresholds = [0.9, 0.1, 0.5, 0.5, 0.0]
    assert compute_curves_sorted(labels, scores, thresholds) == compute_curves(
        labels, scores, thresholds
    )


def test_out_of_range_scores_warn():
    with pytest.warns(ScoreRangeWarning):
        pr_points, _ = compute_curves([1, 0], [1.5, -0.5], thresholds=[0.5])
    assert pr_points[0].precision == 1.0
    assert pr_points[0].recall == 1.0


def test_nan_score_is_predicted_negative():
    with pytest.warns(ScoreRangeWarning):
        counts = compute_confusion_counts([1, 0], [float("nan"), 0.5], 0.0)
    assert (counts.tp, counts.fp, counts.tn, counts.fn) == (0, 1, 0, 1)

    with pytest.warns(ScoreRangeWarning):
        sorted_curves = compute_curves_sorted([1, 0], [float("nan"), 0.5], [0.0])
    with pytest.warns(ScoreRangeWarning):
        direct_curves = compute_curves([1, 0], [float("nan"), 0.5], [0.0])
    assert sorted_curves == direct_curves


def test_degenerate_thresholds_are_silent_by_default():
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        compute_curves([0, 0, 0], [0.1, 0.2, 0.3])


def test_degenerate_threshold_warning():
    with pytest.warns(DegenerateThresholdWarning, match="recall"):
        compute_curves([0, 0, 0], [0.1, 0.2, 0.3], warn_degenerate=True)


def test_inputs_are_not_modified():
    labels = [1, 0, 1]
    scores = [0.3, 0.2, 0.1]
    compute_curves_sorted(labels, scores)
    assert labels == [1, 0, 1]
    assert scores == [0.3, 0.2, 0.1]
