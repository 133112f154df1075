import matplotlib.pyplot as plt
from typing import List, Optional
from clearml import Task, Logger
from matplotlib.figure import Figure
from ..consts import CURVE_MARKER_EVERY
from ..schemas.metrics.pr_curve import PRCurvePoint
from ..schemas.metrics.roc_curve import ROCCurvePoint


def init_clearml_task(project_name: str, task_name: str) -> Task:
    task = Task.init(
        project_name=project_name,
        task_name=task_name,
        reuse_last_task_id=False,
    )
    return task


def get_clearml_logger() -> Optional[Logger]:
    """Returns logger of the running clearml task, None when no task was initialized"""

    if Task.current_task() is None:
        return None
    return Logger.current_logger()


def report_scalar(title: str, series: str, value: float, iteration: int) -> None:
    logger = get_clearml_logger()
    if logger is None:
        return
    logger.report_scalar(title=title, series=series, value=value, iteration=iteration)


def plot_pr_roc_curves(
    pr_points: List[PRCurvePoint], roc_points: List[ROCCurvePoint]
) -> Figure:
    """Plots Precision-Recall (left) and ROC (right) curves"""

    fig, (pr_ax, roc_ax) = plt.subplots(1, 2, figsize=(12, 5))

    pr_ax.plot(
        [point.recall for point in pr_points],
        [point.precision for point in pr_points],
        c="g",
        marker="o",
        markevery=CURVE_MARKER_EVERY,
        label="Precision-Recall",
    )
    pr_ax.set_xlabel("Recall")
    pr_ax.set_ylabel("Precision")
    pr_ax.set_title("Precision-Recall Curve")

    roc_ax.plot(
        [point.fpr for point in roc_points],
        [point.tpr for point in roc_points],
        c="b",
        marker="o",
        markevery=CURVE_MARKER_EVERY,
        label="ROC",
    )
    roc_ax.set_xlabel("False Positive Rate")
    roc_ax.set_ylabel("True Positive Rate")
    roc_ax.set_title("ROC Curve")

    for ax in (pr_ax, roc_ax):
        ax.set_xlim(0, 1)
        ax.set_ylim(0, 1)
        ax.legend()
    return fig


def log_curves_to_clearml(
    pr_points: List[PRCurvePoint],
    roc_points: List[ROCCurvePoint],
    title: str,
    iteration: int,
) -> None:
    logger = get_clearml_logger()
    if logger is None:
        return
    fig = plot_pr_roc_curves(pr_points, roc_points)
    logger.report_matplotlib_figure(
        title=title, series="PR and ROC curves", figure=fig, iteration=iteration
    )
    plt.close(fig)
