import click
import matplotlib.pyplot as plt
from pathlib import Path
from pytorch_lightning import seed_everything
from ..analytics.analyze_classifier import (
    DiabetesPredsMemCacher,
    collect_labels_and_scores,
    compute_accuracy,
)
from ..analytics.curves import compute_curves
from ..analytics.utils import get_best_f1_score_point, compute_roc_auc
from ..consts import DEFAULT_THRESHOLDS, TRAIN_SEED
from ..data.dataset import DiabetesDatasetReader, split_train_val
from ..inference.predict import save_trained_model
from ..schemas.config.train_config import TrainConfig
from ..train.diabetes_classifier_train import run_train
from ..train.log_utils import plot_pr_roc_curves, log_curves_to_clearml
from ..utils import read_yaml, write_json


WEIGHTS_FILE_NAME = "diabetes_classifier.pt"


@click.command()
@click.option("--config_file", type=Path, required=True)
def main(config_file: Path):
    config_data = read_yaml(config_file)
    config = TrainConfig.model_validate(config_data)
    seed_everything(TRAIN_SEED)

    dataset = DiabetesDatasetReader(config.csv_file)
    train_ds, val_ds = split_train_val(dataset, config.val_fraction)
    model = run_train(train_dataset=train_ds, val_dataset=val_ds, config=config)
    classifier = model.classifier.cpu()

    output_folder = config.output_folder
    output_folder.mkdir(parents=True, exist_ok=True)
    save_trained_model(classifier, output_folder / WEIGHTS_FILE_NAME)

    # curves are computed on all records, train and val
    preds_ds = DiabetesPredsMemCacher(dataset, classifier)
    labels, scores = collect_labels_and_scores(preds_ds)
    pr_points, roc_points = compute_curves(labels, scores, DEFAULT_THRESHOLDS)
    best_point = get_best_f1_score_point(pr_points, DEFAULT_THRESHOLDS)
    roc_auc = compute_roc_auc(roc_points)
    accuracy = compute_accuracy(preds_ds, config.prediction_threshold)

    write_json(
        json_file=output_folder / "curves.json",
        data={
            "thresholds": DEFAULT_THRESHOLDS,
            "pr": [point.model_dump() for point in pr_points],
            "roc": [point.model_dump() for point in roc_points],
        },
    )
    fig = plot_pr_roc_curves(pr_points, roc_points)
    fig.savefig(output_folder / "pr_roc_curves.png")
    plt.close(fig)
    log_curves_to_clearml(
        pr_points, roc_points, title="Final curves", iteration=config.epochs_num
    )

    click.echo(f"Model Accuracy (all records): {accuracy * 100:.2f}%")
    click.echo(
        f"Best F1: {best_point.f1:.3f} at threshold {best_point.thrd:.2f} "
        f"(precision {best_point.prcn:.3f}, recall {best_point.rcl:.3f})"
    )
    click.echo(f"ROC AUC: {roc_auc:.3f}")
    click.echo(f"Outputs saved to {output_folder}")


if __name__ == "__main__":
    main()
