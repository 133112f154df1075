import torch
import torch.nn.functional as F
import pytorch_lightning as pl
from torch.utils.data import DataLoader, Dataset
from pytorch_lightning.callbacks import ModelCheckpoint
from torchmetrics.classification import BinaryAccuracy
from ..analytics.curves import compute_curves
from ..analytics.utils import get_best_f1_score_point, compute_roc_auc
from ..consts import DEFAULT_THRESHOLDS
from ..data.dataset import DiabetesDatasetReader
from ..nn.models import DiabetesClassifier
from ..schemas.config.train_config import TrainConfig, OptimizerKind
from ..schemas.data.dataset_sample import DiabetesSample
from .log_utils import init_clearml_task, report_scalar, log_curves_to_clearml


class DiabetesClassifierLightningModule(pl.LightningModule):
    """Lightning module for training diabetes classifier"""

    def __init__(self, config: TrainConfig) -> None:
        super().__init__()
        self._config = config
        self._model = DiabetesClassifier(hidden_size=config.hidden_size)
        self._val_ds_scores: torch.Tensor = torch.empty((0,))
        self._val_ds_labels: torch.Tensor = torch.empty((0,))
        self._train_accuracy = BinaryAccuracy(threshold=config.prediction_threshold)

    @property
    def classifier(self) -> DiabetesClassifier:
        return self._model

    def forward(self, features: torch.Tensor) -> torch.Tensor:
        output = self._model(features)
        return output

    def training_step(self, batch: DiabetesSample, batch_idx: int) -> torch.Tensor:
        scores = self(batch.features)
        bce_loss = F.binary_cross_entropy(scores, batch.label)
        self._train_accuracy.update(scores, batch.label.int())
        self.log_dict(
            {
                "bce_loss": bce_loss.cpu().item(),
            }
        )
        return bce_loss

    def validation_step(self, val_batch: DiabetesSample, batch_idx: int):
        """Accumulate targets and prediction to compute metrics at the end"""

        scores = self(val_batch.features).to(self._val_ds_scores.device)
        labels = val_batch.label.to(self._val_ds_labels.device)
        self._val_ds_scores = torch.cat((self._val_ds_scores, scores))
        self._val_ds_labels = torch.cat((self._val_ds_labels, labels))

    def on_train_epoch_end(self):
        train_accuracy: float = self._train_accuracy.compute().item()
        self._train_accuracy.reset()
        self.log("train_accuracy", train_accuracy)
        loss_value = self.trainer.logged_metrics.get("bce_loss")
        if loss_value is not None:
            report_scalar(
                title="Training",
                series="bce_loss",
                value=float(loss_value),
                iteration=self.current_epoch,
            )
        report_scalar(
            title="Training",
            series="accuracy",
            value=train_accuracy,
            iteration=self.current_epoch,
        )
        return super().on_train_epoch_end()

    def on_validation_epoch_end(self):
        if len(self._val_ds_labels) == 0:
            return

        labels = self._val_ds_labels.cpu().numpy()
        scores = self._val_ds_scores.detach().cpu().numpy()
        val_accuracy: float = (
            ((scores >= self._config.prediction_threshold) == (labels == 1))
            .mean()
            .item()
        )
        pr_points, roc_points = compute_curves(labels, scores, DEFAULT_THRESHOLDS)
        best_point = get_best_f1_score_point(pr_points, DEFAULT_THRESHOLDS)
        roc_auc = compute_roc_auc(roc_points)

        # log all metrics
        self.log_dict(
            {
                "val_accuracy": val_accuracy,
                "best_F1": best_point.f1,
                "roc_auc": roc_auc,
            }
        )
        for series, value in (
            ("accuracy", val_accuracy),
            ("prcn@best_F1", best_point.prcn),
            ("rcl@best_F1", best_point.rcl),
            ("thrd@best_F1", best_point.thrd),
            ("best_F1", best_point.f1),
            ("ROC AUC", roc_auc),
        ):
            report_scalar(
                title="Val metrics",
                series=series,
                value=value,
                iteration=self.current_epoch,
            )
        log_curves_to_clearml(
            pr_points, roc_points, title="Val curves", iteration=self.current_epoch
        )

        self._val_ds_scores: torch.Tensor = torch.empty((0,))
        self._val_ds_labels: torch.Tensor = torch.empty((0,))

    def configure_optimizers(self):
        opt: torch.optim.Optimizer
        if self._config.optimizer_kind == OptimizerKind.SGD:
            opt = torch.optim.SGD(self.parameters(), **self._config.optimizer_kwargs)
        elif self._config.optimizer_kind == OptimizerKind.ADAM:
            opt = torch.optim.Adam(self.parameters(), **self._config.optimizer_kwargs)
        else:
            raise ValueError(f"Unsupported optimizer {self._config.optimizer_kind}")
        return opt


def run_train(
    train_dataset: Dataset,
    val_dataset: Dataset,
    config: TrainConfig,
) -> DiabetesClassifierLightningModule:
    if config.clearml_project is not None:
        task = init_clearml_task(
            config.clearml_project, config.clearml_task_name or "diabetes_train"
        )
        task.connect_configuration(config.model_dump(mode="json"))

    train_loader = DataLoader(
        train_dataset,
        batch_size=config.batch_size,
        collate_fn=DiabetesDatasetReader.collate_samples,
        shuffle=config.shuffle,
    )
    val_loader = DataLoader(
        val_dataset,
        batch_size=config.batch_size,
        collate_fn=DiabetesDatasetReader.collate_samples,
        shuffle=False,
    )
    model = DiabetesClassifierLightningModule(config)

    callbacks = []
    if len(val_dataset) > 0:
        callbacks.append(
            ModelCheckpoint(
                dirpath=config.output_folder / "checkpoints",
                monitor="val_accuracy",
                mode="max",
                auto_insert_metric_name=True,
                every_n_epochs=1,
                save_on_train_epoch_end=False,
                filename="checkpoint_{epoch:02d}-{val_accuracy:.3f}",
                save_top_k=3,
            )
        )
    trainer = pl.Trainer(
        max_epochs=config.epochs_num,
        accelerator="auto",
        devices=1,
        check_val_every_n_epoch=1,
        default_root_dir=config.output_folder,
        callbacks=callbacks,
    )

    trainer.fit(
        model=model,
        train_dataloaders=train_loader,
        val_dataloaders=val_loader if len(val_dataset) > 0 else None,
    )
    return model
