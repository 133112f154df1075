import click
from pathlib import Path
from ..inference.predict import load_trained_model, predict_record
from ..schemas.config.train_config import TrainConfig
from ..schemas.data.diabetes_record import DiabetesRecord
from ..utils import read_yaml
from .run_diabetes_train import WEIGHTS_FILE_NAME


@click.command()
@click.option("--config_file", type=Path, required=True)
@click.option(
    "--weights_file",
    type=Path,
    default=None,
    help=f"Defaults to <output_folder>/{WEIGHTS_FILE_NAME} from config",
)
@click.option("--pregnancies", type=float, default=0)
@click.option("--glucose", type=float, default=0)
@click.option("--blood_pressure", type=float, default=0)
@click.option("--skin_thickness", type=float, default=0)
@click.option("--insulin", type=float, default=0)
@click.option("--bmi", type=float, default=0)
@click.option("--diabetes_pedigree_function", type=float, default=0)
@click.option("--age", type=float, default=0)
def main(config_file: Path, weights_file: Path, **features):
    config = TrainConfig.model_validate(read_yaml(config_file))
    if weights_file is None:
        weights_file = config.output_folder / WEIGHTS_FILE_NAME
    if not weights_file.exists():
        raise click.ClickException(
            f"No trained model at {weights_file}, please train the model first"
        )

    model = load_trained_model(weights_file, hidden_size=config.hidden_size)
    record = DiabetesRecord(**features)
    prediction = predict_record(model, record, threshold=config.prediction_threshold)
    click.echo(
        f"The model predicts: {prediction.label.value} (score {prediction.score:.3f})"
    )


if __name__ == "__main__":
    main()
