import json
import yaml
from typing import Dict
from pydantic import FilePath
from pathlib import Path


def write_json(data: Dict, json_file: Path) -> None:
    with open(json_file, "w") as json_file:
        json.dump(data, json_file, indent=2)


def read_yaml(yaml_file: FilePath) -> Dict:
    with open(yaml_file, "r") as yaml_file:
        data = yaml.safe_load(yaml_file)
    return data
