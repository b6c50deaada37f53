"""Dr.Bayes — Завантаження конфігурації"""
import yaml
from pathlib import Path
from typing import Union

from .settings import DrBayesConfig
from dr_bayes.utils.exceptions import ConfigurationError


def save_yaml(config: DrBayesConfig, path: Union[str, Path]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(config.to_dict(), f, default_flow_style=False)


def load_yaml(path: Union[str, Path]) -> dict:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}", setting="path") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Malformed YAML in {path}: {e}", setting="path") from e

    if data is not None and not isinstance(data, dict):
        raise ConfigurationError(f"Config root in {path} must be a mapping", setting="path")
    return data or {}


def save_config(config: DrBayesConfig, path: Union[str, Path]) -> None:
    save_yaml(config, path)


def load_config(path: Union[str, Path]) -> DrBayesConfig:
    return DrBayesConfig.from_dict(load_yaml(path))
