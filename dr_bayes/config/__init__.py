"""Dr.Bayes — Модуль конфігурації"""
from .settings import (
    DrBayesConfig,
    ThresholdConfig,
    StoreConfig,
    get_default_config,
    config_from_env,
)
from .loader import save_config, load_config, save_yaml, load_yaml

__all__ = [
    "DrBayesConfig",
    "ThresholdConfig",
    "StoreConfig",
    "get_default_config",
    "config_from_env",
    "save_config",
    "load_config",
    "save_yaml",
    "load_yaml",
]
