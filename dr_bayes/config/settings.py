"""
Dr.Bayes — Налаштування системи

Всі параметри зібрані в dataclass-и для:
- Типізації та валідації
- Легкого доступу через config.thresholds.test_threshold
- Серіалізації в YAML/JSON
"""

import math
import os
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Optional

from dr_bayes.utils.exceptions import ConfigurationError


# =============================================================================
# THRESHOLDS (test / treatment threshold model)
# =============================================================================

@dataclass
class ThresholdConfig:
    """
    Пороги моделі Pauker–Kassirer.

    p < test_threshold                     → no_action
    test_threshold ≤ p < treatment_threshold → order_test
    p ≥ treatment_threshold                → treat_empirically
    """

    test_threshold: float = 0.05
    treatment_threshold: float = 0.90

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """ConfigurationError якщо не виконується 0 ≤ test < treatment ≤ 1"""
        for name in ("test_threshold", "treatment_threshold"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or math.isnan(value):
                raise ConfigurationError(
                    f"{name} must be a number, got {value!r}",
                    setting=name
                )
        if not 0.0 <= self.test_threshold < self.treatment_threshold <= 1.0:
            raise ConfigurationError(
                "Thresholds must satisfy 0 <= test_threshold < treatment_threshold <= 1 "
                f"(got {self.test_threshold}, {self.treatment_threshold})",
                setting="thresholds",
                details={
                    "test_threshold": self.test_threshold,
                    "treatment_threshold": self.treatment_threshold,
                }
            )


# =============================================================================
# HYPOTHESIS STORE
# =============================================================================

@dataclass
class StoreConfig:
    """Параметри сховища гіпотез"""

    # Гіпотеза з ймовірністю нижче floor автоматично виключається (0 = вимкнено)
    elimination_floor: float = 0.0

    # Претестова ймовірність за замовчуванням, коли генератор її не дав
    default_pretest_probability: float = 0.15

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        if not isinstance(self.elimination_floor, (int, float)) or not 0.0 <= self.elimination_floor < 1.0:
            raise ConfigurationError(
                f"elimination_floor must be in [0, 1), got {self.elimination_floor!r}",
                setting="elimination_floor"
            )
        if (
            not isinstance(self.default_pretest_probability, (int, float))
            or not 0.0 <= self.default_pretest_probability <= 1.0
        ):
            raise ConfigurationError(
                "default_pretest_probability must be in [0, 1], "
                f"got {self.default_pretest_probability!r}",
                setting="default_pretest_probability"
            )


# =============================================================================
# MAIN CONFIG
# =============================================================================

@dataclass
class DrBayesConfig:
    """
    Головна конфігурація Dr.Bayes.

    Приклад:
        config = get_default_config()
        config.thresholds.treatment_threshold = 0.85
        config.validate()
    """

    thresholds: ThresholdConfig = field(default_factory=ThresholdConfig)
    store: StoreConfig = field(default_factory=StoreConfig)

    version: str = "0.1.0"

    def validate(self) -> None:
        """Перевірити всі секції"""
        self.thresholds.validate()
        self.store.validate()

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "DrBayesConfig":
        """Створити конфігурацію зі словника (наприклад, з YAML)"""
        data = data or {}
        unknown = set(data) - {"thresholds", "store", "version"}
        if unknown:
            raise ConfigurationError(
                f"Unknown config sections: {sorted(unknown)}",
                setting="root"
            )
        try:
            thresholds = ThresholdConfig(**(data.get("thresholds") or {}))
            store = StoreConfig(**(data.get("store") or {}))
        except TypeError as e:
            raise ConfigurationError(f"Invalid config field: {e}", setting="root") from e

        return cls(
            thresholds=thresholds,
            store=store,
            version=str(data.get("version", cls.version)),
        )


def get_default_config() -> DrBayesConfig:
    """Конфігурація за замовчуванням"""
    return DrBayesConfig()


def config_from_env(environ: Optional[Dict[str, str]] = None) -> DrBayesConfig:
    """
    Конфігурація з environment variables.

    DRBAYES_CONFIG — шлях до YAML (база), далі перекриваються:
    DRBAYES_TEST_THRESHOLD, DRBAYES_TREATMENT_THRESHOLD, DRBAYES_ELIMINATION_FLOOR
    """
    env = os.environ if environ is None else environ

    data: Dict[str, Any] = {}
    path = env.get("DRBAYES_CONFIG")
    if path:
        from .loader import load_yaml
        data = load_yaml(path) or {}

    overrides = {
        "DRBAYES_TEST_THRESHOLD": ("thresholds", "test_threshold"),
        "DRBAYES_TREATMENT_THRESHOLD": ("thresholds", "treatment_threshold"),
        "DRBAYES_ELIMINATION_FLOOR": ("store", "elimination_floor"),
    }
    for var, (section, key) in overrides.items():
        raw = env.get(var)
        if raw is None:
            continue
        try:
            value = float(raw)
        except ValueError as e:
            raise ConfigurationError(f"{var} is not a number: {raw!r}", setting=key) from e
        data.setdefault(section, {})
        data[section] = {**data[section], key: value}

    return DrBayesConfig.from_dict(data)
