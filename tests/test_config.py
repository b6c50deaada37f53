"""
Тести для модуля config

Запуск: pytest tests/test_config.py -v
Або демо: python tests/test_config.py
"""

import pytest


def test_defaults():
    """Конфігурація за замовчуванням"""
    from dr_bayes.config import get_default_config

    config = get_default_config()

    assert config.thresholds.test_threshold == 0.05
    assert config.thresholds.treatment_threshold == 0.90
    assert config.store.elimination_floor == 0.0
    assert config.store.default_pretest_probability == 0.15

    print(f"✓ Defaults: {config.to_dict()}")


def test_invalid_thresholds():
    """0 ≤ test < treatment ≤ 1"""
    from dr_bayes.config import ThresholdConfig
    from dr_bayes.utils import ConfigurationError

    for test, treatment in [(0.9, 0.5), (0.5, 0.5), (-0.1, 0.5), (0.1, 1.5)]:
        with pytest.raises(ConfigurationError):
            ThresholdConfig(test_threshold=test, treatment_threshold=treatment)

    with pytest.raises(ConfigurationError) as exc_info:
        ThresholdConfig(test_threshold="low")
    assert exc_info.value.setting == "test_threshold"

    print("✓ Invalid thresholds rejected")


def test_invalid_store_config():
    """elimination_floor ∈ [0, 1), default_pretest_probability ∈ [0, 1]"""
    from dr_bayes.config import StoreConfig
    from dr_bayes.utils import ConfigurationError

    with pytest.raises(ConfigurationError):
        StoreConfig(elimination_floor=1.0)
    with pytest.raises(ConfigurationError):
        StoreConfig(default_pretest_probability=1.2)

    print("✓ Invalid store config rejected")


def test_from_dict():
    """Часткова конфігурація доповнюється значеннями за замовчуванням"""
    from dr_bayes.config import DrBayesConfig
    from dr_bayes.utils import ConfigurationError

    config = DrBayesConfig.from_dict({"thresholds": {"treatment_threshold": 0.8}})
    assert config.thresholds.test_threshold == 0.05
    assert config.thresholds.treatment_threshold == 0.8

    with pytest.raises(ConfigurationError):
        DrBayesConfig.from_dict({"som": {}})
    with pytest.raises(ConfigurationError):
        DrBayesConfig.from_dict({"thresholds": {"alpha": 0.5}})

    print("✓ from_dict")


def test_yaml_roundtrip(tmp_path):
    """Збереження та завантаження YAML"""
    from dr_bayes.config import DrBayesConfig, ThresholdConfig, StoreConfig, save_config, load_config

    config = DrBayesConfig(
        thresholds=ThresholdConfig(test_threshold=0.02, treatment_threshold=0.75),
        store=StoreConfig(elimination_floor=0.01),
    )
    path = tmp_path / "configs" / "drbayes.yaml"

    save_config(config, path)
    loaded = load_config(path)

    assert loaded == config
    print(f"✓ YAML: {path.read_text(encoding='utf-8')}")


def test_bad_yaml(tmp_path):
    """Пошкоджений або відсутній файл → ConfigurationError"""
    from dr_bayes.config import load_config
    from dr_bayes.utils import ConfigurationError

    broken = tmp_path / "broken.yaml"
    broken.write_text("thresholds: [unclosed\n", encoding="utf-8")
    not_mapping = tmp_path / "list.yaml"
    not_mapping.write_text("- 0.05\n- 0.9\n", encoding="utf-8")
    inverted = tmp_path / "inverted.yaml"
    inverted.write_text(
        "thresholds:\n  test_threshold: 0.9\n  treatment_threshold: 0.1\n",
        encoding="utf-8"
    )

    for path in (broken, not_mapping, inverted, tmp_path / "missing.yaml"):
        with pytest.raises(ConfigurationError):
            load_config(path)

    print("✓ Bad YAML rejected")


def test_config_from_env(tmp_path):
    """Environment variables перекривають YAML"""
    from dr_bayes.config import DrBayesConfig, ThresholdConfig, save_config, config_from_env
    from dr_bayes.utils import ConfigurationError

    path = tmp_path / "base.yaml"
    save_config(DrBayesConfig(thresholds=ThresholdConfig(0.02, 0.80)), path)

    config = config_from_env({
        "DRBAYES_CONFIG": str(path),
        "DRBAYES_TREATMENT_THRESHOLD": "0.85",
        "DRBAYES_ELIMINATION_FLOOR": "0.005",
    })

    assert config.thresholds.test_threshold == 0.02
    assert config.thresholds.treatment_threshold == 0.85
    assert config.store.elimination_floor == 0.005

    assert config_from_env({}) == DrBayesConfig()

    with pytest.raises(ConfigurationError):
        config_from_env({"DRBAYES_TEST_THRESHOLD": "five percent"})

    print("✓ config_from_env")


def demo():
    from dr_bayes.config import get_default_config

    print("=" * 50)
    print("Dr.Bayes — Тест конфігурації")
    print("=" * 50)

    config = get_default_config()

    print(f"Версія: {config.version}")
    print(f"Поріг тестування: {config.thresholds.test_threshold}")
    print(f"Поріг лікування: {config.thresholds.treatment_threshold}")
    print(f"Поріг виключення: {config.store.elimination_floor}")
    print(f"Претестова за замовчуванням: {config.store.default_pretest_probability}")

    print("=" * 50)
    print("✅ Успішно!")


if __name__ == "__main__":
    demo()
