"""
Тести для модуля bayes.tiers

Запуск: pytest tests/test_tiers.py -v
"""

import pytest


def test_default_tiers():
    """0.02 / 0.5 / 0.95 при порогах 0.05 / 0.90"""
    from dr_bayes.bayes import recommend_tier, ActionTier

    assert recommend_tier(0.02) is ActionTier.NO_ACTION
    assert recommend_tier(0.5) is ActionTier.ORDER_TEST
    assert recommend_tier(0.95) is ActionTier.TREAT_EMPIRICALLY

    print("✓ Default tiers")


def test_threshold_boundaries():
    """Поріг належить вищому рівню"""
    from dr_bayes.bayes import recommend_tier, ActionTier

    assert recommend_tier(0.0) is ActionTier.NO_ACTION
    assert recommend_tier(0.05) is ActionTier.ORDER_TEST
    assert recommend_tier(0.0499) is ActionTier.NO_ACTION
    assert recommend_tier(0.90) is ActionTier.TREAT_EMPIRICALLY
    assert recommend_tier(1.0) is ActionTier.TREAT_EMPIRICALLY

    print("✓ Boundaries")


def test_custom_thresholds():
    """Пороги з конфігурації"""
    from dr_bayes.bayes import recommend_tier, ActionTier
    from dr_bayes.config import ThresholdConfig

    config = ThresholdConfig(test_threshold=0.10, treatment_threshold=0.60)

    assert recommend_tier(0.08, config) is ActionTier.NO_ACTION
    assert recommend_tier(0.30, config) is ActionTier.ORDER_TEST
    assert recommend_tier(0.70, config) is ActionTier.TREAT_EMPIRICALLY

    print("✓ Custom thresholds")


def test_tiers_are_monotonic():
    """Вища ймовірність ніколи не дає нижчого рівня"""
    from dr_bayes.bayes import recommend_tier

    tiers = [recommend_tier(i / 100) for i in range(101)]

    for lower, higher in zip(tiers, tiers[1:]):
        assert not higher < lower

    print("✓ Monotonic")


def test_recommendation_rationale():
    """Рекомендація містить обґрунтування та пороги"""
    from dr_bayes.bayes import recommend_testing_tier, ActionTier

    rec = recommend_testing_tier(0.5)

    assert rec.tier is ActionTier.ORDER_TEST
    assert "testing" in rec.rationale
    assert rec.test_threshold == 0.05
    assert rec.treatment_threshold == 0.90
    assert rec.to_dict()["tier"] == "order_test"

    print(f"✓ {rec.tier.value}: {rec.rationale}")


def test_invalid_probability():
    """Ймовірність поза [0, 1] → DomainError"""
    from dr_bayes.bayes import recommend_tier
    from dr_bayes.utils import DomainError

    with pytest.raises(DomainError):
        recommend_tier(1.2)
    with pytest.raises(DomainError):
        recommend_tier(-0.01)

    print("✓ Invalid probability rejected")


def test_mutated_thresholds_rejected():
    """Пороги, зіпсовані після створення, перевіряються при виклику"""
    from dr_bayes.bayes import recommend_tier
    from dr_bayes.config import ThresholdConfig
    from dr_bayes.utils import DomainError

    config = ThresholdConfig()
    config.test_threshold = 0.95

    with pytest.raises(DomainError):
        recommend_tier(0.5, config)

    print("✓ Mutated thresholds rejected")
