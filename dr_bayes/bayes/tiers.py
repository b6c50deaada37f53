"""
Dr.Bayes — Рекомендація рівня клінічних дій

Модель порогів тестування/лікування (Pauker–Kassirer):

    p < test_threshold                      → NO_ACTION
    test_threshold ≤ p < treatment_threshold → ORDER_TEST
    p ≥ treatment_threshold                 → TREAT_EMPIRICALLY

Пороги — конфігурація (ThresholdConfig), а не константи: різні
захворювання та рівні ризику виправдовують різні межі.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from dr_bayes.config.settings import ThresholdConfig
from dr_bayes.utils.exceptions import DomainError
from .odds import validate_probability


class ActionTier(str, Enum):
    """Рівень клінічних дій (впорядкований)"""
    NO_ACTION = "no_action"
    ORDER_TEST = "order_test"
    TREAT_EMPIRICALLY = "treat_empirically"

    @property
    def order(self) -> int:
        return _TIER_ORDER[self]

    def __lt__(self, other):
        if not isinstance(other, ActionTier):
            return NotImplemented
        return self.order < other.order


_TIER_ORDER = {
    ActionTier.NO_ACTION: 0,
    ActionTier.ORDER_TEST: 1,
    ActionTier.TREAT_EMPIRICALLY: 2,
}

_RATIONALES = {
    ActionTier.NO_ACTION: (
        "Probability below the test threshold - diagnosis effectively ruled out, "
        "no further workup justified"
    ),
    ActionTier.ORDER_TEST: (
        "Probability between the test and treatment thresholds - further testing "
        "has the highest expected value"
    ),
    ActionTier.TREAT_EMPIRICALLY: (
        "Probability at or above the treatment threshold - the cost and risk of "
        "further testing outweigh its value"
    ),
}


@dataclass(frozen=True)
class TierRecommendation:
    """Рекомендація з обґрунтуванням"""
    tier: ActionTier
    rationale: str
    probability: float
    test_threshold: float
    treatment_threshold: float

    def to_dict(self) -> Dict:
        return {
            "tier": self.tier.value,
            "rationale": self.rationale,
            "probability": self.probability,
            "test_threshold": self.test_threshold,
            "treatment_threshold": self.treatment_threshold,
        }


def _check_thresholds(config: ThresholdConfig) -> None:
    # config мутабельний, порядок порогів перевіряється на момент виклику
    test, treatment = config.test_threshold, config.treatment_threshold
    if not 0.0 <= test < treatment <= 1.0:
        raise DomainError(
            "Thresholds must satisfy 0 <= test_threshold < treatment_threshold <= 1 "
            f"(got {test}, {treatment})",
            details={"test_threshold": test, "treatment_threshold": treatment}
        )


def recommend_tier(probability, config: Optional[ThresholdConfig] = None) -> ActionTier:
    """
    Рівень дій для ймовірності.

    Raises:
        DomainError: probability ∉ [0, 1] або пороги не впорядковані
    """
    config = config or ThresholdConfig()
    _check_thresholds(config)
    p = validate_probability(probability, "probability")

    if p < config.test_threshold:
        return ActionTier.NO_ACTION
    elif p < config.treatment_threshold:
        return ActionTier.ORDER_TEST
    else:
        return ActionTier.TREAT_EMPIRICALLY


def recommend_testing_tier(
    probability,
    config: Optional[ThresholdConfig] = None
) -> TierRecommendation:
    """Рівень дій + текстове обґрунтування + використані пороги"""
    config = config or ThresholdConfig()
    tier = recommend_tier(probability, config)

    return TierRecommendation(
        tier=tier,
        rationale=_RATIONALES[tier],
        probability=float(probability),
        test_threshold=config.test_threshold,
        treatment_threshold=config.treatment_threshold,
    )
