"""
Dr.Bayes — Планування обох результатів тесту

Перед призначенням тесту показує, куди зміститься ймовірність
при позитивному та при негативному результаті.

Приклад:
    plan = plan_from_test_characteristics(0.30, sensitivity=0.85, specificity=0.90)
    plan.posttest_if_positive   # ≈ 0.7846
    plan.posttest_if_negative   # ≈ 0.0667
    plan.diagnostic_value       # DiagnosticValue.HIGH
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from dr_bayes.config.settings import ThresholdConfig
from .likelihood import derive_likelihood_ratios, LikelihoodRatios
from .odds import validate_probability
from .updater import BayesianCalculation, calculate_post_test_probability
from .tiers import recommend_tier


class DiagnosticValue(str, Enum):
    """Наскільки тест здатен змінити ймовірність"""
    HIGH = "high"           # зсув > 0.30
    MODERATE = "moderate"   # зсув > 0.10
    LOW = "low"


# Пороги зсуву ймовірності для DiagnosticValue
HIGH_VALUE_SHIFT = 0.30
MODERATE_VALUE_SHIFT = 0.10


@dataclass(frozen=True)
class OutcomePlan:
    """
    Ймовірності після гіпотетичного позитивного та негативного тесту.

    if_positive / if_negative — повні розкладки кожної гілки (з шансами).
    """
    pretest_probability: float
    if_positive: BayesianCalculation
    if_negative: BayesianCalculation

    @property
    def lr_positive(self) -> float:
        return self.if_positive.likelihood_ratio

    @property
    def lr_negative(self) -> float:
        return self.if_negative.likelihood_ratio

    @property
    def posttest_if_positive(self) -> float:
        return self.if_positive.posttest_probability

    @property
    def posttest_if_negative(self) -> float:
        return self.if_negative.posttest_probability

    @property
    def likelihood_ratios(self) -> LikelihoodRatios:
        return LikelihoodRatios(positive=self.lr_positive, negative=self.lr_negative)

    @property
    def shift_if_positive(self) -> float:
        return self.posttest_if_positive - self.pretest_probability

    @property
    def shift_if_negative(self) -> float:
        return self.pretest_probability - self.posttest_if_negative

    @property
    def diagnostic_value(self) -> DiagnosticValue:
        if self.shift_if_positive > HIGH_VALUE_SHIFT or self.shift_if_negative > HIGH_VALUE_SHIFT:
            return DiagnosticValue.HIGH
        elif self.shift_if_positive > MODERATE_VALUE_SHIFT or self.shift_if_negative > MODERATE_VALUE_SHIFT:
            return DiagnosticValue.MODERATE
        else:
            return DiagnosticValue.LOW

    def crosses_threshold(self, config: Optional[ThresholdConfig] = None) -> bool:
        """Чи може хоч один результат змінити рекомендований рівень дій"""
        before = recommend_tier(self.pretest_probability, config)
        return (
            recommend_tier(self.posttest_if_positive, config) != before
            or recommend_tier(self.posttest_if_negative, config) != before
        )

    def to_dict(self) -> Dict[str, float]:
        return {
            "pretest_probability": self.pretest_probability,
            "lr_positive": self.lr_positive,
            "lr_negative": self.lr_negative,
            "posttest_if_positive": self.posttest_if_positive,
            "posttest_if_negative": self.posttest_if_negative,
        }


def plan_both_outcomes(prior_probability, lr_positive, lr_negative) -> OutcomePlan:
    """
    Оновлення для обох гіпотетичних результатів від одного prior.

    Два виклики незалежні (без спільного стану), порядок не важливий.

    Raises:
        DomainError: prior ∉ [0, 1] або будь-який LR < 0
    """
    prior = validate_probability(prior_probability, "prior_probability")

    return OutcomePlan(
        pretest_probability=prior,
        if_positive=calculate_post_test_probability(prior, lr_positive),
        if_negative=calculate_post_test_probability(prior, lr_negative),
    )


def plan_from_test_characteristics(prior_probability, sensitivity, specificity) -> OutcomePlan:
    """Чутливість/специфічність → LR → план обох результатів"""
    ratios = derive_likelihood_ratios(sensitivity, specificity)
    return plan_both_outcomes(prior_probability, ratios.positive, ratios.negative)


def generate_test_rationale(hypothesis_name: str, test_name: str, plan: OutcomePlan) -> str:
    """
    Текстове обґрунтування тесту для клініциста.

    Єдине місце ядра, що форматує відсотки; числовий план
    повертається окремо і залишається сирим.
    """
    interpretation = {
        DiagnosticValue.HIGH: "High diagnostic value - significantly changes probability",
        DiagnosticValue.MODERATE: "Moderate diagnostic value - may help narrow differential",
        DiagnosticValue.LOW: "Low diagnostic value - consider alternative tests",
    }[plan.diagnostic_value]

    return (
        f"Testing for {hypothesis_name} with {test_name}:\n"
        f"- Current probability: {plan.pretest_probability * 100:.1f}%\n"
        f"- If positive: increases to {plan.posttest_if_positive * 100:.1f}%\n"
        f"- If negative: decreases to {plan.posttest_if_negative * 100:.1f}%\n"
        f"\n"
        f"Clinical significance: {interpretation}"
    )
