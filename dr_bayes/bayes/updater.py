"""
Dr.Bayes — Баєсове оновлення ймовірності

posterior_odds = prior_odds × LR

Послідовні докази:
    Кожен LR застосовується до апостеріорної ймовірності попереднього
    кроку. Множення шансів комутативне та асоціативне, тому порядок
    застосування не змінює результат.

Межі:
    Рівно 1 дає лише +∞ (певний доказ або певний prior). Якщо добуток
    скінченних шансів і LR переповнює float, оновлення відхиляється
    з DomainError, а не округлюється до впевненості.

Обмеження моделі:
    Послідовне множення припускає, що тести умовно незалежні за умови
    діагнозу. Для корельованих тестів (наприклад, два маркери одного
    процесу) добуток LR переоцінює силу доказів. Ядро цього не перевіряє;
    відповідальність за вибір незалежних доказів лежить на клініцисті.
"""

import math
from dataclasses import dataclass, asdict
from typing import Dict, Iterable

from dr_bayes.utils.exceptions import DomainError
from dr_bayes.utils.logging import get_logger
from .odds import (
    probability_to_odds,
    odds_to_probability,
    validate_probability,
    validate_non_negative,
    INFINITE_ODDS,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class BayesianCalculation:
    """Повний результат одного оновлення"""
    pretest_probability: float
    likelihood_ratio: float
    posttest_probability: float
    pretest_odds: float
    posttest_odds: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


def _multiply_odds(prior_odds: float, likelihood_ratio: float) -> float:
    """prior_odds × LR з явною обробкою 0 × ∞ та переповнення"""
    if math.isinf(prior_odds) or math.isinf(likelihood_ratio):
        if prior_odds == 0.0 or likelihood_ratio == 0.0:
            # 0 × ∞: неможлива подія проти певного доказу
            raise DomainError(
                "Indeterminate update: a certain prior cannot be combined with "
                "a likelihood ratio of 0, and an impossible prior cannot be "
                "combined with an infinite likelihood ratio",
                details={"prior_odds": str(prior_odds), "likelihood_ratio": str(likelihood_ratio)}
            )
        return INFINITE_ODDS

    posterior = prior_odds * likelihood_ratio
    if math.isinf(posterior):
        # скінченні докази не можуть дати +∞
        raise DomainError(
            "Odds overflow: the product of finite prior odds and a finite "
            "likelihood ratio exceeds the float range",
            details={"prior_odds": prior_odds, "likelihood_ratio": likelihood_ratio}
        )
    return posterior


def _step(prior_probability: float, likelihood_ratio: float) -> BayesianCalculation:
    prior_odds = probability_to_odds(prior_probability)
    posterior_odds = _multiply_odds(prior_odds, likelihood_ratio)
    posterior = odds_to_probability(posterior_odds)

    return BayesianCalculation(
        pretest_probability=prior_probability,
        likelihood_ratio=likelihood_ratio,
        posttest_probability=validate_probability(posterior, "posttest_probability"),
        pretest_odds=prior_odds,
        posttest_odds=posterior_odds,
    )


def calculate_post_test_probability(
    pretest_probability,
    likelihood_ratio,
) -> BayesianCalculation:
    """
    Одне оновлення з повною розкладкою (ймовірності та шанси).

    Приклад:
        result = calculate_post_test_probability(0.30, 10.0)
        result.posttest_probability   # ≈ 0.8108
        result.pretest_odds           # ≈ 0.4286

    Raises:
        DomainError: pretest ∉ [0, 1] або LR < 0
    """
    prior = validate_probability(pretest_probability, "pretest_probability")
    lr = validate_non_negative(likelihood_ratio, "likelihood_ratio")
    return _step(prior, lr)


def update_probability(prior_probability, likelihood_ratio) -> float:
    """Апостеріорна ймовірність після одного доказу"""
    prior = validate_probability(prior_probability, "prior_probability")
    lr = validate_non_negative(likelihood_ratio, "likelihood_ratio")
    return _step(prior, lr).posttest_probability


def update_with_sequential_evidence(
    prior_probability,
    likelihood_ratios: Iterable[float],
) -> float:
    """
    Застосувати послідовність LR, передаючи апостеріорну ймовірність
    кожного кроку як апріорну для наступного.

    Порожня послідовність повертає апріорну ймовірність без змін.
    Після досягнення +∞ шансів подальші скінченні додатні LR
    зберігають +∞, результат — рівно 1.
    """
    current = validate_probability(prior_probability, "prior_probability")

    for index, ratio in enumerate(likelihood_ratios):
        lr = validate_non_negative(ratio, f"likelihood_ratios[{index}]")
        current = _step(current, lr).posttest_probability

    logger.debug(f"Sequential update: {prior_probability} → {current}")
    return current
