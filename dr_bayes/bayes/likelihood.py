"""
Dr.Bayes — Відношення правдоподібності (LR+ / LR−)

LR+ = sensitivity / (1 − specificity)
LR− = (1 − sensitivity) / specificity

Асиметрія меж:
- specificity == 1 → LR+ = +∞ (ідеально специфічний тест, позитивний
  результат патогномонічний). Це коректне значення, не помилка.
- specificity == 0 → DomainError. LR− ділить на нуль, а тест з нульовою
  специфічністю неможливо інтерпретувати при негативному результаті.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from dr_bayes.utils.exceptions import DomainError
from .odds import validate_probability, validate_non_negative, INFINITE_ODDS


@dataclass(frozen=True)
class LikelihoodRatios:
    """Пара відношень правдоподібності тесту"""
    positive: float
    negative: float

    def for_result(self, positive: bool) -> float:
        """LR для конкретного результату тесту"""
        return self.positive if positive else self.negative


def derive_likelihood_ratios(sensitivity, specificity) -> LikelihoodRatios:
    """
    Обчислити LR+ та LR− з чутливості та специфічності.

    Raises:
        DomainError: вхід поза [0, 1] або specificity == 0
    """
    sensitivity = validate_probability(sensitivity, "sensitivity")
    specificity = validate_probability(specificity, "specificity")

    if specificity == 0.0:
        raise DomainError(
            "Specificity of 0 makes LR- undefined: a zero-specificity test "
            "cannot be interpreted on a negative result",
            parameter="specificity",
            value=specificity
        )

    if specificity == 1.0:
        lr_positive = INFINITE_ODDS
    else:
        lr_positive = sensitivity / (1.0 - specificity)

    lr_negative = (1.0 - sensitivity) / specificity

    return LikelihoodRatios(positive=lr_positive, negative=lr_negative)


@dataclass(frozen=True)
class TestCharacteristics:
    """
    Операційні характеристики діагностичного тесту.

    Незмінний об'єкт: два використання одного тесту в одному
    розрахунку завжди дають однакові LR.

    Приклад:
        tsh = TestCharacteristics(sensitivity=0.95, specificity=0.88, name="TSH")
        lrs = tsh.likelihood_ratios()
    """
    # pytest не повинен збирати цей клас як тест
    __test__ = False

    sensitivity: float
    specificity: float
    name: Optional[str] = None

    def __post_init__(self):
        validate_probability(self.sensitivity, "sensitivity")
        validate_probability(self.specificity, "specificity")

    def likelihood_ratios(self) -> LikelihoodRatios:
        return derive_likelihood_ratios(self.sensitivity, self.specificity)


def resolve_likelihood_ratios(
    lr_positive: Optional[float] = None,
    lr_negative: Optional[float] = None,
    sensitivity: Optional[float] = None,
    specificity: Optional[float] = None,
) -> LikelihoodRatios:
    """
    LR для запису каталогу тестів.

    Запис може містити готові LR, чутливість/специфічність або обидва.
    Явні LR мають пріоритет, відсутні обчислюються з sens/spec.
    """
    derived = None
    if lr_positive is None or lr_negative is None:
        if sensitivity is None or specificity is None:
            raise DomainError(
                "Test needs either both likelihood ratios or sensitivity and specificity",
                details={
                    "lr_positive": lr_positive,
                    "lr_negative": lr_negative,
                    "sensitivity": sensitivity,
                    "specificity": specificity,
                }
            )
        derived = derive_likelihood_ratios(sensitivity, specificity)

    positive = (
        validate_non_negative(lr_positive, "lr_positive")
        if lr_positive is not None else derived.positive
    )
    negative = (
        validate_non_negative(lr_negative, "lr_negative")
        if lr_negative is not None else derived.negative
    )
    return LikelihoodRatios(positive=positive, negative=negative)


class LRInterpretation(str, Enum):
    """Якісна сила відношення правдоподібності"""
    LARGE_INCREASE = "large_increase"           # ≥ 10
    MODERATE_INCREASE = "moderate_increase"     # 5 – 10
    SMALL_INCREASE = "small_increase"           # 2 – 5
    MINIMAL = "minimal"                         # 0.5 – 2
    SMALL_DECREASE = "small_decrease"           # 0.2 – 0.5
    MODERATE_DECREASE = "moderate_decrease"     # 0.1 – 0.2
    LARGE_DECREASE = "large_decrease"           # ≤ 0.1


def interpret_likelihood_ratio(likelihood_ratio) -> LRInterpretation:
    """Класифікувати LR за загальноприйнятими межами"""
    lr = validate_non_negative(likelihood_ratio, "likelihood_ratio")

    if lr >= 10.0:
        return LRInterpretation.LARGE_INCREASE
    elif lr >= 5.0:
        return LRInterpretation.MODERATE_INCREASE
    elif lr >= 2.0:
        return LRInterpretation.SMALL_INCREASE
    elif lr > 0.5:
        return LRInterpretation.MINIMAL
    elif lr > 0.2:
        return LRInterpretation.SMALL_DECREASE
    elif lr > 0.1:
        return LRInterpretation.MODERATE_DECREASE
    else:
        return LRInterpretation.LARGE_DECREASE
