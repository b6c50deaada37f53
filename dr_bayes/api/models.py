"""
Dr.Bayes — API Models

Pydantic моделі для запитів та відповідей API.

Числа приймаються як JSON числа або десяткові рядки ("0.30").
Усі поля операцій калькулятора обов'язкові: відсутнє поле → 400
ще до будь-яких обчислень. +∞ у відповідях серіалізується як
рядок "Infinity"; на вході LR приймає +∞ лише як цей рядок.
"""

import math
from datetime import datetime
from enum import Enum
from typing import Annotated, List, Optional, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer

from dr_bayes.bayes import (
    BayesianCalculation,
    OutcomePlan,
    TierRecommendation,
    LikelihoodRatios,
    interpret_likelihood_ratio,
)
from dr_bayes.hypothesis_store import Hypothesis, EvidenceRecord


def _encode_number(value: float) -> Union[float, str]:
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return value


# float, що може бути +∞ (шанси при p = 1, LR+ при specificity = 1)
ExtendedFloat = Annotated[
    float,
    PlainSerializer(_encode_number, return_type=Union[float, str], when_used="json"),
]

Probability = Annotated[float, Field(ge=0.0, le=1.0, allow_inf_nan=False)]

_INFINITY_LITERALS = {"inf", "+inf", "infinity", "+infinity"}
_OVERFLOW_MESSAGE = 'likelihood ratio overflows the float range; send "Infinity" for a certain finding'


def _parse_likelihood_ratio(value):
    """
    +∞ приймається лише як явний рядок "Infinity"/"inf".

    Скінченний літерал, що переповнює float ("1e400", 1e400, 10**400),
    відхиляється, а не стає певним доказом.
    """
    if isinstance(value, str):
        text = value.strip()
        if text.lower() in _INFINITY_LITERALS:
            return math.inf
        try:
            parsed = float(text)
        except ValueError:
            # нечисловий рядок відхилить сам pydantic
            return value
        if math.isinf(parsed) and parsed > 0:
            raise ValueError(_OVERFLOW_MESSAGE)
        return value

    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        try:
            float(value)
        except OverflowError as e:
            raise ValueError(_OVERFLOW_MESSAGE) from e
    elif isinstance(value, float) and math.isinf(value) and value > 0:
        # JSON-число на кшталт 1e400 розбирається як inf
        raise ValueError(_OVERFLOW_MESSAGE)
    return value


LikelihoodRatio = Annotated[float, BeforeValidator(_parse_likelihood_ratio), Field(ge=0.0)]


class RequestModel(BaseModel):
    """База запитів: зайві поля ігноруються, NaN/inf для ймовірностей заборонені"""
    model_config = ConfigDict(extra="ignore")


# ============================================================
# Enums
# ============================================================

class RetireOutcome(str, Enum):
    """Термінальний стан гіпотези"""
    RULED_OUT = "ruled_out"
    CONFIRMED = "confirmed"


# ============================================================
# Calculator requests
# ============================================================

class CalculateRequest(RequestModel):
    """Одне оновлення ймовірності"""
    pretest_probability: Probability
    likelihood_ratio: LikelihoodRatio

    model_config = ConfigDict(
        json_schema_extra={"example": {"pretest_probability": 0.30, "likelihood_ratio": 10.0}}
    )


class CalculateBothRequest(RequestModel):
    """План для обох результатів за готовими LR"""
    pretest_probability: Probability
    lr_positive: LikelihoodRatio
    lr_negative: LikelihoodRatio


class LikelihoodRatiosRequest(RequestModel):
    """Чутливість та специфічність тесту"""
    sensitivity: Probability
    specificity: Probability


class SensSpecPlanRequest(RequestModel):
    """План для обох результатів за чутливістю та специфічністю"""
    pretest_probability: Probability
    sensitivity: Probability
    specificity: Probability


class RecommendTierRequest(RequestModel):
    """Поточна ймовірність для рекомендації рівня дій"""
    current_probability: Probability


class TestRationaleRequest(RequestModel):
    """Обґрунтування тесту. Потрібні або обидва LR, або sens/spec."""
    __test__ = False

    hypothesis_name: str = Field(..., min_length=1)
    test_name: str = Field(..., min_length=1)
    pretest_probability: Probability
    sensitivity: Optional[Probability] = None
    specificity: Optional[Probability] = None
    lr_positive: Optional[LikelihoodRatio] = None
    lr_negative: Optional[LikelihoodRatio] = None


# ============================================================
# Calculator responses
# ============================================================

class CalculateResponse(BaseModel):
    """Результат одного оновлення"""
    pretest_probability: float
    likelihood_ratio: ExtendedFloat
    posttest_probability: float
    pretest_odds: ExtendedFloat
    posttest_odds: ExtendedFloat

    @classmethod
    def from_calculation(cls, calc: BayesianCalculation) -> "CalculateResponse":
        return cls(**calc.to_dict())


class LikelihoodRatiosResponse(BaseModel):
    """LR+ / LR− та їх якісна інтерпретація"""
    lr_positive: ExtendedFloat
    lr_negative: ExtendedFloat
    lr_positive_interpretation: str
    lr_negative_interpretation: str

    @classmethod
    def from_ratios(cls, ratios: LikelihoodRatios) -> "LikelihoodRatiosResponse":
        return cls(
            lr_positive=ratios.positive,
            lr_negative=ratios.negative,
            lr_positive_interpretation=interpret_likelihood_ratio(ratios.positive).value,
            lr_negative_interpretation=interpret_likelihood_ratio(ratios.negative).value,
        )


class OutcomePlanResponse(BaseModel):
    """Ймовірності для позитивного та негативного результату"""
    pretest_probability: float
    lr_positive: ExtendedFloat
    lr_negative: ExtendedFloat
    posttest_if_positive: float
    posttest_if_negative: float
    if_positive: CalculateResponse
    if_negative: CalculateResponse
    diagnostic_value: str
    changes_management: bool

    @classmethod
    def from_plan(cls, plan: OutcomePlan, changes_management: bool) -> "OutcomePlanResponse":
        return cls(
            **plan.to_dict(),
            if_positive=CalculateResponse.from_calculation(plan.if_positive),
            if_negative=CalculateResponse.from_calculation(plan.if_negative),
            diagnostic_value=plan.diagnostic_value.value,
            changes_management=changes_management,
        )


class TierResponse(BaseModel):
    """Рекомендація рівня дій"""
    tier: str
    rationale: str
    probability: float
    test_threshold: float
    treatment_threshold: float

    @classmethod
    def from_recommendation(cls, rec: TierRecommendation) -> "TierResponse":
        return cls(**rec.to_dict())


class TestRationaleResponse(BaseModel):
    """Текстове обґрунтування + числовий план"""
    __test__ = False

    rationale: str
    plan: OutcomePlanResponse


# ============================================================
# Hypothesis store
# ============================================================

class ProposeRequest(RequestModel):
    """Кандидат від генератора диференціального діагнозу"""
    diagnosis_id: str = Field(..., min_length=1)
    pretest_probability: Optional[Probability] = None
    diagnosis_name: Optional[str] = None
    diagnosis_code: Optional[str] = None
    category: Optional[str] = None


class ProposeBatchRequest(RequestModel):
    """Кілька кандидатів однією транзакцією"""
    candidates: List[ProposeRequest] = Field(..., min_length=1)


class EvidenceRequest(RequestModel):
    """Новий доказ для гіпотези"""
    likelihood_ratio: LikelihoodRatio
    finding: Optional[str] = None


class TestResultRequest(RequestModel):
    """Результат тесту з відомими чутливістю та специфічністю"""
    __test__ = False

    sensitivity: Probability
    specificity: Probability
    positive: bool
    test_name: Optional[str] = None


class RetireRequest(RequestModel):
    """Виключення або підтвердження гіпотези"""
    outcome: RetireOutcome


class EvidenceResponse(BaseModel):
    likelihood_ratio: ExtendedFloat
    prior_probability: float
    posterior_probability: float
    finding: Optional[str] = None
    recorded_at: datetime

    @classmethod
    def from_record(cls, record: EvidenceRecord) -> "EvidenceResponse":
        return cls(
            likelihood_ratio=record.likelihood_ratio,
            prior_probability=record.prior_probability,
            posterior_probability=record.posterior_probability,
            finding=record.finding,
            recorded_at=record.recorded_at,
        )


class HypothesisResponse(BaseModel):
    """Гіпотеза діагнозу"""
    hypothesis_id: str
    problem_id: str
    diagnosis_id: str
    diagnosis_name: Optional[str] = None
    diagnosis_code: Optional[str] = None
    category: Optional[str] = None
    pretest_probability: float
    current_probability: float
    rank: Optional[int] = None
    status: str
    evidence_strength: str
    supporting_findings: List[str] = []
    refuting_findings: List[str] = []
    evidence: List[EvidenceResponse] = []
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_hypothesis(cls, h: Hypothesis) -> "HypothesisResponse":
        return cls(
            hypothesis_id=h.hypothesis_id,
            problem_id=h.problem_id,
            diagnosis_id=h.diagnosis_id,
            diagnosis_name=h.diagnosis_name,
            diagnosis_code=h.diagnosis_code,
            category=h.category,
            pretest_probability=h.pretest_probability,
            current_probability=h.current_probability,
            rank=h.rank,
            status=h.status.value,
            evidence_strength=h.evidence_strength.value,
            supporting_findings=h.supporting_findings,
            refuting_findings=h.refuting_findings,
            evidence=[EvidenceResponse.from_record(e) for e in h.evidence],
            created_at=h.created_at,
            updated_at=h.updated_at,
        )


class RankedHypothesesResponse(BaseModel):
    """Активні гіпотези проблеми за рангом"""
    problem_id: str
    hypotheses: List[HypothesisResponse]
    total: int


# ============================================================
# Health & errors
# ============================================================

class HealthResponse(BaseModel):
    """Відповідь health check"""
    status: str = "ok"
    version: str
    test_threshold: float
    treatment_threshold: float
    elimination_floor: float


class ErrorResponse(BaseModel):
    """Відповідь з помилкою"""
    error: str
    message: str
    details: Optional[dict] = None
