"""
Dr.Bayes — Моделі гіпотез

Hypothesis належить HypothesisStore конкретної клінічної проблеми.
Стан: active → {active (оновлення ймовірності), ruled_out, confirmed}.
"""

import math
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional


class HypothesisStatus(str, Enum):
    """Статус гіпотези"""
    ACTIVE = "active"
    RULED_OUT = "ruled_out"
    CONFIRMED = "confirmed"

    @property
    def is_terminal(self) -> bool:
        return self is not HypothesisStatus.ACTIVE


class EvidenceStrength(str, Enum):
    """Сукупна сила доказів для гіпотези"""
    DEFINITIVE = "definitive"   # підтверджено
    STRONG = "strong"           # сукупний LR ≥ 10
    MODERATE = "moderate"       # сукупний LR ≥ 2
    WEAK = "weak"               # 1 ≤ LR < 2
    AGAINST = "against"         # LR < 1 або виключено


STRONG_EVIDENCE_LR = 10.0
MODERATE_EVIDENCE_LR = 2.0


@dataclass(frozen=True)
class EvidenceRecord:
    """Один застосований доказ"""
    likelihood_ratio: float
    prior_probability: float
    posterior_probability: float
    finding: Optional[str] = None
    recorded_at: datetime = field(default_factory=datetime.now)

    @property
    def supports(self) -> bool:
        return self.likelihood_ratio > 1.0

    @property
    def refutes(self) -> bool:
        return self.likelihood_ratio < 1.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "likelihood_ratio": self.likelihood_ratio,
            "prior_probability": self.prior_probability,
            "posterior_probability": self.posterior_probability,
            "finding": self.finding,
            "recorded_at": self.recorded_at.isoformat(),
        }


@dataclass
class Hypothesis:
    """
    Гіпотеза діагнозу для клінічної проблеми.

    Створюється зі станом ACTIVE та current_probability = pretest_probability.
    Змінюється лише через record_evidence / retire у HypothesisStore.
    """
    hypothesis_id: str
    problem_id: str
    diagnosis_id: str
    pretest_probability: float
    current_probability: float

    # Від генератора диференціального діагнозу
    diagnosis_name: Optional[str] = None
    diagnosis_code: Optional[str] = None
    category: Optional[str] = None

    rank: Optional[int] = None
    status: HypothesisStatus = HypothesisStatus.ACTIVE

    # Порядок створення (для стабільного ранжування при рівних ймовірностях)
    created_seq: int = 0
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    evidence: List[EvidenceRecord] = field(default_factory=list)

    @property
    def is_active(self) -> bool:
        return self.status is HypothesisStatus.ACTIVE

    @property
    def change(self) -> float:
        """Зміна від претестової ймовірності"""
        return self.current_probability - self.pretest_probability

    @property
    def cumulative_likelihood_ratio(self) -> float:
        """Добуток усіх застосованих LR (1.0 без доказів)"""
        return math.prod(e.likelihood_ratio for e in self.evidence)

    @property
    def evidence_strength(self) -> EvidenceStrength:
        if self.status is HypothesisStatus.CONFIRMED:
            return EvidenceStrength.DEFINITIVE
        if self.status is HypothesisStatus.RULED_OUT:
            return EvidenceStrength.AGAINST

        lr = self.cumulative_likelihood_ratio
        if lr < 1.0:
            return EvidenceStrength.AGAINST
        elif lr >= STRONG_EVIDENCE_LR:
            return EvidenceStrength.STRONG
        elif lr >= MODERATE_EVIDENCE_LR:
            return EvidenceStrength.MODERATE
        else:
            return EvidenceStrength.WEAK

    @property
    def supporting_findings(self) -> List[str]:
        return [e.finding for e in self.evidence if e.supports and e.finding]

    @property
    def refuting_findings(self) -> List[str]:
        return [e.finding for e in self.evidence if e.refutes and e.finding]

    def copy(self) -> "Hypothesis":
        """Копія, незалежна від стану сховища"""
        return replace(self, evidence=list(self.evidence))

    def to_dict(self) -> Dict[str, Any]:
        """Конвертувати в словник для API"""
        return {
            "hypothesis_id": self.hypothesis_id,
            "problem_id": self.problem_id,
            "diagnosis_id": self.diagnosis_id,
            "diagnosis_name": self.diagnosis_name,
            "diagnosis_code": self.diagnosis_code,
            "category": self.category,
            "pretest_probability": self.pretest_probability,
            "current_probability": self.current_probability,
            "rank": self.rank,
            "status": self.status.value,
            "evidence_strength": self.evidence_strength.value,
            "supporting_findings": self.supporting_findings,
            "refuting_findings": self.refuting_findings,
            "evidence": [e.to_dict() for e in self.evidence],
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    def __repr__(self) -> str:
        return (
            f"Hypothesis("
            f"id={self.hypothesis_id}, "
            f"diagnosis={self.diagnosis_id}, "
            f"p={self.current_probability:.4f}, "
            f"rank={self.rank}, "
            f"status={self.status.value})"
        )
