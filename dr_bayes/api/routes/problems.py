"""
Dr.Bayes — Problem & Hypothesis Routes

Endpoints для гіпотез клінічних проблем: пропозиція, докази,
ранжування, виключення/підтвердження та рекомендація рівня дій.

Обробники синхронні: FastAPI виконує їх у пулі потоків, а
HypothesisStore серіалізує записи lock-ом проблеми.
"""

from typing import List

from fastapi import APIRouter, Depends

from dr_bayes.bayes import TestCharacteristics
from dr_bayes.hypothesis_store import HypothesisStore

from ..dependencies import get_store
from ..models import (
    ProposeRequest,
    ProposeBatchRequest,
    EvidenceRequest,
    TestResultRequest,
    RetireRequest,
    HypothesisResponse,
    RankedHypothesesResponse,
    TierResponse,
    ErrorResponse,
)

router = APIRouter(tags=["Hypotheses"])

_errors = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
}


@router.post(
    "/problems/{problem_id}/hypotheses",
    response_model=HypothesisResponse,
    status_code=201,
    responses=_errors,
)
def propose_hypothesis(
    problem_id: str,
    request: ProposeRequest,
    store: HypothesisStore = Depends(get_store)
) -> HypothesisResponse:
    """
    Додати гіпотезу-кандидата.

    Без pretest_probability використовується значення за замовчуванням
    (store.default_pretest_probability).
    """
    hypothesis = store.propose(
        problem_id,
        request.diagnosis_id,
        request.pretest_probability,
        diagnosis_name=request.diagnosis_name,
        diagnosis_code=request.diagnosis_code,
        category=request.category,
    )
    return HypothesisResponse.from_hypothesis(hypothesis)


@router.post(
    "/problems/{problem_id}/hypotheses/batch",
    response_model=List[HypothesisResponse],
    status_code=201,
    responses=_errors,
)
def propose_hypotheses(
    problem_id: str,
    request: ProposeBatchRequest,
    store: HypothesisStore = Depends(get_store)
) -> List[HypothesisResponse]:
    """Додати диференціальний діагноз цілком (всі або жодного)"""
    created = store.propose_many(
        problem_id, [candidate.model_dump() for candidate in request.candidates]
    )
    return [HypothesisResponse.from_hypothesis(h) for h in created]


@router.get(
    "/problems/{problem_id}/hypotheses",
    response_model=RankedHypothesesResponse,
    responses=_errors,
)
def list_hypotheses(
    problem_id: str,
    store: HypothesisStore = Depends(get_store)
) -> RankedHypothesesResponse:
    """Активні гіпотези проблеми за спаданням поточної ймовірності"""
    ranked = store.list_ranked(problem_id)
    hypotheses = [HypothesisResponse.from_hypothesis(h) for h in ranked]
    return RankedHypothesesResponse(
        problem_id=problem_id,
        hypotheses=hypotheses,
        total=len(hypotheses),
    )


@router.post(
    "/problems/{problem_id}/hypotheses/{hypothesis_id}/evidence",
    response_model=HypothesisResponse,
    responses=_errors,
)
def record_evidence(
    problem_id: str,
    hypothesis_id: str,
    request: EvidenceRequest,
    store: HypothesisStore = Depends(get_store)
) -> HypothesisResponse:
    """Застосувати новий доказ (LR) до гіпотези"""
    hypothesis = store.record_evidence(
        problem_id, hypothesis_id, request.likelihood_ratio, finding=request.finding
    )
    return HypothesisResponse.from_hypothesis(hypothesis)


@router.post(
    "/problems/{problem_id}/hypotheses/{hypothesis_id}/test-result",
    response_model=HypothesisResponse,
    responses=_errors,
)
def record_test_result(
    problem_id: str,
    hypothesis_id: str,
    request: TestResultRequest,
    store: HypothesisStore = Depends(get_store)
) -> HypothesisResponse:
    """Записати результат тесту з відомими чутливістю та специфічністю"""
    test = TestCharacteristics(
        sensitivity=request.sensitivity,
        specificity=request.specificity,
        name=request.test_name,
    )
    hypothesis = store.record_test_result(problem_id, hypothesis_id, test, request.positive)
    return HypothesisResponse.from_hypothesis(hypothesis)


@router.get(
    "/problems/{problem_id}/hypotheses/{hypothesis_id}/recommendation",
    response_model=TierResponse,
    responses=_errors,
)
def recommend(
    problem_id: str,
    hypothesis_id: str,
    store: HypothesisStore = Depends(get_store)
) -> TierResponse:
    """Рівень дій для поточної ймовірності гіпотези"""
    return TierResponse.from_recommendation(store.recommend(problem_id, hypothesis_id))


@router.get(
    "/hypotheses/{hypothesis_id}",
    response_model=HypothesisResponse,
    responses=_errors,
)
def get_hypothesis(
    hypothesis_id: str,
    store: HypothesisStore = Depends(get_store)
) -> HypothesisResponse:
    """Гіпотеза за ідентифікатором, разом з історією доказів"""
    return HypothesisResponse.from_hypothesis(store.get(hypothesis_id))


@router.post(
    "/hypotheses/{hypothesis_id}/retire",
    response_model=HypothesisResponse,
    responses=_errors,
)
def retire_hypothesis(
    hypothesis_id: str,
    request: RetireRequest,
    store: HypothesisStore = Depends(get_store)
) -> HypothesisResponse:
    """Незворотно виключити або підтвердити гіпотезу"""
    hypothesis = store.retire(hypothesis_id, request.outcome.value)
    return HypothesisResponse.from_hypothesis(hypothesis)
