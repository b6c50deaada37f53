"""
Dr.Bayes — Bayes Calculator Routes

Чисті обчислення без стану: оновлення ймовірності, LR,
план обох результатів, рівень дій, обґрунтування тесту.

Помилки домену (DomainError) перетворюються на 400 глобальним
обробником у app.py.
"""

from fastapi import APIRouter, Depends

from dr_bayes.bayes import (
    calculate_post_test_probability,
    derive_likelihood_ratios,
    resolve_likelihood_ratios,
    plan_both_outcomes,
    plan_from_test_characteristics,
    recommend_testing_tier,
    generate_test_rationale,
)
from dr_bayes.config import DrBayesConfig

from ..dependencies import get_config
from ..models import (
    CalculateRequest,
    CalculateResponse,
    CalculateBothRequest,
    LikelihoodRatiosRequest,
    LikelihoodRatiosResponse,
    SensSpecPlanRequest,
    OutcomePlanResponse,
    RecommendTierRequest,
    TierResponse,
    TestRationaleRequest,
    TestRationaleResponse,
)

router = APIRouter(prefix="/bayes", tags=["Bayes"])


@router.post("/calculate", response_model=CalculateResponse)
async def calculate(request: CalculateRequest) -> CalculateResponse:
    """
    Одне баєсове оновлення: претестова ймовірність × LR → посттестова.

    Приклад:
    ```json
    {"pretest_probability": 0.30, "likelihood_ratio": 10}
    ```
    """
    calculation = calculate_post_test_probability(
        request.pretest_probability, request.likelihood_ratio
    )
    return CalculateResponse.from_calculation(calculation)


@router.post("/calculate-both", response_model=OutcomePlanResponse)
async def calculate_both(
    request: CalculateBothRequest,
    config: DrBayesConfig = Depends(get_config)
) -> OutcomePlanResponse:
    """Куди зміститься ймовірність при позитивному та негативному результаті"""
    plan = plan_both_outcomes(request.pretest_probability, request.lr_positive, request.lr_negative)
    return OutcomePlanResponse.from_plan(plan, plan.crosses_threshold(config.thresholds))


@router.post("/likelihood-ratios", response_model=LikelihoodRatiosResponse)
async def likelihood_ratios(request: LikelihoodRatiosRequest) -> LikelihoodRatiosResponse:
    """
    LR+ = sens / (1 − spec), LR− = (1 − sens) / spec.

    specificity = 0 → 400; specificity = 1 → LR+ = "Infinity".
    """
    ratios = derive_likelihood_ratios(request.sensitivity, request.specificity)
    return LikelihoodRatiosResponse.from_ratios(ratios)


@router.post("/from-sens-spec", response_model=OutcomePlanResponse)
async def from_sens_spec(
    request: SensSpecPlanRequest,
    config: DrBayesConfig = Depends(get_config)
) -> OutcomePlanResponse:
    """План обох результатів за чутливістю та специфічністю тесту"""
    plan = plan_from_test_characteristics(
        request.pretest_probability, request.sensitivity, request.specificity
    )
    return OutcomePlanResponse.from_plan(plan, plan.crosses_threshold(config.thresholds))


@router.post("/recommend-tier", response_model=TierResponse)
async def recommend_tier(
    request: RecommendTierRequest,
    config: DrBayesConfig = Depends(get_config)
) -> TierResponse:
    """Рівень дій за порогами тестування та лікування"""
    recommendation = recommend_testing_tier(request.current_probability, config.thresholds)
    return TierResponse.from_recommendation(recommendation)


@router.post("/test-rationale", response_model=TestRationaleResponse)
async def test_rationale(
    request: TestRationaleRequest,
    config: DrBayesConfig = Depends(get_config)
) -> TestRationaleResponse:
    """Текстове обґрунтування тесту для клініциста"""
    ratios = resolve_likelihood_ratios(
        lr_positive=request.lr_positive,
        lr_negative=request.lr_negative,
        sensitivity=request.sensitivity,
        specificity=request.specificity,
    )
    plan = plan_both_outcomes(request.pretest_probability, ratios.positive, ratios.negative)

    return TestRationaleResponse(
        rationale=generate_test_rationale(request.hypothesis_name, request.test_name, plan),
        plan=OutcomePlanResponse.from_plan(plan, plan.crosses_threshold(config.thresholds)),
    )
