"""
Dr.Bayes — Баєсове ядро

Чисті функції без стану, безпечні для паралельних викликів:
- odds: ймовірність ⇄ шанси (p = 1 ↔ +∞)
- likelihood: LR+ / LR− з чутливості та специфічності
- updater: одне та послідовне баєсове оновлення
- planner: план обох результатів тесту до його призначення
- tiers: рівень клінічних дій за порогами тестування/лікування

Приклад використання:
    from dr_bayes.bayes import (
        update_probability, plan_from_test_characteristics, recommend_testing_tier
    )

    posterior = update_probability(0.30, 10.0)           # ≈ 0.8108
    plan = plan_from_test_characteristics(0.30, 0.85, 0.90)
    recommendation = recommend_testing_tier(plan.posttest_if_positive)
    print(recommendation.tier.value, recommendation.rationale)
"""

from .odds import (
    INFINITE_ODDS,
    MAX_FINITE_PROBABILITY,
    probability_to_odds,
    odds_to_probability,
    is_certain,
    validate_probability,
    validate_non_negative,
)

from .likelihood import (
    LikelihoodRatios,
    TestCharacteristics,
    LRInterpretation,
    derive_likelihood_ratios,
    resolve_likelihood_ratios,
    interpret_likelihood_ratio,
)

from .updater import (
    BayesianCalculation,
    calculate_post_test_probability,
    update_probability,
    update_with_sequential_evidence,
)

from .tiers import (
    ActionTier,
    TierRecommendation,
    recommend_tier,
    recommend_testing_tier,
)

from .planner import (
    DiagnosticValue,
    OutcomePlan,
    plan_both_outcomes,
    plan_from_test_characteristics,
    generate_test_rationale,
)


__all__ = [
    # Odds
    'INFINITE_ODDS',
    'MAX_FINITE_PROBABILITY',
    'probability_to_odds',
    'odds_to_probability',
    'is_certain',
    'validate_probability',
    'validate_non_negative',

    # Likelihood ratios
    'LikelihoodRatios',
    'TestCharacteristics',
    'LRInterpretation',
    'derive_likelihood_ratios',
    'resolve_likelihood_ratios',
    'interpret_likelihood_ratio',

    # Updater
    'BayesianCalculation',
    'calculate_post_test_probability',
    'update_probability',
    'update_with_sequential_evidence',

    # Tiers
    'ActionTier',
    'TierRecommendation',
    'recommend_tier',
    'recommend_testing_tier',

    # Planner
    'DiagnosticValue',
    'OutcomePlan',
    'plan_both_outcomes',
    'plan_from_test_characteristics',
    'generate_test_rationale',
]
