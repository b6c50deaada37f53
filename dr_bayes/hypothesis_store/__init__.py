"""
Dr.Bayes — Сховище гіпотез

Модулі:
- models: Hypothesis, HypothesisStatus, EvidenceRecord, EvidenceStrength
- repository: інтерфейс шару збереження + реалізація в пам'яті
- store: HypothesisStore (ранжування, докази, виключення)

Приклад використання:
    from dr_bayes.hypothesis_store import HypothesisStore

    store = HypothesisStore()
    h = store.propose("problem-1", "E03.9", 0.25, diagnosis_name="Hypothyroidism")
    store.record_evidence("problem-1", h.hypothesis_id, likelihood_ratio=7.9)

    top = next(iter(store.list_ranked("problem-1")))
    print(f"{top.diagnosis_name}: {top.current_probability:.1%}")
"""

from .models import (
    HypothesisStatus,
    EvidenceStrength,
    EvidenceRecord,
    Hypothesis,
)

from .repository import (
    HypothesisRepository,
    InMemoryHypothesisRepository,
)

from .store import (
    RankedHypotheses,
    HypothesisStore,
    suggest_pretest_probability,
)


__all__ = [
    'HypothesisStatus',
    'EvidenceStrength',
    'EvidenceRecord',
    'Hypothesis',
    'HypothesisRepository',
    'InMemoryHypothesisRepository',
    'RankedHypotheses',
    'HypothesisStore',
    'suggest_pretest_probability',
]
