"""
Dr.Bayes — Сховище ранжованих гіпотез

Єдиний компонент зі станом. Для кожної клінічної проблеми тримає
набір гіпотез, оновлює їх новими доказами та підтримує ранжування
за спаданням поточної ймовірності.

Конкурентність:
    Один writer на проблему. Усі мутації (propose, record_evidence,
    retire) та знімок для list_ranked виконуються під lock-ом проблеми,
    тож читання бачить ранжування або повністю до, або повністю після
    запису. Різні проблеми мають різні lock-и і не конкурують.
"""

import threading
import uuid
from datetime import datetime
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from dr_bayes.bayes.likelihood import TestCharacteristics
from dr_bayes.bayes.odds import validate_probability
from dr_bayes.bayes.tiers import TierRecommendation, recommend_testing_tier
from dr_bayes.bayes.updater import calculate_post_test_probability
from dr_bayes.config.settings import DrBayesConfig
from dr_bayes.utils.exceptions import DomainError, InvalidStateError, NotFoundError
from dr_bayes.utils.logging import get_logger

from .models import EvidenceRecord, Hypothesis, HypothesisStatus
from .repository import HypothesisRepository, InMemoryHypothesisRepository

logger = get_logger(__name__)


class RankedHypotheses:
    """
    Ранжовані активні гіпотези проблеми.

    Знімок береться один раз під lock-ом проблеми; ітерація лінива,
    скінченна і перезапускається (кожен прохід дає ті самі копії
    в тому ж порядку). Зміни сховища після знімка не видно.
    """

    def __init__(self, problem_id: str, snapshot: Tuple[Hypothesis, ...]):
        self.problem_id = problem_id
        self._snapshot = snapshot

    def __iter__(self) -> Iterator[Hypothesis]:
        for hypothesis in self._snapshot:
            yield hypothesis.copy()

    def __len__(self) -> int:
        return len(self._snapshot)

    def __repr__(self) -> str:
        return f"RankedHypotheses(problem={self.problem_id}, n={len(self)})"


def suggest_pretest_probability(config: Optional[DrBayesConfig] = None) -> float:
    """
    Претестова ймовірність за замовчуванням.

    Використовується, коли генератор диференціального діагнозу
    не надав власної оцінки.
    """
    config = config or DrBayesConfig()
    return config.store.default_pretest_probability


class HypothesisStore:
    """
    Сховище гіпотез з ранжуванням.

    Створюється явно та передається залежністю (без глобального стану).

    Приклад:
        store = HypothesisStore()

        tsh = store.propose("problem-1", "E03.9", 0.25, diagnosis_name="Hypothyroidism")
        cbc = store.propose("problem-1", "D50.9", 0.20, diagnosis_name="Anemia")

        store.record_evidence("problem-1", tsh.hypothesis_id, 7.9, finding="TSH elevated")

        for h in store.list_ranked("problem-1"):
            print(h.rank, h.diagnosis_name, f"{h.current_probability:.1%}")

        store.retire(cbc.hypothesis_id, "ruled_out")
    """

    def __init__(
        self,
        repository: Optional[HypothesisRepository] = None,
        config: Optional[DrBayesConfig] = None
    ):
        self.repository = repository or InMemoryHypothesisRepository()
        self.config = config or DrBayesConfig()

        self._problem_locks: Dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    # =========================================================================
    # LOCKS
    # =========================================================================

    def _lock_for(self, problem_id: str, create: bool = False) -> threading.Lock:
        """
        Lock проблеми.

        Новий lock з'являється лише для create=True (шляхи, що створюють
        проблему) або для проблеми, вже наявної в репозиторії.

        Raises:
            NotFoundError: проблема не існує і create=False
        """
        with self._registry_lock:
            lock = self._problem_locks.get(problem_id)
            if lock is None:
                if not create and not self.repository.has_problem(problem_id):
                    raise NotFoundError(f"Problem '{problem_id}' not found", problem_id=problem_id)
                lock = threading.Lock()
                self._problem_locks[problem_id] = lock
            return lock

    # =========================================================================
    # LOOKUPS (викликаються під lock-ом проблеми)
    # =========================================================================

    def _require_problem(self, problem_id: str) -> None:
        if not self.repository.has_problem(problem_id):
            raise NotFoundError(f"Problem '{problem_id}' not found", problem_id=problem_id)

    def _require_hypothesis(self, problem_id: str, hypothesis_id: str) -> Hypothesis:
        self._require_problem(problem_id)
        hypothesis = self.repository.get(hypothesis_id)
        if hypothesis is None or hypothesis.problem_id != problem_id:
            raise NotFoundError(
                f"Hypothesis '{hypothesis_id}' not found in problem '{problem_id}'",
                problem_id=problem_id,
                hypothesis_id=hypothesis_id
            )
        return hypothesis

    def _rerank(self, problem_id: str, changed: Iterable[Hypothesis] = ()) -> List[Hypothesis]:
        """
        Перерахувати ранги всіх гіпотез проблеми та зберегти.

        Активні: rank 1..N за спаданням current_probability,
        при рівності — раніше створена вище. Виключені/підтверджені: rank None.
        """
        by_id = {h.hypothesis_id: h for h in self.repository.list_problem(problem_id)}
        for hypothesis in changed:
            by_id[hypothesis.hypothesis_id] = hypothesis

        active = sorted(
            (h for h in by_id.values() if h.is_active),
            key=lambda h: (-h.current_probability, h.created_seq)
        )
        for rank, hypothesis in enumerate(active, start=1):
            hypothesis.rank = rank
        for hypothesis in by_id.values():
            if not hypothesis.is_active:
                hypothesis.rank = None

        self.repository.save_many(by_id.values())
        return active

    # =========================================================================
    # MUTATIONS
    # =========================================================================

    def register_problem(self, problem_id: str) -> None:
        """Зареєструвати проблему без гіпотез (ідемпотентно)"""
        with self._lock_for(problem_id, create=True):
            self.repository.add_problem(problem_id)

    def propose(
        self,
        problem_id: str,
        diagnosis_id: str,
        pretest_probability: Optional[float] = None,
        diagnosis_name: Optional[str] = None,
        diagnosis_code: Optional[str] = None,
        category: Optional[str] = None
    ) -> Hypothesis:
        """
        Додати гіпотезу-кандидата від генератора диференціального діагнозу.

        Raises:
            DomainError: pretest_probability ∉ [0, 1]
            InvalidStateError: діагноз уже запропоновано для цієї проблеми
        """
        created = self.propose_many(problem_id, [{
            "diagnosis_id": diagnosis_id,
            "pretest_probability": pretest_probability,
            "diagnosis_name": diagnosis_name,
            "diagnosis_code": diagnosis_code,
            "category": category,
        }])
        return created[0]

    def propose_many(
        self,
        problem_id: str,
        candidates: Iterable[Mapping]
    ) -> List[Hypothesis]:
        """
        Додати кілька кандидатів атомарно (всі або жодного).

        Кожен кандидат — mapping з ключами diagnosis_id (обов'язково),
        pretest_probability, diagnosis_name, diagnosis_code, category.
        """
        candidates = list(candidates)

        # Перевірки, що не залежать від стану, до створення lock-а
        prepared = []
        seen = set()
        for index, candidate in enumerate(candidates):
            diagnosis_id = candidate.get("diagnosis_id")
            if not diagnosis_id:
                raise DomainError(
                    f"Candidate #{index} has no diagnosis_id",
                    parameter="diagnosis_id",
                    value=diagnosis_id
                )
            if diagnosis_id in seen:
                raise InvalidStateError(
                    f"Diagnosis '{diagnosis_id}' proposed twice for problem '{problem_id}'",
                    problem_id=problem_id,
                    details={"diagnosis_id": diagnosis_id}
                )
            seen.add(diagnosis_id)

            pretest = candidate.get("pretest_probability")
            if pretest is None:
                pretest = suggest_pretest_probability(self.config)
            pretest = validate_probability(pretest, "pretest_probability")
            prepared.append((candidate, diagnosis_id, pretest))

        with self._lock_for(problem_id, create=True):
            existing = {h.diagnosis_id for h in self.repository.list_problem(problem_id)}
            for _, diagnosis_id, _ in prepared:
                if diagnosis_id in existing:
                    raise InvalidStateError(
                        f"Diagnosis '{diagnosis_id}' already proposed for problem '{problem_id}'",
                        problem_id=problem_id,
                        details={"diagnosis_id": diagnosis_id}
                    )

            self.repository.add_problem(problem_id)

            now = datetime.now()
            created = []
            for candidate, diagnosis_id, pretest in prepared:
                created.append(Hypothesis(
                    hypothesis_id=uuid.uuid4().hex[:12],
                    problem_id=problem_id,
                    diagnosis_id=diagnosis_id,
                    pretest_probability=pretest,
                    current_probability=pretest,
                    diagnosis_name=candidate.get("diagnosis_name"),
                    diagnosis_code=candidate.get("diagnosis_code"),
                    category=candidate.get("category"),
                    created_seq=self.repository.next_sequence(),
                    created_at=now,
                    updated_at=now,
                ))

            self._rerank(problem_id, created)

            for hypothesis in created:
                logger.info(
                    f"Proposed {hypothesis.diagnosis_id} for problem {problem_id} "
                    f"(pretest={hypothesis.pretest_probability:.3f})"
                )
            return [self.repository.get(h.hypothesis_id) for h in created]

    def record_evidence(
        self,
        problem_id: str,
        hypothesis_id: str,
        likelihood_ratio: float,
        finding: Optional[str] = None
    ) -> Hypothesis:
        """
        Застосувати новий доказ до гіпотези та переранжувати проблему.

        Якщо нова ймовірність нижче elimination_floor, гіпотеза
        автоматично переходить у RULED_OUT.

        Raises:
            NotFoundError: проблема/гіпотеза не існує
            InvalidStateError: гіпотеза вже виключена або підтверджена
            DomainError: LR < 0 або невизначене оновлення (з контекстом)
        """
        with self._lock_for(problem_id):
            hypothesis = self._require_hypothesis(problem_id, hypothesis_id)

            if hypothesis.status.is_terminal:
                raise InvalidStateError(
                    f"Hypothesis '{hypothesis_id}' is already {hypothesis.status.value}",
                    problem_id=problem_id,
                    hypothesis_id=hypothesis_id
                )

            try:
                calculation = calculate_post_test_probability(
                    hypothesis.current_probability, likelihood_ratio
                )
            except DomainError as e:
                raise DomainError(
                    f"Cannot apply evidence to hypothesis '{hypothesis_id}' "
                    f"of problem '{problem_id}': {e.message}",
                    details={**e.details, "problem_id": problem_id, "hypothesis_id": hypothesis_id}
                ) from e

            now = datetime.now()
            hypothesis.evidence.append(EvidenceRecord(
                likelihood_ratio=calculation.likelihood_ratio,
                prior_probability=calculation.pretest_probability,
                posterior_probability=calculation.posttest_probability,
                finding=finding,
                recorded_at=now,
            ))
            hypothesis.current_probability = calculation.posttest_probability
            hypothesis.updated_at = now

            logger.debug(
                f"Evidence for {hypothesis_id}: {calculation.pretest_probability:.4f} "
                f"× LR {calculation.likelihood_ratio} → {calculation.posttest_probability:.4f}"
            )

            floor = self.config.store.elimination_floor
            if hypothesis.current_probability < floor:
                hypothesis.status = HypothesisStatus.RULED_OUT
                logger.info(
                    f"Hypothesis {hypothesis_id} ({hypothesis.diagnosis_id}) ruled out: "
                    f"{hypothesis.current_probability:.4f} < floor {floor}"
                )

            self._rerank(problem_id, [hypothesis])
            return self.repository.get(hypothesis_id)

    def record_test_result(
        self,
        problem_id: str,
        hypothesis_id: str,
        test: TestCharacteristics,
        positive: bool
    ) -> Hypothesis:
        """Записати результат тесту: LR+ для позитивного, LR− для негативного"""
        ratios = test.likelihood_ratios()
        label = test.name or "test"
        finding = f"{label} {'positive' if positive else 'negative'}"
        return self.record_evidence(
            problem_id, hypothesis_id, ratios.for_result(positive), finding=finding
        )

    def retire(
        self,
        hypothesis_id: str,
        outcome: Union[HypothesisStatus, str]
    ) -> Hypothesis:
        """
        Незворотно перевести гіпотезу в RULED_OUT або CONFIRMED.

        Raises:
            DomainError: outcome не ruled_out/confirmed
            NotFoundError: гіпотеза не існує
            InvalidStateError: гіпотеза вже в термінальному стані
        """
        try:
            outcome = HypothesisStatus(outcome)
        except ValueError as e:
            raise DomainError(
                f"Outcome must be 'ruled_out' or 'confirmed', got {outcome!r}",
                parameter="outcome",
                value=outcome
            ) from e
        if not outcome.is_terminal:
            raise DomainError(
                "Outcome must be 'ruled_out' or 'confirmed'",
                parameter="outcome",
                value=outcome.value
            )

        located = self.repository.get(hypothesis_id)
        if located is None:
            raise NotFoundError(
                f"Hypothesis '{hypothesis_id}' not found",
                hypothesis_id=hypothesis_id
            )
        problem_id = located.problem_id

        with self._lock_for(problem_id):
            hypothesis = self._require_hypothesis(problem_id, hypothesis_id)

            if hypothesis.status.is_terminal:
                raise InvalidStateError(
                    f"Hypothesis '{hypothesis_id}' is already {hypothesis.status.value}",
                    problem_id=problem_id,
                    hypothesis_id=hypothesis_id
                )

            hypothesis.status = outcome
            hypothesis.updated_at = datetime.now()
            self._rerank(problem_id, [hypothesis])

            logger.info(
                f"Hypothesis {hypothesis_id} ({hypothesis.diagnosis_id}) retired as {outcome.value}"
            )
            return self.repository.get(hypothesis_id)

    # =========================================================================
    # READS
    # =========================================================================

    def list_ranked(self, problem_id: str) -> RankedHypotheses:
        """
        Активні гіпотези проблеми в порядку рангу.

        Raises:
            NotFoundError: проблема не існує
        """
        with self._lock_for(problem_id):
            self._require_problem(problem_id)
            active = [h for h in self.repository.list_problem(problem_id) if h.is_active]

        active.sort(key=lambda h: h.rank)
        return RankedHypotheses(problem_id, tuple(active))

    def list_all(self, problem_id: str) -> List[Hypothesis]:
        """Всі гіпотези проблеми, включно з виключеними, за порядком створення"""
        with self._lock_for(problem_id):
            self._require_problem(problem_id)
            hypotheses = self.repository.list_problem(problem_id)
        return sorted(hypotheses, key=lambda h: h.created_seq)

    def get(self, hypothesis_id: str) -> Hypothesis:
        """Копія гіпотези"""
        located = self.repository.get(hypothesis_id)
        if located is None:
            raise NotFoundError(
                f"Hypothesis '{hypothesis_id}' not found",
                hypothesis_id=hypothesis_id
            )
        with self._lock_for(located.problem_id):
            return self._require_hypothesis(located.problem_id, hypothesis_id)

    def recommend(self, problem_id: str, hypothesis_id: str) -> TierRecommendation:
        """Рівень дій для поточної ймовірності гіпотези"""
        with self._lock_for(problem_id):
            hypothesis = self._require_hypothesis(problem_id, hypothesis_id)
        return recommend_testing_tier(hypothesis.current_probability, self.config.thresholds)

    def __repr__(self) -> str:
        return f"HypothesisStore(repository={type(self.repository).__name__})"
