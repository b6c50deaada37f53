"""
Dr.Bayes — Шар збереження гіпотез

HypothesisStore працює через логічні читання/записи до репозиторію.
Формат збереження (таблиця, файл) — справа реалізації репозиторію.
За замовчуванням використовується InMemoryHypothesisRepository.
"""

import threading
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional

from .models import Hypothesis


class HypothesisRepository(ABC):
    """Інтерфейс зовнішнього шару збереження"""

    @abstractmethod
    def has_problem(self, problem_id: str) -> bool:
        ...

    @abstractmethod
    def add_problem(self, problem_id: str) -> None:
        ...

    @abstractmethod
    def list_problem(self, problem_id: str) -> List[Hypothesis]:
        """Всі гіпотези проблеми (будь-який статус)"""

    @abstractmethod
    def get(self, hypothesis_id: str) -> Optional[Hypothesis]:
        ...

    @abstractmethod
    def save(self, hypothesis: Hypothesis) -> None:
        ...

    def save_many(self, hypotheses: Iterable[Hypothesis]) -> None:
        for hypothesis in hypotheses:
            self.save(hypothesis)

    @abstractmethod
    def next_sequence(self) -> int:
        """Монотонний лічильник порядку створення"""


class InMemoryHypothesisRepository(HypothesisRepository):
    """
    Репозиторій у пам'яті.

    Зберігає копії, тож зовнішні зміни об'єктів не впливають на стан.
    Власний lock захищає лише структуру словників; узгодженість
    ранжування забезпечує HypothesisStore.
    """

    def __init__(self):
        self._hypotheses: Dict[str, Hypothesis] = {}
        self._by_problem: Dict[str, List[str]] = {}
        self._sequence = 0
        self._lock = threading.Lock()

    def has_problem(self, problem_id: str) -> bool:
        with self._lock:
            return problem_id in self._by_problem

    def add_problem(self, problem_id: str) -> None:
        with self._lock:
            self._by_problem.setdefault(problem_id, [])

    def list_problem(self, problem_id: str) -> List[Hypothesis]:
        with self._lock:
            ids = list(self._by_problem.get(problem_id, []))
            return [self._hypotheses[hid].copy() for hid in ids]

    def get(self, hypothesis_id: str) -> Optional[Hypothesis]:
        with self._lock:
            hypothesis = self._hypotheses.get(hypothesis_id)
            return hypothesis.copy() if hypothesis else None

    def save(self, hypothesis: Hypothesis) -> None:
        with self._lock:
            if hypothesis.hypothesis_id not in self._hypotheses:
                self._by_problem.setdefault(hypothesis.problem_id, []).append(
                    hypothesis.hypothesis_id
                )
            self._hypotheses[hypothesis.hypothesis_id] = hypothesis.copy()

    def next_sequence(self) -> int:
        with self._lock:
            self._sequence += 1
            return self._sequence

    @property
    def n_problems(self) -> int:
        return len(self._by_problem)

    @property
    def n_hypotheses(self) -> int:
        return len(self._hypotheses)
