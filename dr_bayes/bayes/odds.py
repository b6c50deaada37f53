"""
Dr.Bayes — Конвертер ймовірність ⇄ шанси

odds = p / (1 - p),  p = odds / (1 + odds)

Межа p = 1 відповідає odds = +∞ (math.inf). Це очікувана межа,
а не помилка: inf == inf, inf більше за будь-яке скінченне число,
odds_to_probability(inf) == 1.0 точно.

Скінченні шанси ніколи не дають рівно 1.0: результат обмежено
найбільшим float, меншим за 1. Впевненість виникає лише з +∞.
"""

import math
from numbers import Real

from dr_bayes.utils.exceptions import DomainError


INFINITE_ODDS = math.inf

# найбільша ймовірність, досяжна зі скінченних шансів
MAX_FINITE_PROBABILITY = math.nextafter(1.0, 0.0)


def _as_float(value, name: str) -> float:
    # bool є підкласом int, але як ймовірність це завжди помилка виклику
    if isinstance(value, bool) or not isinstance(value, Real):
        raise DomainError(
            f"{name} must be a real number, got {type(value).__name__}",
            parameter=name,
            value=value
        )
    value = float(value)
    if math.isnan(value):
        raise DomainError(f"{name} must not be NaN", parameter=name, value=value)
    return value


def validate_probability(value, name: str = "probability") -> float:
    """Перевірити, що значення лежить у [0, 1]. Повертає float."""
    value = _as_float(value, name)
    if not 0.0 <= value <= 1.0:
        raise DomainError(
            f"{name} must be between 0 and 1, got {value}",
            parameter=name,
            value=value
        )
    return value


def validate_non_negative(value, name: str) -> float:
    """Перевірити, що значення ≥ 0 (допускається +∞)."""
    value = _as_float(value, name)
    if value < 0.0:
        raise DomainError(
            f"{name} must be non-negative, got {value}",
            parameter=name,
            value=value
        )
    return value


def is_certain(odds: float) -> bool:
    """Чи це sentinel +∞ (повна впевненість)"""
    return math.isinf(odds) and odds > 0


def probability_to_odds(p) -> float:
    """
    Ймовірність → шанси.

    Raises:
        DomainError: p ∉ [0, 1]
    """
    p = validate_probability(p, "probability")
    if p == 1.0:
        return INFINITE_ODDS
    return p / (1.0 - p)


def odds_to_probability(odds) -> float:
    """
    Шанси → ймовірність.

    Raises:
        DomainError: odds < 0
    """
    odds = validate_non_negative(odds, "odds")
    if is_certain(odds):
        return 1.0
    return min(MAX_FINITE_PROBABILITY, odds / (1.0 + odds))
