"""
Dr.Bayes — API Routes

Експорт всіх роутерів.
"""

from .health import router as health_router
from .bayes import router as bayes_router
from .problems import router as problems_router

__all__ = [
    'health_router',
    'bayes_router',
    'problems_router',
]
