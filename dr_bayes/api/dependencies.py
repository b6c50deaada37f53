"""
Dr.Bayes — API Dependencies

Dependency Injection для FastAPI.

Сховище гіпотез та конфігурація створюються в create_app() і
живуть у app.state, тож кожен екземпляр додатку (і кожен тест)
має власний стан.
"""

from fastapi import Request

from dr_bayes.config import DrBayesConfig
from dr_bayes.hypothesis_store import HypothesisStore


def get_store(request: Request) -> HypothesisStore:
    """Dependency для сховища гіпотез"""
    return request.app.state.store


def get_config(request: Request) -> DrBayesConfig:
    """Dependency для конфігурації рушія"""
    return request.app.state.config
