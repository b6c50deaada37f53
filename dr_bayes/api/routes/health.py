"""
Dr.Bayes — Health Routes

Health check та інформація про систему.
"""

from fastapi import APIRouter, Depends

from dr_bayes import __version__
from dr_bayes.config import DrBayesConfig

from ..dependencies import get_config
from ..models import HealthResponse

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(config: DrBayesConfig = Depends(get_config)) -> HealthResponse:
    """
    Перевірка стану сервера.

    Повертає версію та активні пороги рушія.
    """
    return HealthResponse(
        status="ok",
        version=__version__,
        test_threshold=config.thresholds.test_threshold,
        treatment_threshold=config.thresholds.treatment_threshold,
        elimination_floor=config.store.elimination_floor,
    )


@router.get("/")
async def root():
    """Головна сторінка API"""
    return {
        "name": "Dr.Bayes API",
        "version": __version__,
        "description": "Послідовний баєсовий рушій діагностичних ймовірностей",
        "docs": "/docs",
        "health": "/health",
    }
