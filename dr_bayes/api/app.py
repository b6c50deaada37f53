"""
Dr.Bayes — FastAPI Application

Головний файл FastAPI додатку.

Запуск:
    uvicorn dr_bayes.api.app:app --reload --host 0.0.0.0 --port 8000

    або:

    python scripts/run_api.py

Для тестів створюйте окремий екземпляр:
    app = create_app(config=DrBayesConfig(), store=HypothesisStore())
"""

import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dr_bayes import __version__
from dr_bayes.config import DrBayesConfig, config_from_env
from dr_bayes.hypothesis_store import HypothesisStore
from dr_bayes.utils import (
    ConfigurationError,
    DomainError,
    DrBayesError,
    InvalidStateError,
    NotFoundError,
    get_logger,
    setup_logging,
)

from .config import APIConfig
from .routes import health_router, bayes_router, problems_router

logger = get_logger(__name__)


def error_status(exc: DrBayesError) -> int:
    """HTTP статус для помилки ядра"""
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, InvalidStateError):
        return 409
    if isinstance(exc, (DomainError, ConfigurationError)):
        return 400
    return 500


def _validation_errors(exc: RequestValidationError):
    return [
        {
            "loc": [str(part) for part in error.get("loc", ())],
            "msg": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in exc.errors()
    ]


def create_app(
    config: Optional[DrBayesConfig] = None,
    api_config: Optional[APIConfig] = None,
    store: Optional[HypothesisStore] = None
) -> FastAPI:
    """
    Створити FastAPI додаток.

    Args:
        config: Пороги та налаштування сховища (за замовчуванням з env)
        api_config: Налаштування сервера (за замовчуванням з env)
        store: Сховище гіпотез (за замовчуванням нове, в пам'яті)
    """
    api_config = api_config or APIConfig.from_env()
    config = config or config_from_env()
    store = store or HypothesisStore(config=config)

    setup_logging(level=api_config.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifecycle manager"""
        logger.info("=" * 60)
        logger.info(f"Dr.Bayes API {__version__} starting")
        logger.info(
            f"Thresholds: test={config.thresholds.test_threshold}, "
            f"treatment={config.thresholds.treatment_threshold}, "
            f"elimination_floor={config.store.elimination_floor}"
        )
        logger.info(f"Swagger UI: http://{api_config.host}:{api_config.port}/docs")
        logger.info("=" * 60)

        yield

        logger.info("Dr.Bayes API stopping")

    app = FastAPI(
        title=api_config.api_title,
        description=api_config.api_description,
        version=api_config.api_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.state.config = config
    app.state.api_config = api_config
    app.state.store = store

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=api_config.cors_origins,
        allow_credentials=api_config.cors_allow_credentials,
        allow_methods=api_config.cors_allow_methods,
        allow_headers=api_config.cors_allow_headers,
    )

    # Middleware для логування запитів
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.time()

        response = await call_next(request)

        process_time = time.time() - start_time

        # Логуємо тільки API запити
        if request.url.path.startswith(api_config.api_prefix):
            logger.info(
                f"{request.method} {request.url.path} → {response.status_code} "
                f"({process_time * 1000:.1f}ms)"
            )

        return response

    # Відсутнє поле, не-число, ймовірність поза [0, 1] → 400, не 422
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = _validation_errors(exc)
        logger.warning(f"Validation error on {request.url.path}: {errors}")
        return JSONResponse(
            status_code=400,
            content={
                "error": "VALIDATION_ERROR",
                "message": "Request validation failed",
                "details": {"errors": errors},
            }
        )

    @app.exception_handler(DrBayesError)
    async def dr_bayes_exception_handler(request: Request, exc: DrBayesError):
        status_code = error_status(exc)
        logger.warning(f"{exc.code} on {request.url.path}: {exc.message}")
        return JSONResponse(status_code=status_code, content=exc.to_dict())

    # Глобальний обробник помилок
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={
                "error": "INTERNAL_ERROR",
                "message": "Internal server error",
                "details": {"detail": str(exc)} if api_config.debug else None,
            }
        )

    # Підключаємо роутери
    app.include_router(health_router)
    app.include_router(bayes_router, prefix=api_config.api_prefix)
    app.include_router(problems_router, prefix=api_config.api_prefix)

    return app


app = create_app()
