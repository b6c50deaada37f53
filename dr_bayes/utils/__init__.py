"""Dr.Bayes — Логування та помилки"""
from .logging import get_logger, setup_logging, StructuredFormatter
from .exceptions import (
    DrBayesError,
    DomainError,
    InvalidStateError,
    NotFoundError,
    ConfigurationError,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "StructuredFormatter",
    "DrBayesError",
    "DomainError",
    "InvalidStateError",
    "NotFoundError",
    "ConfigurationError",
]
