"""
Dr.Bayes — API Configuration

Налаштування FastAPI сервера.
"""

import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class APIConfig:
    """Конфігурація API сервера"""

    # Сервер
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    log_level: str = "INFO"

    # CORS
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    cors_allow_credentials: bool = True
    cors_allow_methods: List[str] = field(default_factory=lambda: ["*"])
    cors_allow_headers: List[str] = field(default_factory=lambda: ["*"])

    # API
    api_prefix: str = "/api"
    api_title: str = "Dr.Bayes API"
    api_description: str = "Sequential Bayesian diagnostic probability engine"
    api_version: str = "1.0.0"

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> 'APIConfig':
        """Створити конфігурацію з environment variables"""
        env = os.environ if environ is None else environ
        origins = env.get("API_CORS_ORIGINS")
        return cls(
            host=env.get("API_HOST", "0.0.0.0"),
            port=int(env.get("API_PORT", "8000")),
            debug=env.get("API_DEBUG", "false").lower() == "true",
            log_level=env.get("API_LOG_LEVEL", "INFO"),
            cors_origins=[o.strip() for o in origins.split(",")] if origins else ["*"],
        )
