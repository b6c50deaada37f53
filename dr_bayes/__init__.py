"""
Dr.Bayes — Послідовний баєсовий рушій діагностичних ймовірностей

Архітектура: чисте баєсове ядро + сховище ранжованих гіпотез + REST API

Модулі:
- config: Конфігурація (пороги, сховище)
- utils: Логування та помилки
- bayes: Шанси, LR, оновлення, план тесту, рівні дій
- hypothesis_store: Ранжовані гіпотези клінічних проблем
- api: Backend API
"""

__version__ = "0.1.0"

from .config import DrBayesConfig, get_default_config
from .utils import DomainError, InvalidStateError, NotFoundError, ConfigurationError
