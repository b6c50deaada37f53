"""
Dr.Bayes — REST API модуль

FastAPI REST API для баєсового рушія.

Компоненти:
- app.py: create_app() та екземпляр app для uvicorn
- routes/: health, bayes (калькулятор), problems (гіпотези)
- models.py: Pydantic models
- dependencies.py: Доступ до сховища та конфігурації через app.state

Запуск:
    uvicorn dr_bayes.api.app:app --reload --port 8000

Документація:
    http://localhost:8000/docs (Swagger UI)
    http://localhost:8000/redoc (ReDoc)

Endpoints:
    GET  /                                    - Root info
    GET  /health                              - Health check

    POST /api/bayes/calculate                 - Одне оновлення
    POST /api/bayes/calculate-both            - План обох результатів (LR)
    POST /api/bayes/likelihood-ratios         - LR з sens/spec
    POST /api/bayes/from-sens-spec            - План обох результатів (sens/spec)
    POST /api/bayes/recommend-tier            - Рівень дій
    POST /api/bayes/test-rationale            - Обґрунтування тесту

    POST /api/problems/{id}/hypotheses        - Запропонувати гіпотезу
    POST /api/problems/{id}/hypotheses/batch  - Запропонувати кілька
    GET  /api/problems/{id}/hypotheses        - Ранжовані гіпотези
    POST /api/problems/{id}/hypotheses/{hid}/evidence       - Доказ (LR)
    POST /api/problems/{id}/hypotheses/{hid}/test-result    - Результат тесту
    GET  /api/problems/{id}/hypotheses/{hid}/recommendation - Рівень дій
    GET  /api/hypotheses/{hid}                - Гіпотеза
    POST /api/hypotheses/{hid}/retire         - Виключити / підтвердити
"""

from .app import app, create_app
from .config import APIConfig
from .dependencies import get_store, get_config


__all__ = [
    "app",
    "create_app",
    "APIConfig",
    "get_store",
    "get_config",
]
