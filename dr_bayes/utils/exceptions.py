"""
Dr.Bayes — Ієрархія помилок

Типи помилок ядра:
- DomainError: числовий аргумент поза допустимим діапазоном
- InvalidStateError: операція над гіпотезою у термінальному стані
- NotFoundError: проблема або гіпотеза не існує
- ConfigurationError: некоректні пороги або інша конфігурація

Кожна помилка має машинний код та деталі для API відповіді.
"""

from typing import Any, Dict, Optional


class DrBayesError(Exception):
    """Базова помилка Dr.Bayes"""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = _json_safe(details or {})

    def to_dict(self) -> Dict[str, Any]:
        """Словник для відповіді API"""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class DomainError(DrBayesError):
    """Числовий аргумент поза своєю областю визначення"""

    def __init__(
        self,
        message: str,
        parameter: Optional[str] = None,
        value: Any = None,
        details: Optional[Dict[str, Any]] = None
    ):
        extra = {}
        if parameter is not None:
            extra["parameter"] = parameter
            extra["value"] = value
        super().__init__(
            message=message,
            code="DOMAIN_ERROR",
            details={**extra, **(details or {})}
        )
        self.parameter = parameter
        self.value = value


class InvalidStateError(DrBayesError):
    """Операція неможлива в поточному стані гіпотези"""

    def __init__(
        self,
        message: str,
        problem_id: Optional[str] = None,
        hypothesis_id: Optional[str] = None,
        code: str = "INVALID_STATE",
        details: Optional[Dict[str, Any]] = None
    ):
        extra = {}
        if problem_id is not None:
            extra["problem_id"] = problem_id
        if hypothesis_id is not None:
            extra["hypothesis_id"] = hypothesis_id
        super().__init__(
            message=message,
            code=code,
            details={**extra, **(details or {})}
        )
        self.problem_id = problem_id
        self.hypothesis_id = hypothesis_id


class NotFoundError(InvalidStateError):
    """Проблема або гіпотеза не існує"""

    def __init__(
        self,
        message: str,
        problem_id: Optional[str] = None,
        hypothesis_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            problem_id=problem_id,
            hypothesis_id=hypothesis_id,
            code="NOT_FOUND",
            details=details
        )


class ConfigurationError(DrBayesError):
    """Конфігурація порушує обмеження"""

    def __init__(
        self,
        message: str,
        setting: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="CONFIGURATION_ERROR",
            details={"setting": setting, **(details or {})}
        )
        self.setting = setting


def _json_safe(value: Any) -> Any:
    """inf/nan не серіалізуються стандартним JSON — передаємо рядком"""
    if isinstance(value, float) and (value != value or value in (float("inf"), float("-inf"))):
        return str(value)
    if isinstance(value, dict):
        return {str(k): _json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(v) for v in value]
    if isinstance(value, (int, float, str, bool)) or value is None:
        return value
    return repr(value)
