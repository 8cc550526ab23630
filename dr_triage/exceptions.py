"""
Dr.Triage — Ієрархія винятків

Всі помилки ядра наслідуються від DrTriageError:
- ValidationError: некоректні вхідні дані (демографія, стан доказу, немає питання)
- InvalidCaseError: запит до міркувань без початкового доказу
- TransportError: віддалений сервіс недоступний / не-2xx / зіпсована відповідь
- AuthenticationError: невірні облікові дані сервісу (401)
- RateLimitError: сервіс обмежує частоту запитів (429)
- ConfigurationError: некоректна конфігурація

Жодна помилка не є фатальною: випадок пацієнта лишається узгодженим.
"""

from typing import Any, Dict, Optional


class DrTriageError(Exception):
    """Базовий виняток Dr.Triage"""

    error_code: str = "DR_TRIAGE_ERROR"
    http_status: int = 500
    retryable: bool = False

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.error_code,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }


class ValidationError(DrTriageError):
    """Некоректні дані — відхиляються синхронно, без повторів"""

    error_code = "VALIDATION_ERROR"
    http_status = 400


class InvalidCaseError(DrTriageError):
    """Випадок не готовий до запиту (немає початкового доказу)"""

    error_code = "INVALID_CASE"
    http_status = 409


class TransportError(DrTriageError):
    """Помилка зв'язку з віддаленим сервісом міркувань"""

    error_code = "TRANSPORT_ERROR"
    http_status = 502
    retryable = True

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)
        self.status_code = status_code

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["status_code"] = self.status_code
        return data


class AuthenticationError(TransportError):
    """Сервіс відхилив облікові дані (App-Id / App-Key)"""

    error_code = "AUTHENTICATION_ERROR"
    http_status = 503
    retryable = False


class RateLimitError(TransportError):
    """Сервіс повідомив про перевищення ліміту запитів"""

    error_code = "RATE_LIMIT"
    http_status = 429

    def __init__(
        self,
        message: str,
        retry_after: Optional[float] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, status_code=429, details=details)
        self.retry_after = retry_after


class ConfigurationError(DrTriageError):
    """Некоректні значення конфігурації"""

    error_code = "CONFIGURATION_ERROR"


__all__ = [
    "DrTriageError",
    "ValidationError",
    "InvalidCaseError",
    "TransportError",
    "AuthenticationError",
    "RateLimitError",
    "ConfigurationError",
]
