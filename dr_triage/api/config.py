"""
Dr.Triage — API Configuration

Налаштування FastAPI сервера та сесій.
"""

from dataclasses import dataclass, field
import os


@dataclass
class APIConfig:
    """Конфігурація API сервера"""

    # Сервер
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = True
    reload: bool = False
    log_level: str = "INFO"

    # CORS
    cors_origins: list = field(default_factory=lambda: ["*"])
    cors_allow_credentials: bool = True
    cors_allow_methods: list = field(default_factory=lambda: ["*"])
    cors_allow_headers: list = field(default_factory=lambda: ["*"])

    # Сесії
    max_sessions: int = 1000
    session_timeout_minutes: int = 60

    # API
    api_prefix: str = "/api"
    api_title: str = "Dr.Triage API"
    api_description: str = "Адаптивне діагностичне інтерв'ю та тріаж"

    @classmethod
    def from_env(cls) -> "APIConfig":
        """Створити конфігурацію з environment variables"""
        return cls(
            host=os.getenv("API_HOST", "0.0.0.0"),
            port=int(os.getenv("API_PORT", "8000")),
            debug=os.getenv("API_DEBUG", "true").lower() == "true",
            reload=os.getenv("API_RELOAD", "false").lower() == "true",
            log_level=os.getenv("API_LOG_LEVEL", "INFO").upper(),
            max_sessions=int(os.getenv("API_MAX_SESSIONS", "1000")),
            session_timeout_minutes=int(os.getenv("API_SESSION_TIMEOUT_MINUTES", "60")),
        )


# Глобальна конфігурація
config = APIConfig.from_env()
