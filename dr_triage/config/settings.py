"""
Dr.Triage — Налаштування системи

Всі параметри ядра зібрані в dataclass-и для:
- Типізації та валідації
- Легкого доступу через config.interview.max_questions
- Серіалізації в YAML/JSON
"""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional
import os

from dr_triage.exceptions import ConfigurationError


# =============================================================================
# INTERVIEW CONFIGURATION
# =============================================================================

@dataclass
class InterviewConfig:
    """Параметри інтерв'ю та локального резервного міркувача"""

    # Критерії зупинки (перевіряються обидва на кожному кроці)
    max_questions: int = 5            # ліміт відповідей на питання
    max_present_evidence: int = 4     # ліміт присутніх симптомів

    # Ранжування станів
    max_conditions: int = 5           # не більше N станів у відповіді
    min_probability: float = 0.1      # стани з p <= порогу відкидаються
    probability_cap: float = 0.95     # верхня межа ймовірності

    # Тріаж
    serious_conditions_limit: int = 2
    consultation_min_present: int = 3

    # Пошук концептів
    search_limit: int = 8

    def __post_init__(self):
        if self.max_questions < 1:
            raise ConfigurationError("max_questions must be >= 1")
        if self.max_present_evidence < 1:
            raise ConfigurationError("max_present_evidence must be >= 1")
        if self.max_conditions < 1:
            raise ConfigurationError("max_conditions must be >= 1")
        if not 0.0 <= self.min_probability < self.probability_cap <= 1.0:
            raise ConfigurationError(
                "expected 0 <= min_probability < probability_cap <= 1, "
                f"got {self.min_probability} / {self.probability_cap}"
            )
        if self.serious_conditions_limit < 0:
            raise ConfigurationError("serious_conditions_limit must be >= 0")
        if self.search_limit < 1:
            raise ConfigurationError("search_limit must be >= 1")


# =============================================================================
# REMOTE BACKEND CONFIGURATION
# =============================================================================

@dataclass
class RemoteBackendConfig:
    """Параметри віддаленого діагностичного сервісу (Infermedica-сумісний API)"""

    base_url: str = "https://api.infermedica.com/v3"
    app_id: str = ""
    app_key: str = ""

    # Dev-Mode: true на етапі розробки
    dev_mode: bool = True
    timeout_seconds: float = 10.0

    # Групові питання (group_single / group_multiple)
    disable_groups: bool = False
    language: str = "en"

    def __post_init__(self):
        self.base_url = self.base_url.rstrip("/")
        if self.timeout_seconds <= 0:
            raise ConfigurationError("timeout_seconds must be positive")

    @property
    def is_configured(self) -> bool:
        """Чи задані облікові дані сервісу"""
        return bool(self.app_id and self.app_key)

    @classmethod
    def from_env(cls) -> "RemoteBackendConfig":
        """Створити з environment variables"""
        return cls(
            base_url=os.getenv("INFERMEDICA_BASE_URL", cls.base_url),
            app_id=os.getenv("INFERMEDICA_APP_ID", ""),
            app_key=os.getenv("INFERMEDICA_APP_KEY", ""),
            dev_mode=os.getenv("INFERMEDICA_DEV_MODE", "true").lower() == "true",
            timeout_seconds=float(os.getenv("INFERMEDICA_TIMEOUT", "10.0")),
            disable_groups=os.getenv("INFERMEDICA_DISABLE_GROUPS", "false").lower() == "true",
            language=os.getenv("INFERMEDICA_LANGUAGE", "en"),
        )


# =============================================================================
# MAIN CONFIGURATION
# =============================================================================

@dataclass
class DrTriageConfig:
    """
    Головна конфігурація Dr.Triage

    Приклад використання:
        config = DrTriageConfig()
        print(config.interview.max_questions)  # 5
        print(config.remote.is_configured)     # False → локальний міркувач
    """

    # Метадані
    version: str = "0.1.0"
    project_name: str = "Dr.Triage"

    # Компоненти
    interview: InterviewConfig = field(default_factory=InterviewConfig)
    remote: RemoteBackendConfig = field(default_factory=RemoteBackendConfig)

    # Шлях до власної таблиці концептів (JSON); None → вбудована демо-таблиця
    concept_table_path: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DrTriageConfig":
        """Створити з словника (наприклад, завантаженого з YAML)"""
        data = dict(data or {})
        interview = _build(InterviewConfig, data.pop("interview", None))
        remote = _build(RemoteBackendConfig, data.pop("remote", None))
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(f"Unknown config keys: {sorted(unknown)}")
        return cls(interview=interview, remote=remote, **data)

    @classmethod
    def from_env(cls) -> "DrTriageConfig":
        """Створити конфігурацію з environment variables"""
        interview = InterviewConfig(
            max_questions=int(os.getenv("DR_TRIAGE_MAX_QUESTIONS", "5")),
            max_present_evidence=int(os.getenv("DR_TRIAGE_MAX_PRESENT_EVIDENCE", "4")),
        )
        return cls(
            interview=interview,
            remote=RemoteBackendConfig.from_env(),
            concept_table_path=os.getenv("DR_TRIAGE_CONCEPT_TABLE"),
        )


def _build(config_cls, values: Optional[Dict[str, Any]]):
    if values is None:
        return config_cls()
    known = {f.name for f in fields(config_cls)}
    unknown = set(values) - known
    if unknown:
        raise ConfigurationError(
            f"Unknown {config_cls.__name__} keys: {sorted(unknown)}"
        )
    return config_cls(**values)


# =============================================================================
# DEFAULT CONFIG INSTANCE
# =============================================================================

def get_default_config() -> DrTriageConfig:
    """Отримати конфігурацію за замовчуванням (демо-режим, без облікових даних)"""
    return DrTriageConfig()
