"""
Dr.Triage API — Pydantic Models

Моделі для запитів та відповідей REST API.
"""

from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from dr_triage.schemas import PatientCase, SearchResult


# === Request Models ===

class CreateSessionRequest(BaseModel):
    """Запит на початок інтерв'ю"""
    age: int = Field(..., description="Вік пацієнта (0-120)", examples=[34])
    sex: str = Field(..., description="Стать пацієнта (male/female)", examples=["female"])
    symptoms: List[str] = Field(
        default_factory=list,
        description="ID початкових симптомів",
        examples=[["s_1193"]],
    )
    text: Optional[str] = Field(
        default=None,
        description="Текст зі скаргами (буде оброблено NLP)",
        examples=["Bad headache since yesterday"],
    )


class AnswerRequest(BaseModel):
    """
    Відповідь на поточне питання.

    Одиночне питання: {"concept_id": "s_488", "state": "present"}
    Групове питання: {"answers": {"s_488": "present", "s_418": "absent"}}
    """
    concept_id: Optional[str] = None
    state: Optional[str] = Field(default=None, description="present / absent / unknown")
    answers: Optional[Dict[str, str]] = None


class AddSymptomRequest(BaseModel):
    """Додати симптом поза питаннями"""
    concept_id: str = Field(..., min_length=1)
    state: str = Field(default="present")


class ParseTextRequest(BaseModel):
    """Текст для витягування симптомів"""
    text: str = Field(..., min_length=1, max_length=5000)


# === Response Models ===

class SessionState(BaseModel):
    """Стан сесії інтерв'ю"""
    session_id: str
    progress_percentage: float
    can_proceed: bool
    case: PatientCase


class SearchResponse(BaseModel):
    """Результати пошуку концептів"""
    query: str
    results: List[SearchResult]
    total: int


class HealthResponse(BaseModel):
    """Відповідь health check"""
    status: str = "ok"
    version: str
    backend: str
    concepts: int
    conditions: int
    active_sessions: int


class ErrorResponse(BaseModel):
    """Відповідь з помилкою"""
    error: str
    message: str
    retryable: bool = False
    details: Dict = Field(default_factory=dict)
    status_code: Optional[int] = None
