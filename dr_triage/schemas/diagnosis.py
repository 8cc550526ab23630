"""
Dr.Triage — Схеми результатів міркувань

Pydantic моделі для:
- ScoredCondition: стан-кандидат з ймовірністю
- ReasoningStep: відповідь на запит "наступний крок"
- TriageResult: рівень терміновості
- SearchResult: результат пошуку концепту
"""

from typing import List, Optional
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field

from .question import Question


class TriageLevel(str, Enum):
    """Рівень терміновості"""
    EMERGENCY = "emergency"
    CONSULTATION = "consultation"
    SELF_CARE = "self_care"


class ConceptKind(str, Enum):
    """Категорія концепту"""
    SYMPTOM = "symptom"
    RISK_FACTOR = "risk_factor"
    CONDITION = "condition"


class ScoredCondition(BaseModel):
    """
    Стан-кандидат.

    Ймовірність має сенс лише відносно інших станів з того ж результату
    (не порівнюється між викликами). severity / acuteness / prevalence —
    тільки для відображення та евристик тріажу, не для ранжування.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    common_name: Optional[str] = None
    probability: float = Field(..., ge=0.0, le=1.0)

    severity: Optional[str] = None
    acuteness: Optional[str] = None
    prevalence: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.common_name or self.name

    @property
    def likelihood_label(self) -> str:
        """Словесна оцінка ймовірності"""
        p = self.probability
        if p >= 0.8:
            return "Very likely"
        if p >= 0.6:
            return "Likely"
        if p >= 0.4:
            return "Possible"
        if p >= 0.2:
            return "Unlikely"
        return "Very unlikely"


class ReasoningStep(BaseModel):
    """Результат nextStep: питання (або None), стани, сигнал зупинки"""
    model_config = ConfigDict(frozen=True)

    question: Optional[Question] = None
    conditions: List[ScoredCondition] = Field(default_factory=list)
    should_stop: bool = False


class TriageResult(BaseModel):
    """
    Рекомендація щодо терміновості.

    Приклад:
        TriageResult(
            level=TriageLevel.EMERGENCY,
            label="Emergency Care Recommended",
            description="...",
            serious_conditions=[...]
        )
    """
    model_config = ConfigDict(frozen=True)

    level: TriageLevel
    label: str
    description: str
    serious_conditions: List[ScoredCondition] = Field(default_factory=list)

    @property
    def is_emergency(self) -> bool:
        return self.level == TriageLevel.EMERGENCY


class SearchResult(BaseModel):
    """Концепт, знайдений за фразою"""
    model_config = ConfigDict(frozen=True)

    concept_id: str
    label: str
    kind: ConceptKind = ConceptKind.SYMPTOM
