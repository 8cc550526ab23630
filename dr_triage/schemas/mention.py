"""
Dr.Triage — Схеми згадок симптомів у тексті
"""

from typing import List
from pydantic import BaseModel, ConfigDict, Field

from .patient import EvidenceState


class Mention(BaseModel):
    """Згадка концепту у вільному тексті"""
    model_config = ConfigDict(frozen=True)

    concept_id: str
    name: str
    matched_phrase: str = Field(..., description="Фраза, що співпала (lowercase)")
    state: EvidenceState = EvidenceState.PRESENT


class ExtractionResult(BaseModel):
    """
    Результат витягування згадок.

    is_obvious = True, якщо знайдено хоча б одну згадку.
    """
    model_config = ConfigDict(frozen=True)

    mentions: List[Mention] = Field(default_factory=list)
    is_obvious: bool = False

    @property
    def concept_ids(self) -> List[str]:
        return [m.concept_id for m in self.mentions]
