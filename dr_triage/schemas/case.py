"""
Dr.Triage — Схема діагностичного випадку

PatientCase — одна діагностична сесія. Єдиний власник і той, хто змінює
випадок, — InterviewOrchestrator; UI читає лише знімки (snapshot).
"""

from datetime import datetime
from typing import List, Optional
from enum import Enum
import uuid

from pydantic import BaseModel, Field

from .patient import Demographics, EvidenceItem, EvidenceState
from .question import Question
from .diagnosis import ScoredCondition, TriageResult


class CaseStatus(str, Enum):
    """Статус випадку"""
    ACTIVE = "active"
    COMPLETED = "completed"
    ABANDONED = "abandoned"


def new_case_id() -> str:
    """Унікальний ID сесії (в межах процесу)"""
    return uuid.uuid4().hex


class PatientCase(BaseModel):
    """
    Діагностичний випадок.

    Приклад:
        case = PatientCase(demographics=Demographics.create(30, "male"))
        print(case.status)           # CaseStatus.ACTIVE
        print(case.present_count)    # 0
    """

    id: str = Field(default_factory=new_case_id)
    demographics: Demographics

    # Докази, унікальні за concept_id (порядок важливий)
    evidence: List[EvidenceItem] = Field(default_factory=list)

    # Поточне питання (None — немає очікуваного)
    current_question: Optional[Question] = None

    # Останній результат міркувань (замінюється цілком)
    conditions: List[ScoredCondition] = Field(default_factory=list)
    should_stop: bool = False

    triage: Optional[TriageResult] = None

    # +1 на кожну відповідь на питання (не на кожен доказ)
    questions_asked: int = Field(default=0, ge=0)

    status: CaseStatus = CaseStatus.ACTIVE

    started_at: datetime = Field(default_factory=datetime.now)
    last_updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def is_active(self) -> bool:
        return self.status == CaseStatus.ACTIVE

    @property
    def has_pending_question(self) -> bool:
        return self.current_question is not None

    @property
    def present_evidence(self) -> List[EvidenceItem]:
        """Докази зі станом PRESENT"""
        return [e for e in self.evidence if e.state == EvidenceState.PRESENT]

    @property
    def present_count(self) -> int:
        return len(self.present_evidence)

    @property
    def evidence_ids(self) -> List[str]:
        return [e.concept_id for e in self.evidence]

    def get_evidence(self, concept_id: str) -> Optional[EvidenceItem]:
        for item in self.evidence:
            if item.concept_id == concept_id:
                return item
        return None

    def touch(self) -> None:
        """Оновити last_updated_at"""
        self.last_updated_at = datetime.now()

    def snapshot(self) -> "PatientCase":
        """Незалежна копія для читання"""
        return self.model_copy(deep=True)

    def __repr__(self) -> str:
        return (
            f"PatientCase("
            f"id={self.id[:8]}, "
            f"status={self.status.value}, "
            f"evidence={len(self.evidence)}, "
            f"questions={self.questions_asked}, "
            f"conditions={len(self.conditions)}"
            f")"
        )
