"""
Dr.Triage — Модуль схем даних (schemas)

Pydantic моделі для валідації та серіалізації даних.

Компоненти:
- patient.py: Sex, Demographics, EvidenceState, EvidenceSource, EvidenceItem
- question.py: QuestionKind, Choice, QuestionItem, Question
- diagnosis.py: ScoredCondition, ReasoningStep, TriageLevel, TriageResult, SearchResult
- mention.py: Mention, ExtractionResult
- case.py: CaseStatus, PatientCase

Приклад використання:
    from dr_triage.schemas import PatientCase, Demographics, EvidenceItem

    case = PatientCase(
        demographics=Demographics.create(30, "male"),
        evidence=[EvidenceItem(concept_id="s_1193", is_initial=True)]
    )

    # Серіалізація в JSON
    json_data = case.model_dump_json()

    # Десеріалізація з JSON
    case_loaded = PatientCase.model_validate_json(json_data)
"""

# Patient schemas
from .patient import (
    Sex,
    EvidenceState,
    EvidenceSource,
    Demographics,
    EvidenceItem,
    coerce_state,
    coerce_sex,
)

# Question schemas
from .question import (
    QuestionKind,
    Choice,
    QuestionItem,
    Question,
    default_choices,
)

# Diagnosis schemas
from .diagnosis import (
    TriageLevel,
    ConceptKind,
    ScoredCondition,
    ReasoningStep,
    TriageResult,
    SearchResult,
)

# Mention schemas
from .mention import (
    Mention,
    ExtractionResult,
)

# Case schemas
from .case import (
    CaseStatus,
    PatientCase,
    new_case_id,
)


__all__ = [
    # Patient
    "Sex",
    "EvidenceState",
    "EvidenceSource",
    "Demographics",
    "EvidenceItem",
    "coerce_state",
    "coerce_sex",

    # Question
    "QuestionKind",
    "Choice",
    "QuestionItem",
    "Question",
    "default_choices",

    # Diagnosis
    "TriageLevel",
    "ConceptKind",
    "ScoredCondition",
    "ReasoningStep",
    "TriageResult",
    "SearchResult",

    # Mention
    "Mention",
    "ExtractionResult",

    # Case
    "CaseStatus",
    "PatientCase",
    "new_case_id",
]
