"""
Dr.Triage — Схеми питань

Питання — тегований варіант:
- single: одне питання про один концепт
- group_single: кілька концептів, обирається рівно один
- group_multiple: кілька концептів, відповідь на кожен

Питання не зберігається після відповіді (transient).
"""

from typing import List
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field

from .patient import EvidenceState


class QuestionKind(str, Enum):
    """Тип питання"""
    SINGLE = "single"
    GROUP_SINGLE = "group_single"
    GROUP_MULTIPLE = "group_multiple"


class Choice(BaseModel):
    """Варіант відповіді"""
    model_config = ConfigDict(frozen=True)

    id: EvidenceState
    label: str


def default_choices() -> List[Choice]:
    """Так / Ні / Не знаю"""
    return [
        Choice(id=EvidenceState.PRESENT, label="Yes"),
        Choice(id=EvidenceState.ABSENT, label="No"),
        Choice(id=EvidenceState.UNKNOWN, label="I don't know"),
    ]


class QuestionItem(BaseModel):
    """Один концепт у питанні"""
    model_config = ConfigDict(frozen=True)

    concept_id: str
    name: str
    choices: List[Choice] = Field(default_factory=default_choices)


class Question(BaseModel):
    """
    Уточнююче питання для пацієнта.

    Приклад:
        question = Question(
            kind=QuestionKind.SINGLE,
            prompt="Are you sensitive to light?",
            items=[QuestionItem(concept_id="s_488", name="Photophobia")]
        )
    """
    model_config = ConfigDict(frozen=True)

    kind: QuestionKind = Field(default=QuestionKind.SINGLE)
    prompt: str = Field(..., description="Текст питання для відображення")
    items: List[QuestionItem] = Field(..., min_length=1)

    @property
    def concept_ids(self) -> List[str]:
        """ID концептів, про які питаємо"""
        return [item.concept_id for item in self.items]

    @property
    def is_group(self) -> bool:
        return self.kind != QuestionKind.SINGLE

    def has_concept(self, concept_id: str) -> bool:
        return concept_id in self.concept_ids
