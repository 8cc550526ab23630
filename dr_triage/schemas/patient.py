"""
Dr.Triage — Схеми даних пацієнта

Pydantic моделі для:
- Demographics: вік та стать (незмінні після створення)
- EvidenceItem: окремий доказ (концепт + стан + походження)
"""

from typing import Any
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, field_validator

from dr_triage.exceptions import ValidationError


MIN_AGE = 0
MAX_AGE = 120

# Вікові групи (включні межі)
AGE_GROUPS = {
    "infant": (0, 1),
    "toddler": (2, 4),
    "child": (5, 12),
    "adolescent": (13, 17),
    "adult": (18, 64),
    "senior": (65, 120),
}


class Sex(str, Enum):
    """Стать пацієнта"""
    MALE = "male"
    FEMALE = "female"


class EvidenceState(str, Enum):
    """Стан доказу"""
    PRESENT = "present"       # симптом присутній
    ABSENT = "absent"         # симптом явно відсутній
    UNKNOWN = "unknown"       # пацієнт не знає


class EvidenceSource(str, Enum):
    """Походження доказу (вимагається контрактом сервісу міркувань)"""
    INITIAL = "initial"           # вказано на старті інтерв'ю
    PREDEFINED = "predefined"     # відповідь на питання
    SUGGESTED = "suggested"       # додано поза питаннями (пошук, NLP)


def coerce_state(state: Any) -> EvidenceState:
    """Перетворити рядок/enum у EvidenceState або кинути ValidationError"""
    if isinstance(state, EvidenceState):
        return state
    try:
        return EvidenceState(str(state).strip().lower())
    except ValueError:
        raise ValidationError(
            f"Invalid evidence state: {state!r}",
            details={"allowed": [s.value for s in EvidenceState]},
        ) from None


def coerce_sex(sex: Any) -> Sex:
    """Перетворити рядок/enum у Sex або кинути ValidationError"""
    if isinstance(sex, Sex):
        return sex
    try:
        return Sex(str(sex).strip().lower())
    except ValueError:
        raise ValidationError(
            'Sex must be either "male" or "female"',
            details={"sex": sex},
        ) from None


class Demographics(BaseModel):
    """
    Демографія пацієнта.

    Приклад:
        demographics = Demographics.create(34, "female")
        print(demographics.age_group)  # adult
    """
    model_config = ConfigDict(frozen=True)

    age: int = Field(..., ge=MIN_AGE, le=MAX_AGE, description="Вік (роки)")
    sex: Sex = Field(..., description="Стать")

    @classmethod
    def create(cls, age: Any, sex: Any) -> "Demographics":
        """Створити з перевіркою, кидає ValidationError проєкту"""
        if isinstance(age, bool) or not isinstance(age, int):
            raise ValidationError(f"Age must be an integer, got {age!r}")
        if not MIN_AGE <= age <= MAX_AGE:
            raise ValidationError(
                f"Age must be between {MIN_AGE} and {MAX_AGE}",
                details={"age": age},
            )
        return cls(age=age, sex=coerce_sex(sex))

    @property
    def age_group(self) -> str:
        """Вікова група пацієнта"""
        for group, (low, high) in AGE_GROUPS.items():
            if low <= self.age <= high:
                return group
        return "adult"


class EvidenceItem(BaseModel):
    """
    Доказ: стан одного симптому або фактору ризику.

    Приклад:
        item = EvidenceItem(
            concept_id="s_1193",
            state=EvidenceState.PRESENT,
            source=EvidenceSource.INITIAL,
            is_initial=True
        )
    """
    model_config = ConfigDict(frozen=True)

    concept_id: str = Field(..., min_length=1, description="ID симптому / фактору ризику")
    state: EvidenceState = Field(default=EvidenceState.PRESENT)
    source: EvidenceSource = Field(default=EvidenceSource.PREDEFINED)
    is_initial: bool = Field(default=False)

    @field_validator("concept_id")
    @classmethod
    def normalize_concept_id(cls, v: str) -> str:
        return v.strip()

    @property
    def is_present(self) -> bool:
        return self.state == EvidenceState.PRESENT

    def with_state(self, state: EvidenceState) -> "EvidenceItem":
        """Копія з новим станом"""
        return self.model_copy(update={"state": state})

    def with_initial(self, is_initial: bool = True) -> "EvidenceItem":
        """Копія з позначкою initial"""
        return self.model_copy(update={"is_initial": is_initial})
