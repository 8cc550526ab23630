"""
Тести для модуля schemas

Запуск: pytest tests/test_schemas.py -v
"""

import pytest


def test_demographics():
    """Тест моделі Demographics"""
    from dr_triage.schemas import Demographics, Sex

    demographics = Demographics.create(34, "Female")

    assert demographics.age == 34
    assert demographics.sex == Sex.FEMALE
    assert demographics.age_group == "adult"

    print(f"✓ Demographics: age={demographics.age}, sex={demographics.sex.value}")


@pytest.mark.parametrize("age", [-1, 121, 30.5, "30", True])
def test_demographics_invalid_age(age):
    """Некоректний вік → ValidationError"""
    from dr_triage.schemas import Demographics
    from dr_triage.exceptions import ValidationError

    with pytest.raises(ValidationError):
        Demographics.create(age, "male")


def test_demographics_invalid_sex():
    """Некоректна стать → ValidationError"""
    from dr_triage.schemas import Demographics
    from dr_triage.exceptions import ValidationError

    with pytest.raises(ValidationError):
        Demographics.create(30, "other")


def test_demographics_bounds_and_groups():
    """Межі віку та вікові групи"""
    from dr_triage.schemas import Demographics

    assert Demographics.create(0, "male").age_group == "infant"
    assert Demographics.create(3, "male").age_group == "toddler"
    assert Demographics.create(13, "male").age_group == "adolescent"
    assert Demographics.create(120, "female").age_group == "senior"


def test_evidence_item():
    """Тест моделі EvidenceItem"""
    from dr_triage.schemas import EvidenceItem, EvidenceState, EvidenceSource

    item = EvidenceItem(concept_id=" s_1193 ", state=EvidenceState.PRESENT, source=EvidenceSource.INITIAL, is_initial=True)

    assert item.concept_id == "s_1193"
    assert item.is_present

    absent = item.with_state(EvidenceState.ABSENT)
    assert absent.state == EvidenceState.ABSENT
    assert absent.source == EvidenceSource.INITIAL
    assert item.state == EvidenceState.PRESENT

    print(f"✓ EvidenceItem: {item.concept_id}={item.state.value}")


def test_coerce_state():
    """Рядки перетворюються на EvidenceState"""
    from dr_triage.schemas import EvidenceState, coerce_state
    from dr_triage.exceptions import ValidationError

    assert coerce_state("Present") == EvidenceState.PRESENT
    assert coerce_state(EvidenceState.UNKNOWN) == EvidenceState.UNKNOWN

    with pytest.raises(ValidationError):
        coerce_state("maybe")


def test_question():
    """Тест моделі Question"""
    from dr_triage.schemas import Question, QuestionItem, QuestionKind, EvidenceState

    question = Question(
        prompt="Are you sensitive to light?",
        items=[QuestionItem(concept_id="s_488", name="Photophobia")],
    )

    assert question.kind == QuestionKind.SINGLE
    assert question.concept_ids == ["s_488"]
    assert question.has_concept("s_488")
    assert not question.is_group
    assert [c.id for c in question.items[0].choices] == [
        EvidenceState.PRESENT, EvidenceState.ABSENT, EvidenceState.UNKNOWN,
    ]
    assert [c.label for c in question.items[0].choices] == ["Yes", "No", "I don't know"]


def test_question_requires_items():
    """Питання без концептів некоректне"""
    import pydantic
    from dr_triage.schemas import Question

    with pytest.raises(pydantic.ValidationError):
        Question(prompt="?", items=[])


@pytest.mark.parametrize("probability,label", [
    (0.9, "Very likely"),
    (0.6, "Likely"),
    (0.45, "Possible"),
    (0.2, "Unlikely"),
    (0.05, "Very unlikely"),
])
def test_likelihood_label(probability, label):
    """Словесна оцінка ймовірності"""
    from dr_triage.schemas import ScoredCondition

    condition = ScoredCondition(id="c_49", name="Migraine", probability=probability)
    assert condition.likelihood_label == label


def test_scored_condition_range():
    """Ймовірність поза [0, 1] відхиляється"""
    import pydantic
    from dr_triage.schemas import ScoredCondition

    with pytest.raises(pydantic.ValidationError):
        ScoredCondition(id="c_49", name="Migraine", probability=1.2)

    condition = ScoredCondition(id="c_49", name="Migraine", common_name="Migraine headache", probability=0.6)
    assert condition.display_name == "Migraine headache"


def test_patient_case():
    """Тест моделі PatientCase"""
    from dr_triage.schemas import PatientCase, Demographics, EvidenceItem, EvidenceState, CaseStatus

    case = PatientCase(
        demographics=Demographics.create(30, "male"),
        evidence=[
            EvidenceItem(concept_id="s_1193", state=EvidenceState.PRESENT, is_initial=True),
            EvidenceItem(concept_id="s_488", state=EvidenceState.ABSENT),
        ],
    )

    assert case.status == CaseStatus.ACTIVE
    assert case.is_active
    assert case.present_count == 1
    assert case.evidence_ids == ["s_1193", "s_488"]
    assert case.get_evidence("s_488").state == EvidenceState.ABSENT
    assert case.get_evidence("s_98") is None
    assert len(case.id) == 32

    print(f"✓ {case!r}")


def test_patient_case_snapshot_is_independent():
    """Знімок не пов'язаний з оригіналом"""
    from dr_triage.schemas import PatientCase, Demographics, EvidenceItem

    case = PatientCase(demographics=Demographics.create(30, "male"))
    snapshot = case.snapshot()
    snapshot.evidence.append(EvidenceItem(concept_id="s_98"))
    snapshot.questions_asked = 3

    assert case.evidence == []
    assert case.questions_asked == 0


def test_unique_case_ids():
    """ID випадків унікальні"""
    from dr_triage.schemas import new_case_id

    ids = {new_case_id() for _ in range(100)}
    assert len(ids) == 100


def test_extraction_result():
    """Тест моделі ExtractionResult"""
    from dr_triage.schemas import ExtractionResult, Mention

    result = ExtractionResult(
        mentions=[Mention(concept_id="s_98", name="Fever", matched_phrase="fever")],
        is_obvious=True,
    )
    assert result.concept_ids == ["s_98"]
    assert ExtractionResult().is_obvious is False
