"""
Тести для критеріїв зупинки та локального правила тріажу

Запуск: pytest tests/test_stopping.py -v
"""


def test_continue():
    """Ліміти не досягнуто → CONTINUE"""
    from dr_triage.reasoning import StoppingCriteria, StopReason

    decision = StoppingCriteria().check(questions_asked=2, present_count=1)

    assert decision.reason == StopReason.CONTINUE
    assert decision.should_continue


def test_question_limit():
    """questions_asked >= max_questions → QUESTION_LIMIT"""
    from dr_triage.reasoning import StoppingCriteria, StopReason

    decision = StoppingCriteria().check(questions_asked=5, present_count=0)

    assert decision.should_stop
    assert decision.reason == StopReason.QUESTION_LIMIT

    print(f"✓ {decision.reason.value}: {decision.message}")


def test_evidence_limit():
    """present_count >= max_present_evidence → EVIDENCE_LIMIT"""
    from dr_triage.reasoning import StoppingCriteria, StopReason

    decision = StoppingCriteria().check(questions_asked=0, present_count=4)

    assert decision.should_stop
    assert decision.reason == StopReason.EVIDENCE_LIMIT


def test_both_limits_checked():
    """Обидва ліміти — спрацьовує ліміт питань"""
    from dr_triage.reasoning import StoppingCriteria, StopReason

    decision = StoppingCriteria().check(questions_asked=6, present_count=6)

    assert decision.reason == StopReason.QUESTION_LIMIT


def test_no_questions():
    """Немає доступних питань → NO_QUESTIONS"""
    from dr_triage.reasoning import StoppingCriteria, StopReason

    decision = StoppingCriteria().check(questions_asked=1, present_count=1, available_questions=0)

    assert decision.should_stop
    assert decision.reason == StopReason.NO_QUESTIONS


def test_custom_limits():
    """Ліміти налаштовуються окремо"""
    from dr_triage.config import InterviewConfig
    from dr_triage.reasoning import StoppingCriteria

    criteria = StoppingCriteria(InterviewConfig(max_questions=10, max_present_evidence=2))

    assert criteria.check(questions_asked=5, present_count=1).should_continue
    assert criteria.check(questions_asked=0, present_count=2).should_stop


def test_triage_emergency_seriousness():
    """Присутній симптом з серйозністю emergency → EMERGENCY"""
    from dr_triage.knowledge import ConceptTable
    from dr_triage.reasoning import LocalTriageClassifier
    from dr_triage.schemas import TriageLevel

    table = ConceptTable.from_dict({
        "concepts": [{"id": "s_1", "name": "Collapse", "seriousness": "emergency"}],
    })

    assert LocalTriageClassifier(table).level_for(["s_1"]) == TriageLevel.EMERGENCY


def test_triage_levels():
    """Правило тріажу на демо-таблиці"""
    from dr_triage.knowledge import ConceptTable
    from dr_triage.reasoning import LocalTriageClassifier
    from dr_triage.schemas import TriageLevel

    classifier = LocalTriageClassifier(ConceptTable.default())

    assert classifier.level_for(["s_102"]) == TriageLevel.EMERGENCY
    assert classifier.level_for(["s_13", "s_98", "s_15"]) == TriageLevel.CONSULTATION
    assert classifier.level_for(["s_13", "s_98"]) == TriageLevel.SELF_CARE
    assert classifier.level_for([]) == TriageLevel.SELF_CARE
    assert classifier.level_for(["s_unknown"]) == TriageLevel.SELF_CARE


def test_serious_conditions_limit():
    """Не більше serious_conditions_limit станів відповідної тяжкості"""
    from dr_triage.knowledge import ConceptTable
    from dr_triage.reasoning import LocalTriageClassifier
    from dr_triage.schemas import ScoredCondition

    conditions = [
        ScoredCondition(id="c_151", name="Meningitis", probability=0.9, severity="severe"),
        ScoredCondition(id="c_49", name="Migraine", probability=0.6, severity="moderate"),
        ScoredCondition(id="c_62", name="Pneumonia", probability=0.5, severity="severe"),
        ScoredCondition(id="c_x", name="Other", probability=0.4, severity="severe"),
    ]

    result = LocalTriageClassifier(ConceptTable.default()).classify(["s_418"], conditions)

    assert [c.id for c in result.serious_conditions] == ["c_151", "c_62"]
