"""
Тести для локального резервного міркувача

Запуск: pytest tests/test_local_reasoner.py -v
"""

import pytest


def _case(*evidence, questions_asked=0):
    """Випадок з доказами [(concept_id, state)], перший — initial"""
    from dr_triage.evidence import create_evidence
    from dr_triage.schemas import PatientCase, Demographics

    items = [
        create_evidence(cid, state, "initial" if i == 0 else "predefined", is_initial=(i == 0))
        for i, (cid, state) in enumerate(evidence)
    ]
    return PatientCase(
        demographics=Demographics.create(34, "female"),
        evidence=items,
        questions_asked=questions_asked,
    )


@pytest.mark.asyncio
async def test_seeded_headache_scenario():
    """Головний біль → питання про світлочутливість, мігрень 0.6"""
    from dr_triage.reasoning import LocalReasoner

    step = await LocalReasoner().next_step(_case(("s_1193", "present")))

    assert step.should_stop is False
    assert step.question is not None
    assert step.question.concept_ids == ["s_488"]
    assert step.question.prompt == "Are you sensitive to light?"

    assert [c.id for c in step.conditions] == ["c_49", "c_55", "c_151"]
    assert step.conditions[0].name == "Migraine"
    assert step.conditions[0].probability == pytest.approx(0.6)

    print(f"✓ Question: {step.question.prompt}")


@pytest.mark.asyncio
async def test_conditions_sorted_and_bounded():
    """Стани відсортовані, p у (0.1, 0.95], не більше 5"""
    from dr_triage.reasoning import LocalReasoner

    case = _case(("s_13", "present"), ("s_98", "present"), ("s_1193", "present"), ("s_418", "present"))
    step = await LocalReasoner().next_step(case)

    probabilities = [c.probability for c in step.conditions]
    assert len(step.conditions) <= 5
    assert probabilities == sorted(probabilities, reverse=True)
    assert all(0.1 < p <= 0.95 for p in probabilities)


@pytest.mark.asyncio
async def test_probability_cap():
    """Сума внесків обмежується probability_cap"""
    from dr_triage.knowledge import ConceptTable
    from dr_triage.reasoning import LocalReasoner

    table = ConceptTable.from_dict({
        "concepts": [{"id": "s_1", "name": "A"}, {"id": "s_2", "name": "B"}],
        "conditions": [{"id": "c_1", "name": "X", "weights": {"s_1": 0.7, "s_2": 0.7}}],
    })
    step = await LocalReasoner(table).next_step(_case(("s_1", "present"), ("s_2", "present")))

    assert step.conditions[0].probability == pytest.approx(0.95)


@pytest.mark.asyncio
async def test_absent_evidence_not_scored_and_not_reasked():
    """Відсутні симптоми не рахуються і не запитуються повторно"""
    from dr_triage.reasoning import LocalReasoner

    step = await LocalReasoner().next_step(_case(("s_1193", "present"), ("s_488", "absent")))

    assert step.question.concept_ids == ["s_98"]
    migraine = next(c for c in step.conditions if c.id == "c_49")
    assert migraine.probability == pytest.approx(0.6)


@pytest.mark.asyncio
async def test_respiratory_cluster_question():
    """Кашель → гарячка, потім задишка"""
    from dr_triage.reasoning import LocalReasoner

    step = await LocalReasoner().next_step(_case(("s_13", "present")))
    assert step.question.concept_ids == ["s_98"]

    step = await LocalReasoner().next_step(_case(("s_13", "present"), ("s_98", "absent")))
    assert step.question.concept_ids == ["s_21"]


@pytest.mark.asyncio
async def test_default_question_order():
    """Без кластера — перший незапитаний концепт таблиці"""
    from dr_triage.reasoning import LocalReasoner

    step = await LocalReasoner().next_step(_case(("s_1394", "present")))

    assert step.question.concept_ids == ["s_1193"]


@pytest.mark.asyncio
async def test_stop_on_question_limit():
    """5 відповідей → should_stop, питання немає"""
    from dr_triage.reasoning import LocalReasoner

    step = await LocalReasoner().next_step(_case(("s_1193", "present"), questions_asked=5))

    assert step.should_stop is True
    assert step.question is None


@pytest.mark.asyncio
async def test_stop_on_present_limit():
    """4 присутні симптоми → should_stop"""
    from dr_triage.reasoning import LocalReasoner

    case = _case(("s_13", "present"), ("s_98", "present"), ("s_1394", "present"), ("s_15", "present"))
    step = await LocalReasoner().next_step(case)

    assert step.should_stop is True
    assert step.question is None
    assert step.conditions


@pytest.mark.asyncio
async def test_stop_when_table_exhausted():
    """Немає концептів для питань → should_stop"""
    from dr_triage.knowledge import ConceptTable
    from dr_triage.reasoning import LocalReasoner

    table = ConceptTable.from_dict({"concepts": [{"id": "s_1", "name": "A"}]})
    step = await LocalReasoner(table).next_step(_case(("s_1", "present")))

    assert step.should_stop is True
    assert step.question is None
    assert step.conditions == []


@pytest.mark.asyncio
async def test_next_step_requires_initial_evidence():
    """Без initial доказу → InvalidCaseError"""
    from dr_triage.evidence import create_evidence
    from dr_triage.exceptions import InvalidCaseError
    from dr_triage.reasoning import LocalReasoner
    from dr_triage.schemas import PatientCase, Demographics

    reasoner = LocalReasoner()

    with pytest.raises(InvalidCaseError):
        await reasoner.next_step(PatientCase(demographics=Demographics.create(30, "male")))

    case = PatientCase(
        demographics=Demographics.create(30, "male"),
        evidence=[create_evidence("s_98", "present")],
    )
    with pytest.raises(InvalidCaseError):
        await reasoner.next_step(case)


@pytest.mark.asyncio
async def test_triage_escalation():
    """Ригідність шиї + температура + головний біль → emergency"""
    from dr_triage.reasoning import LocalReasoner
    from dr_triage.schemas import TriageLevel

    case = _case(("s_418", "present"), ("s_98", "present"), ("s_1193", "present"))
    triage = await LocalReasoner().classify_triage(case)

    assert triage.level == TriageLevel.EMERGENCY
    assert triage.label == "Emergency Care Recommended"
    assert [c.id for c in triage.serious_conditions] == ["c_151"]
    assert triage.is_emergency

    print(f"✓ Triage: {triage.label}")


@pytest.mark.asyncio
async def test_triage_consultation():
    """3 присутні несерйозні симптоми → consultation"""
    from dr_triage.reasoning import LocalReasoner
    from dr_triage.schemas import TriageLevel

    case = _case(("s_13", "present"), ("s_98", "present"), ("s_1394", "present"))
    triage = await LocalReasoner().classify_triage(case)

    assert triage.level == TriageLevel.CONSULTATION
    assert [c.id for c in triage.serious_conditions] == ["c_340"]


@pytest.mark.asyncio
async def test_triage_self_care():
    """Один легкий симптом → self_care"""
    from dr_triage.reasoning import LocalReasoner
    from dr_triage.schemas import TriageLevel

    triage = await LocalReasoner().classify_triage(_case(("s_1193", "present"), ("s_418", "absent")))

    assert triage.level == TriageLevel.SELF_CARE
    assert triage.serious_conditions == []


@pytest.mark.asyncio
async def test_triage_requires_evidence():
    """Порожні докази → InvalidCaseError"""
    from dr_triage.exceptions import InvalidCaseError
    from dr_triage.reasoning import LocalReasoner

    with pytest.raises(InvalidCaseError):
        await LocalReasoner().classify_triage(_case())


@pytest.mark.asyncio
async def test_search():
    """Пошук за підрядком назви та синонімів"""
    from dr_triage.reasoning import LocalReasoner

    reasoner = LocalReasoner()

    results = await reasoner.search("HEAD")
    assert [r.concept_id for r in results] == ["s_1193"]
    assert results[0].label == "Headache"

    assert [r.concept_id for r in await reasoner.search("breath")] == ["s_21"]
    assert await reasoner.search("   ") == []
    assert len(await reasoner.search("e", limit=3)) == 3
    assert len(await reasoner.search("e")) <= 8


@pytest.mark.asyncio
async def test_search_limit_from_config():
    """Без limit пошук обрізається за search_limit конфігу"""
    from dr_triage.config import InterviewConfig
    from dr_triage.reasoning import LocalReasoner

    reasoner = LocalReasoner(config=InterviewConfig(search_limit=2))

    assert len(await reasoner.search("e")) == 2
    assert len(await reasoner.search("e", limit=4)) == 4


@pytest.mark.asyncio
async def test_parse_text():
    """parse_text використовує локальний екстрактор"""
    from dr_triage.reasoning import LocalReasoner

    result = await LocalReasoner().parse_text("stiff neck and fever")

    assert result.concept_ids == ["s_418", "s_98"]
    assert result.is_obvious


@pytest.mark.asyncio
async def test_async_context_manager():
    """async with закриває клієнт"""
    from dr_triage.reasoning import LocalReasoner

    async with LocalReasoner() as reasoner:
        assert isinstance(reasoner, LocalReasoner)


@pytest.mark.asyncio
async def test_headache_with_photophobia_asks_fever():
    """Головний біль + світлочутливість → наступне питання про гарячку"""
    from dr_triage.reasoning import LocalReasoner

    case = _case(("s_1193", "present"), ("s_488", "present"), questions_asked=1)
    step = await LocalReasoner().next_step(case)

    assert step.question.concept_ids == ["s_98"]


@pytest.mark.asyncio
async def test_shared_cluster_member_asked_once():
    """Гарячка спільна для двох кластерів: після відповіді — наступний член кластера"""
    from dr_triage.reasoning import LocalReasoner

    case = _case(("s_1193", "present"), ("s_13", "present"), ("s_488", "absent"), ("s_98", "absent"))
    step = await LocalReasoner().next_step(case)

    assert step.question.concept_ids == ["s_21"]
