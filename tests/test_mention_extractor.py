"""
Тести для модуля nlp

Запуск: pytest tests/test_mention_extractor.py -v
"""

import pytest


def _extractor():
    from dr_triage.knowledge import ConceptTable
    from dr_triage.nlp import MentionExtractor

    return MentionExtractor.from_table(ConceptTable.default())


def test_normalize_text():
    """Нормалізація тексту"""
    from dr_triage.nlp import normalize_text

    assert normalize_text("  Bad   HEADACHE!!  ") == "bad headache"
    assert normalize_text("Fever, cough; fatigue.") == "fever cough fatigue"
    assert normalize_text("can't breathe") == "can't breathe"


def test_extract_basic():
    """Згадки в порядку таблиці концептів"""
    extractor = _extractor()

    result = extractor.extract("I keep coughing and I have a FEVER")

    assert result.concept_ids == ["s_98", "s_13"]
    assert result.is_obvious
    assert all(m.state.value == "present" for m in result.mentions)

    print(f"✓ Mentions: {[m.name for m in result.mentions]}")


def test_first_phrase_wins():
    """Одна згадка на концепт, перша фраза виграє"""
    extractor = _extractor()

    result = extractor.extract("headache, my head hurts, head pain")

    assert result.concept_ids == ["s_1193"]
    assert result.mentions[0].matched_phrase == "headache"


def test_whole_word_matching():
    """Фраза не співпадає всередині слова"""
    extractor = _extractor()

    assert extractor.extract("I feel feverish").concept_ids == ["s_98"]
    assert extractor.extract("frequent headaches").concept_ids == []


def test_ukrainian_synonyms():
    """Українські синоніми"""
    extractor = _extractor()

    result = extractor.extract("Болить голова і температура")

    assert result.concept_ids == ["s_1193", "s_98"]


def test_no_mentions():
    """Порожній результат"""
    extractor = _extractor()

    for text in ["", "   ", "my knee is swollen"]:
        result = extractor.extract(text)
        assert result.mentions == []
        assert result.is_obvious is False


def test_negation_not_handled():
    """Заперечення не розпізнаються: 'no fever' → fever present"""
    extractor = _extractor()

    result = extractor.extract("no fever")

    assert result.concept_ids == ["s_98"]
    assert result.mentions[0].state.value == "present"


def test_extract_mentions_function():
    """Чиста функція extract_mentions"""
    from dr_triage.knowledge import ConceptTable
    from dr_triage.nlp import extract_mentions

    concepts = ConceptTable.default().concepts
    result = extract_mentions("stiff neck and light sensitivity", concepts)

    assert result.concept_ids == ["s_488", "s_418"]


def test_add_synonym():
    """Новий синонім враховується"""
    import pytest
    from dr_triage.knowledge import ConceptTable
    from dr_triage.nlp import MentionExtractor

    extractor = MentionExtractor.from_table(ConceptTable.default())
    extractor.add_synonym("lightheaded", "s_1394")

    assert extractor.extract("I am lightheaded").concept_ids == ["s_1394"]

    with pytest.raises(KeyError):
        extractor.add_synonym("x", "s_000")


@pytest.mark.asyncio
async def test_mention_parser_protocol():
    """Локальний екстрактор і обидва міркувачі реалізують MentionParser"""
    import httpx
    from dr_triage.config import RemoteBackendConfig
    from dr_triage.nlp import MentionParser
    from dr_triage.reasoning import LocalReasoner, RemoteReasoner

    extractor = _extractor()
    remote = RemoteReasoner(
        RemoteBackendConfig(app_id="id", app_key="key"),
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json={})),
    )

    assert isinstance(extractor, MentionParser)
    assert isinstance(LocalReasoner(), MentionParser)
    assert isinstance(remote, MentionParser)

    result = await extractor.parse_text("fever and cough")
    assert result == extractor.extract("fever and cough")
    await remote.aclose()
