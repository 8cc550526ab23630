"""
Тести для модуля knowledge

Запуск: pytest tests/test_knowledge.py -v
"""

import pytest


def test_default_table():
    """Тест вбудованої таблиці"""
    from dr_triage.knowledge import ConceptTable, Seriousness

    table = ConceptTable.default()

    assert len(table) == 10
    assert len(table.conditions) == 6
    assert table.concept_ids[0] == "s_1193"
    assert "s_418" in table
    assert table.get_concept("s_418").seriousness == Seriousness.SERIOUS
    assert table.get_concept("s_418").is_alarming
    assert not table.get_concept("s_13").is_alarming
    assert table.get_concept("s_999") is None

    print(f"✓ {table!r}")


def test_clusters():
    """Кластери: члени в порядку таблиці, концепт може бути в кількох"""
    from dr_triage.knowledge import ConceptTable

    table = ConceptTable.default()

    assert table.cluster_members("headache") == ["s_1193", "s_488", "s_98"]
    assert table.cluster_members("respiratory") == ["s_98", "s_13", "s_21"]
    assert table.clusters_of("s_98") == ["headache", "respiratory"]
    assert table.cluster_of("s_13") == "respiratory"
    assert table.cluster_of("s_418") is None
    assert table.cluster_members("unknown") == []


def test_weight_matrix():
    """Матриця внесків [стани × концепти]"""
    from dr_triage.knowledge import ConceptTable

    table = ConceptTable.default()
    matrix = table.weight_matrix()

    assert matrix.shape == (6, 10)
    migraine = [c.id for c in table.conditions].index("c_49")
    assert matrix[migraine, table.position_of("s_1193")] == pytest.approx(0.6)
    assert matrix[migraine, table.position_of("s_13")] == 0.0
    assert table.weight_matrix() is matrix


def test_indicator_vector():
    """Бінарний вектор ігнорує невідомі ID"""
    from dr_triage.knowledge import ConceptTable

    table = ConceptTable.default()
    x = table.indicator_vector(["s_1193", "s_98", "s_unknown"])

    assert x.sum() == 2
    assert x[table.position_of("s_98")] == 1.0


def test_phrases():
    """Фрази: назва, побутова назва, синоніми"""
    from dr_triage.knowledge import ConceptTable

    concept = ConceptTable.default().get_concept("s_418")
    assert concept.phrases[:2] == ["Neck stiffness", "Stiff neck"]
    assert "ригідність шиї" in concept.phrases


def test_invalid_tables():
    """Дублікати та невідомі посилання → ConfigurationError"""
    from dr_triage.knowledge import ConceptTable
    from dr_triage.exceptions import ConfigurationError

    concept = {"id": "s_1", "name": "Pain"}

    with pytest.raises(ConfigurationError):
        ConceptTable.from_dict({"concepts": [concept, concept]})

    with pytest.raises(ConfigurationError):
        ConceptTable.from_dict({
            "concepts": [concept],
            "conditions": [{"id": "c_1", "name": "X", "weights": {"s_2": 0.5}}],
        })

    with pytest.raises(ConfigurationError):
        ConceptTable.from_dict({"concepts": [{"id": "s_1"}]})

    with pytest.raises(ConfigurationError):
        ConceptTable.from_dict({"concepts": [{**concept, "seriousness": "deadly"}]})

    with pytest.raises(ConfigurationError):
        ConceptTable.from_dict({"concepts": [concept], "clusters": {"pain": ["s_1", "s_9"]}})


def test_default_question_text():
    """Текст питання за замовчуванням"""
    from dr_triage.knowledge import ConceptTable

    table = ConceptTable.from_dict({"concepts": [{"id": "s_1", "name": "Back pain"}]})
    assert table.get_concept("s_1").question == "Do you have back pain?"


def test_json_roundtrip(tmp_path):
    """Збереження та завантаження JSON"""
    from dr_triage.knowledge import ConceptTable

    table = ConceptTable.default()
    path = tmp_path / "concepts.json"
    table.save(str(path))

    loaded = ConceptTable.from_json(str(path))

    assert loaded.concept_ids == table.concept_ids
    assert loaded.to_dict() == table.to_dict()
    assert (loaded.weight_matrix() == table.weight_matrix()).all()
