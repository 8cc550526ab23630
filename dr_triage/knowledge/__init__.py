"""
Dr.Triage — Локальна база знань

Таблиця концептів (симптоми з синонімами, кластерами, серйозністю) та
станів з ваговими внесками.

Приклад використання:
    from dr_triage.knowledge import ConceptTable

    table = ConceptTable.default()                 # демо-таблиця
    table = ConceptTable.from_json("concepts.json")  # власна таблиця
"""

from .concept_table import (
    Seriousness,
    Concept,
    ConditionProfile,
    ConceptTable,
    ALARMING_SERIOUSNESS,
)


__all__ = [
    "Seriousness",
    "Concept",
    "ConditionProfile",
    "ConceptTable",
    "ALARMING_SERIOUSNESS",
]
