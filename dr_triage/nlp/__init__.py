"""
Dr.Triage — NLP модуль

Витягування згадок симптомів з вільного тексту.

Приклад використання:
    from dr_triage.nlp import MentionExtractor

    extractor = MentionExtractor.from_table(ConceptTable.default())
    result = extractor.extract("Болить голова і температура")

    # MentionParser: extractor, LocalReasoner або RemoteReasoner
    result = await parser.parse_text("Bad headache")
"""

from .mention_extractor import (
    MentionExtractor,
    extract_mentions,
    normalize_text,
)
from .parser import MentionParser


__all__ = [
    "MentionExtractor",
    "MentionParser",
    "extract_mentions",
    "normalize_text",
]
