"""
Dr.Triage — Mention Extractor

Витягування згадок симптомів з вільного тексту скарг пацієнта.

Функціональність:
- Співставлення без урахування регістру з назвою, побутовою назвою та
  синонімами кожного концепту
- Перша фраза, що співпала, виграє (одна згадка на концепт)
- Кожна згадка має стан present: заперечення не розпізнаються
  ("no fever" дасть fever = present)

Приклад:
    extractor = MentionExtractor.from_table(ConceptTable.default())
    result = extractor.extract("Bad headache and a stiff neck since yesterday")

    print(result.concept_ids)  # ['s_1193', 's_418']
    print(result.is_obvious)   # True
"""

import re
import unicodedata
from typing import Dict, Iterable, List, Optional, Pattern, Sequence, Tuple

from dr_triage.knowledge import Concept, ConceptTable
from dr_triage.schemas import EvidenceState, ExtractionResult, Mention


def normalize_text(text: str) -> str:
    """Нормалізація тексту (NFKC, lowercase, пробіли, спецсимволи)"""
    text = unicodedata.normalize("NFKC", text)
    text = text.lower()
    text = re.sub(r"[^\w\s'\-]", " ", text)
    text = re.sub(r"\s+", " ", text)
    return text.strip()


def _phrase_pattern(phrase: str) -> Pattern:
    # Межі слова для кирилиці та латиниці
    return re.compile(r"(?<!\w)" + re.escape(phrase) + r"(?!\w)")


def _compile(concepts: Iterable[Concept]) -> List[Tuple[Concept, List[Tuple[str, Pattern]]]]:
    compiled = []
    for concept in concepts:
        patterns = []
        seen = set()
        for phrase in concept.phrases:
            normalized = normalize_text(phrase)
            if normalized and normalized not in seen:
                seen.add(normalized)
                patterns.append((normalized, _phrase_pattern(normalized)))
        compiled.append((concept, patterns))
    return compiled


def _match(
    text: str,
    compiled: Sequence[Tuple[Concept, List[Tuple[str, Pattern]]]],
) -> ExtractionResult:
    if not text or not text.strip():
        return ExtractionResult()

    normalized = normalize_text(text)
    mentions = []

    for concept, patterns in compiled:
        for phrase, pattern in patterns:
            if pattern.search(normalized):
                mentions.append(Mention(
                    concept_id=concept.id,
                    name=concept.name,
                    matched_phrase=phrase,
                    state=EvidenceState.PRESENT,
                ))
                break

    return ExtractionResult(mentions=mentions, is_obvious=len(mentions) > 0)


def extract_mentions(free_text: str, known_concepts: Iterable[Concept]) -> ExtractionResult:
    """
    Швидка функція: витягнути згадки з тексту.

    Args:
        free_text: Текст з описом скарг
        known_concepts: Концепти (порядок визначає порядок згадок)

    Returns:
        ExtractionResult
    """
    return _match(free_text, _compile(known_concepts))


class MentionExtractor:
    """
    Екстрактор згадок з передкомпільованими патернами.

    Приклад:
        extractor = MentionExtractor.from_table(table)
        result = extractor.extract("I have a fever and I keep coughing")
        # [Mention(concept_id='s_98', ...), Mention(concept_id='s_13', ...)]
    """

    def __init__(self, concepts: Sequence[Concept]):
        self.concepts = list(concepts)
        self._compiled = _compile(self.concepts)
        self._by_id: Dict[str, Concept] = {c.id: c for c in self.concepts}

    @classmethod
    def from_table(cls, table: ConceptTable) -> "MentionExtractor":
        return cls(table.concepts)

    def extract(self, text: str) -> ExtractionResult:
        """Витягнути згадки з тексту"""
        return _match(text, self._compiled)

    async def parse_text(self, text: str) -> ExtractionResult:
        return self.extract(text)

    def add_synonym(self, synonym: str, concept_id: str) -> None:
        """
        Додати синонім до концепту.

        Args:
            synonym: Синонім (напр. "болить голова")
            concept_id: ID концепту (напр. "s_1193")
        """
        concept = self._by_id.get(concept_id)
        if concept is None:
            raise KeyError(f"Unknown concept: {concept_id}")
        concept.synonyms.append(synonym)
        self._compiled = _compile(self.concepts)

    def get_concept(self, concept_id: str) -> Optional[Concept]:
        return self._by_id.get(concept_id)

    def __repr__(self) -> str:
        return f"MentionExtractor(concepts={len(self.concepts)})"
