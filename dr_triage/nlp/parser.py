"""
Dr.Triage — Протокол розбору тексту

Спільний інтерфейс для локального MentionExtractor та NLP віддаленого
сервісу (RemoteReasoner.parse_text): обидва повертають ExtractionResult.
"""

from typing import Protocol, runtime_checkable

from dr_triage.schemas import ExtractionResult


@runtime_checkable
class MentionParser(Protocol):
    async def parse_text(self, text: str) -> ExtractionResult:
        ...
