"""
Dr.Triage — Контракт сервісу міркувань

ReasoningClient — абстракція, через яку оркестратор інтерв'ю отримує
наступне питання, ранжовані стани та рівень тріажу. Дві реалізації:
- LocalReasoner: детермінований резервний міркувач на таблиці концептів
- RemoteReasoner: адаптер до віддаленого діагностичного HTTP API

Передумови перевіряються тут, тому обидві реалізації відхиляють
некоректні випадки однаково.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from dr_triage.evidence import has_initial_evidence
from dr_triage.exceptions import InvalidCaseError
from dr_triage.schemas import (
    ExtractionResult,
    PatientCase,
    ReasoningStep,
    SearchResult,
    TriageResult,
)


class ReasoningClient(ABC):
    """
    Базовий клієнт міркувань.

    Приклад:
        async with create_reasoning_client(config) as client:
            step = await client.next_step(case)
            if step.should_stop:
                triage = await client.classify_triage(case)
    """

    @abstractmethod
    async def next_step(self, case: PatientCase) -> ReasoningStep:
        """
        Наступне питання, стани та сигнал зупинки.

        Raises:
            InvalidCaseError: немає початкового доказу
        """

    @abstractmethod
    async def classify_triage(self, case: PatientCase) -> TriageResult:
        """
        Рівень терміновості для поточних доказів.

        Raises:
            InvalidCaseError: список доказів порожній
        """

    @abstractmethod
    async def search(self, phrase: str, *, limit: Optional[int] = None) -> List[SearchResult]:
        """Пошук концептів за фразою (limit=None: типовий ліміт реалізації)"""

    @abstractmethod
    async def parse_text(self, text: str) -> ExtractionResult:
        """Витягнути згадки симптомів з тексту"""

    async def aclose(self) -> None:
        """Звільнити ресурси (HTTP з'єднання тощо)"""

    async def __aenter__(self) -> "ReasoningClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    # -------------------------------------------------------------------------
    # Передумови
    # -------------------------------------------------------------------------

    @staticmethod
    def _check_initial(case: PatientCase) -> None:
        if not has_initial_evidence(case.evidence):
            raise InvalidCaseError(
                "At least one initial evidence item is required",
                details={"case_id": case.id, "evidence": len(case.evidence)},
            )

    @staticmethod
    def _check_evidence(case: PatientCase) -> None:
        if not case.evidence:
            raise InvalidCaseError(
                "Triage requires at least one evidence item",
                details={"case_id": case.id},
            )
