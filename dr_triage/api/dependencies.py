"""
Dr.Triage — API Dependencies

Dependency Injection для FastAPI.
Створення сервісу міркувань, зберігання сесій інтерв'ю.
"""

import asyncio
import logging
from datetime import datetime, timedelta
from typing import Dict, List, Optional
import threading

from dr_triage.config import DrTriageConfig
from dr_triage.interview import InterviewOrchestrator
from dr_triage.knowledge import ConceptTable
from dr_triage.reasoning import (
    LocalReasoner,
    ReasoningClient,
    create_reasoning_client,
    load_concept_table,
)
from dr_triage.schemas import PatientCase

from .config import config


logger = logging.getLogger(__name__)


class BackendManager:
    """
    Менеджер сервісу міркувань — створює клієнт один раз.
    Singleton pattern.
    """

    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self._initialized = True
        self.is_loaded = False
        self.settings: Optional[DrTriageConfig] = None
        self.table: Optional[ConceptTable] = None
        self.client: Optional[ReasoningClient] = None

    def load(self, settings: Optional[DrTriageConfig] = None) -> None:
        """Створити клієнт міркувань з конфігурації"""
        if self.is_loaded:
            return

        self.settings = settings or DrTriageConfig.from_env()
        self.table = load_concept_table(self.settings)
        self.client = create_reasoning_client(self.settings, table=self.table)
        self.is_loaded = True

        logger.info(
            "Reasoning backend: %s (%d concepts, %d conditions)",
            self.backend_name, len(self.table.concepts), len(self.table.conditions),
        )

    async def close(self) -> None:
        if self.client is not None:
            await self.client.aclose()
        self.client = None
        self.is_loaded = False

    @property
    def backend_name(self) -> str:
        if self.client is None:
            return "none"
        return "local" if isinstance(self.client, LocalReasoner) else "remote"


class InterviewSession:
    """
    Сесія інтерв'ю: оркестратор + замок.
    Всі зміни випадку виконуються під lock (послідовно).
    """

    def __init__(self, orchestrator: InterviewOrchestrator):
        self.orchestrator = orchestrator
        self.lock = asyncio.Lock()
        self.created_at = datetime.now()
        self.updated_at = datetime.now()

    @property
    def case(self) -> Optional[PatientCase]:
        return self.orchestrator.case

    def touch(self) -> None:
        self.updated_at = datetime.now()


class SessionManager:
    """
    Менеджер сесій інтерв'ю.
    Зберігає сесії в пам'яті, ключ — ID випадку.
    """

    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self._initialized = True
        self.sessions: Dict[str, InterviewSession] = {}
        self.lock = threading.Lock()

    async def create_session(
        self,
        backend: BackendManager,
        age,
        sex,
        concept_ids: List[str],
    ) -> InterviewSession:
        """Створити сесію та розпочати інтерв'ю"""
        orchestrator = InterviewOrchestrator(
            backend.client,
            config=backend.settings.interview,
        )
        case = await orchestrator.start_interview(age, sex, concept_ids)
        session = InterviewSession(orchestrator)

        with self.lock:
            # Очистка старих сесій
            self._cleanup_old_sessions()
            self._evict_overflow()
            self.sessions[case.id] = session

        return session

    def get_session(self, session_id: str) -> Optional[InterviewSession]:
        """Отримати сесію"""
        return self.sessions.get(session_id)

    async def delete_session(self, session_id: str) -> bool:
        """Видалити сесію (скидання чекає на запити, що вже виконуються)"""
        with self.lock:
            session = self.sessions.pop(session_id, None)
        if session is None:
            return False
        async with session.lock:
            session.orchestrator.reset_interview()
        return True

    def get_active_count(self) -> int:
        """Кількість сесій"""
        return len(self.sessions)

    def _cleanup_old_sessions(self):
        """Видалити застарілі сесії"""
        timeout = timedelta(minutes=config.session_timeout_minutes)
        now = datetime.now()

        expired = [
            sid for sid, session in self.sessions.items()
            if now - session.updated_at > timeout
        ]

        for sid in expired:
            del self.sessions[sid]

        if expired:
            logger.info("Expired %d sessions", len(expired))

    def _evict_overflow(self):
        while len(self.sessions) >= config.max_sessions:
            oldest = min(self.sessions, key=lambda sid: self.sessions[sid].updated_at)
            del self.sessions[oldest]


# Глобальні менеджери
backend_manager = BackendManager()
session_manager = SessionManager()


# Dependency functions для FastAPI
def get_backend() -> BackendManager:
    """Dependency: отримати менеджер сервісу міркувань"""
    if not backend_manager.is_loaded:
        backend_manager.load()
    return backend_manager


def get_sessions() -> SessionManager:
    """Dependency: отримати менеджер сесій"""
    return session_manager
