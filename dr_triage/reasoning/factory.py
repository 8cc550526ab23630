"""
Dr.Triage — Вибір сервісу міркувань

Віддалений сервіс — якщо задані облікові дані, інакше локальний
резервний міркувач. Вибір робиться один раз при створенні.
"""

import logging
from typing import Optional

import httpx

from dr_triage.config import DrTriageConfig, get_default_config
from dr_triage.knowledge import ConceptTable

from .base import ReasoningClient
from .local import LocalReasoner
from .remote import RemoteReasoner


logger = logging.getLogger(__name__)


def load_concept_table(config: DrTriageConfig) -> ConceptTable:
    """Таблиця концептів з config.concept_table_path або вбудована"""
    if config.concept_table_path:
        logger.info("Loading concept table from %s", config.concept_table_path)
        return ConceptTable.from_json(config.concept_table_path)
    return ConceptTable.default()


def create_reasoning_client(
    config: Optional[DrTriageConfig] = None,
    table: Optional[ConceptTable] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ReasoningClient:
    """
    Створити клієнт міркувань.

    Args:
        config: Конфігурація (None → за замовчуванням)
        table: Таблиця концептів для локального міркувача
        transport: httpx транспорт для віддаленого клієнта (тести)

    Returns:
        RemoteReasoner або LocalReasoner
    """
    config = config or get_default_config()

    if config.remote.is_configured:
        logger.info("Using remote reasoning backend at %s", config.remote.base_url)
        return RemoteReasoner(config.remote, transport=transport)

    logger.warning("Diagnostic API credentials not found, using local fallback reasoner")
    return LocalReasoner(table or load_concept_table(config), config.interview)
