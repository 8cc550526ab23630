"""
Dr.Triage — Сервіс міркувань

Компоненти:
- ReasoningClient: спільний контракт (next_step, classify_triage, search, parse_text)
- LocalReasoner: детермінований резервний міркувач на таблиці концептів
- RemoteReasoner: адаптер віддаленого діагностичного API (httpx)
- StoppingCriteria: критерії зупинки інтерв'ю
- LocalTriageClassifier: локальне правило тріажу

Приклад використання:
    from dr_triage.reasoning import create_reasoning_client

    client = create_reasoning_client(config)   # remote або local
    step = await client.next_step(case)
"""

from .base import ReasoningClient
from .stopping import StoppingCriteria, StopDecision, StopReason
from .triage import LocalTriageClassifier, TRIAGE_TEXT
from .local import LocalReasoner
from .remote import RemoteReasoner, interview_id_for
from .factory import create_reasoning_client, load_concept_table


__all__ = [
    "ReasoningClient",
    "StoppingCriteria",
    "StopDecision",
    "StopReason",
    "LocalTriageClassifier",
    "TRIAGE_TEXT",
    "LocalReasoner",
    "RemoteReasoner",
    "interview_id_for",
    "create_reasoning_client",
    "load_concept_table",
]
