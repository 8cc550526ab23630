"""
Dr.Triage — Операції над списком доказів

Чисті функції без побічних ефектів: вхідний список ніколи не змінюється,
завжди повертається новий (виклики покладаються на зміну посилання).
"""

from typing import Any, List, Sequence

from dr_triage.exceptions import ValidationError
from dr_triage.schemas import (
    EvidenceItem,
    EvidenceSource,
    EvidenceState,
    coerce_state,
)


def normalize_concept_id(concept_id: Any) -> str:
    """ID концепту без пробілів по краях; порожній або не рядок → ValidationError"""
    if not isinstance(concept_id, str) or not concept_id.strip():
        raise ValidationError(f"Invalid concept id: {concept_id!r}")
    return concept_id.strip()


def create_evidence(
    concept_id: str,
    state: Any,
    source: Any = EvidenceSource.PREDEFINED,
    is_initial: bool = False,
) -> EvidenceItem:
    """
    Створити один доказ.

    Args:
        concept_id: ID симптому / фактору ризику
        state: present / absent / unknown (рядок або EvidenceState)
        source: initial / predefined / suggested
        is_initial: чи є доказ початковим

    Raises:
        ValidationError: якщо стан або джерело некоректні
    """
    concept_id = normalize_concept_id(concept_id)
    state = coerce_state(state)

    try:
        source = EvidenceSource(source)
    except ValueError:
        raise ValidationError(
            f"Invalid evidence source: {source!r}",
            details={"allowed": [s.value for s in EvidenceSource]},
        ) from None

    return EvidenceItem(
        concept_id=concept_id,
        state=state,
        source=source,
        is_initial=bool(is_initial),
    )


def upsert_evidence(
    items: Sequence[EvidenceItem],
    concept_id: str,
    state: Any,
) -> List[EvidenceItem]:
    """
    Оновити стан концепту або додати новий доказ.

    Існуючий запис замінюється на тій самій позиції (source та is_initial
    зберігаються); якщо концепту немає — додається predefined, не initial.
    Ідемпотентна: повторний виклик з тими ж аргументами дає той самий список.
    """
    concept_id = normalize_concept_id(concept_id)
    state = coerce_state(state)
    updated = list(items)

    for i, item in enumerate(updated):
        if item.concept_id == concept_id:
            updated[i] = item.with_state(state)
            return updated

    updated.append(create_evidence(concept_id, state))
    return updated


def has_initial_evidence(items: Sequence[EvidenceItem]) -> bool:
    """Чи є хоча б один доказ з is_initial = True"""
    return any(item.is_initial for item in items)


def remove_evidence(items: Sequence[EvidenceItem], concept_id: str) -> List[EvidenceItem]:
    """Новий список без концепту"""
    concept_id = normalize_concept_id(concept_id)
    return [item for item in items if item.concept_id != concept_id]


def evidence_by_state(items: Sequence[EvidenceItem], state: Any) -> List[EvidenceItem]:
    """Докази з заданим станом"""
    state = coerce_state(state)
    return [item for item in items if item.state == state]


def present_concept_ids(items: Sequence[EvidenceItem]) -> List[str]:
    """ID концептів зі станом PRESENT (в порядку доказів)"""
    return [item.concept_id for item in items if item.state == EvidenceState.PRESENT]


def ensure_initial(items: Sequence[EvidenceItem]) -> List[EvidenceItem]:
    """
    Гарантувати наявність початкового доказу.

    Якщо список не порожній і жоден доказ не позначено initial —
    перший доказ стає initial. Повертає новий список.
    """
    updated = list(items)
    if updated and not has_initial_evidence(updated):
        updated[0] = updated[0].with_initial(True)
    return updated
