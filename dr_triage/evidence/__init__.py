"""
Dr.Triage — Модель доказів

Чисті функції над списком EvidenceItem.

Приклад використання:
    from dr_triage.evidence import create_evidence, upsert_evidence, has_initial_evidence

    evidence = [create_evidence("s_1193", "present", "initial", is_initial=True)]
    evidence = upsert_evidence(evidence, "s_488", "absent")

    has_initial_evidence(evidence)  # True
"""

from .operations import (
    normalize_concept_id,
    create_evidence,
    upsert_evidence,
    has_initial_evidence,
    remove_evidence,
    evidence_by_state,
    present_concept_ids,
    ensure_initial,
)


__all__ = [
    "normalize_concept_id",
    "create_evidence",
    "upsert_evidence",
    "has_initial_evidence",
    "remove_evidence",
    "evidence_by_state",
    "present_concept_ids",
    "ensure_initial",
]
