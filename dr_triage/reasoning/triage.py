"""
Dr.Triage — Локальне правило тріажу

Правило (перше, що спрацювало):
1. EMERGENCY: хоча б один присутній симптом має серйозність serious/emergency
2. CONSULTATION: присутніх симптомів >= consultation_min_present (3)
3. SELF_CARE: інакше

serious_conditions — до serious_conditions_limit станів з поточного
ранжування, тяжкість яких відповідає рівню (emergency → severe,
consultation → moderate, self_care → порожньо).
"""

from typing import Dict, List, Optional, Sequence

from dr_triage.config import InterviewConfig
from dr_triage.knowledge import ConceptTable
from dr_triage.schemas import ScoredCondition, TriageLevel, TriageResult


TRIAGE_TEXT: Dict[TriageLevel, Dict[str, str]] = {
    TriageLevel.EMERGENCY: {
        "label": "Emergency Care Recommended",
        "description": (
            "Your symptoms suggest a potentially serious condition "
            "that requires immediate medical attention."
        ),
    },
    TriageLevel.CONSULTATION: {
        "label": "Medical Consultation Recommended",
        "description": (
            "Your symptoms suggest you should consult with a healthcare "
            "provider for proper evaluation."
        ),
    },
    TriageLevel.SELF_CARE: {
        "label": "Self-Care May Be Appropriate",
        "description": (
            "Your symptoms may be manageable with self-care, "
            "but monitor for any worsening."
        ),
    },
}

# Тяжкість станів, що показуються для рівня
LEVEL_SEVERITY: Dict[TriageLevel, Optional[str]] = {
    TriageLevel.EMERGENCY: "severe",
    TriageLevel.CONSULTATION: "moderate",
    TriageLevel.SELF_CARE: None,
}


class LocalTriageClassifier:
    """
    Класифікатор терміновості на таблиці концептів.

    Приклад:
        classifier = LocalTriageClassifier(ConceptTable.default())
        result = classifier.classify(["s_1193", "s_418"], conditions)
        print(result.level)  # TriageLevel.EMERGENCY (ригідність шиї)
    """

    def __init__(self, table: ConceptTable, config: Optional[InterviewConfig] = None):
        self.table = table
        self.config = config or InterviewConfig()

    def level_for(self, present_ids: Sequence[str]) -> TriageLevel:
        for concept_id in present_ids:
            concept = self.table.get_concept(concept_id)
            if concept is not None and concept.is_alarming:
                return TriageLevel.EMERGENCY

        if len(present_ids) >= self.config.consultation_min_present:
            return TriageLevel.CONSULTATION

        return TriageLevel.SELF_CARE

    def classify(
        self,
        present_ids: Sequence[str],
        conditions: Sequence[ScoredCondition] = (),
    ) -> TriageResult:
        """
        Args:
            present_ids: ID присутніх симптомів
            conditions: Поточне ранжування станів

        Returns:
            TriageResult
        """
        level = self.level_for(present_ids)
        text = TRIAGE_TEXT[level]

        return TriageResult(
            level=level,
            label=text["label"],
            description=text["description"],
            serious_conditions=self._serious_conditions(level, conditions),
        )

    def _serious_conditions(
        self,
        level: TriageLevel,
        conditions: Sequence[ScoredCondition],
    ) -> List[ScoredCondition]:
        severity = LEVEL_SEVERITY[level]
        if severity is None:
            return []
        matching = [c for c in conditions if c.severity == severity]
        return matching[: self.config.serious_conditions_limit]
