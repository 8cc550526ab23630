"""
Dr.Triage — Локальний резервний міркувач

Детермінований міркувач на таблиці концептів. Використовується, коли
облікові дані віддаленого сервісу не задані.

Алгоритм nextStep:
1. Ранжування: s = min(W · x, cap), де W — матриця внесків [стани × концепти],
   x — бінарний вектор присутніх симптомів; стани з s <= min_probability
   відкидаються; стабільне сортування за спаданням; топ max_conditions
2. Зупинка: StoppingCriteria (ліміт питань / ліміт присутніх симптомів)
3. Питання: перший ще не запитаний член кластера присутнього симптому,
   інакше перший ще не запитаний концепт у порядку таблиці
"""

import logging
from typing import List, Optional, Sequence

import numpy as np

from dr_triage.config import InterviewConfig
from dr_triage.evidence import present_concept_ids
from dr_triage.knowledge import Concept, ConceptTable
from dr_triage.nlp import MentionExtractor
from dr_triage.schemas import (
    ExtractionResult,
    PatientCase,
    Question,
    QuestionItem,
    QuestionKind,
    ReasoningStep,
    ScoredCondition,
    SearchResult,
    TriageResult,
)

from .base import ReasoningClient
from .stopping import StoppingCriteria
from .triage import LocalTriageClassifier


logger = logging.getLogger(__name__)


class LocalReasoner(ReasoningClient):
    """
    Резервний міркувач.

    Приклад:
        reasoner = LocalReasoner()
        step = await reasoner.next_step(case)

        print(step.question.prompt)        # Are you sensitive to light?
        for c in step.conditions:
            print(f"{c.name}: {c.probability:.2f}")
    """

    def __init__(
        self,
        table: Optional[ConceptTable] = None,
        config: Optional[InterviewConfig] = None,
    ):
        self.table = table or ConceptTable.default()
        self.config = config or InterviewConfig()

        self.stopping = StoppingCriteria(self.config)
        self.triage = LocalTriageClassifier(self.table, self.config)
        self.extractor = MentionExtractor.from_table(self.table)

    # -------------------------------------------------------------------------
    # ReasoningClient
    # -------------------------------------------------------------------------

    async def next_step(self, case: PatientCase) -> ReasoningStep:
        self._check_initial(case)

        present = present_concept_ids(case.evidence)
        conditions = self.score(present)

        available = self._unanswered(case)
        decision = self.stopping.check(
            questions_asked=case.questions_asked,
            present_count=len(present),
            available_questions=len(available),
        )

        question = None
        if decision.should_continue:
            question = self._build_question(self._select_concept(case, available))

        logger.debug(
            "next_step case=%s present=%d asked=%d reason=%s",
            case.id, len(present), case.questions_asked, decision.reason.value,
        )

        return ReasoningStep(
            question=question,
            conditions=conditions,
            should_stop=decision.should_stop,
        )

    async def classify_triage(self, case: PatientCase) -> TriageResult:
        self._check_evidence(case)

        present = present_concept_ids(case.evidence)
        result = self.triage.classify(present, self.score(present))

        logger.debug("classify_triage case=%s level=%s", case.id, result.level.value)
        return result

    async def search(self, phrase: str, *, limit: Optional[int] = None) -> List[SearchResult]:
        term = (phrase or "").strip().lower()
        if not term:
            return []
        limit = limit or self.config.search_limit

        results = []
        for concept in self.table.concepts:
            if any(term in p.lower() for p in concept.phrases):
                results.append(SearchResult(
                    concept_id=concept.id,
                    label=concept.name,
                    kind=concept.kind,
                ))
                if len(results) >= limit:
                    break
        return results

    async def parse_text(self, text: str) -> ExtractionResult:
        return self.extractor.extract(text)

    # -------------------------------------------------------------------------
    # Ранжування
    # -------------------------------------------------------------------------

    def score(self, present_ids: Sequence[str]) -> List[ScoredCondition]:
        """
        Ранжувати стани за присутніми симптомами.

        Returns:
            До max_conditions станів, p у (min_probability, probability_cap]
        """
        if not self.table.conditions:
            return []

        weights = self.table.weight_matrix()
        x = self.table.indicator_vector(list(present_ids))

        scores = np.minimum(weights @ x, self.config.probability_cap)
        order = np.argsort(-scores, kind="stable")

        result = []
        for idx in order:
            if scores[idx] <= self.config.min_probability:
                continue
            condition = self.table.conditions[idx]
            result.append(ScoredCondition(
                id=condition.id,
                name=condition.name,
                common_name=condition.common_name,
                probability=round(float(scores[idx]), 4),
                severity=condition.severity,
                acuteness=condition.acuteness,
                prevalence=condition.prevalence,
            ))
            if len(result) >= self.config.max_conditions:
                break

        return result

    # -------------------------------------------------------------------------
    # Вибір питання
    # -------------------------------------------------------------------------

    def _unanswered(self, case: PatientCase) -> List[Concept]:
        answered = set(case.evidence_ids)
        return [c for c in self.table.concepts if c.id not in answered]

    def _select_concept(self, case: PatientCase, available: List[Concept]) -> Concept:
        available_ids = {c.id for c in available}

        seen_clusters = set()
        for concept_id in present_concept_ids(case.evidence):
            for cluster in self.table.clusters_of(concept_id):
                if cluster in seen_clusters:
                    continue
                seen_clusters.add(cluster)
                for member_id in self.table.cluster_members(cluster):
                    if member_id in available_ids:
                        return self.table.get_concept(member_id)

        return available[0]

    @staticmethod
    def _build_question(concept: Concept) -> Question:
        return Question(
            kind=QuestionKind.SINGLE,
            prompt=concept.question,
            items=[QuestionItem(concept_id=concept.id, name=concept.name)],
        )

    def __repr__(self) -> str:
        return f"LocalReasoner(table={self.table!r})"
