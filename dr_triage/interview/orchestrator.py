"""
Dr.Triage — Оркестратор діагностичного інтерв'ю

Керує життєвим циклом одного PatientCase:

    start_interview → [answer_question | answer_group | add_symptom]* → completed
                                                                   ↘ abandoned

Після кожної зміни доказів запитує у ReasoningClient наступний крок.
Коли сервіс сигналізує should_stop — випадок переходить у completed і
(якщо тріажу ще немає) запитується класифікація терміновості.

Гарантії узгодженості:
- Кожен виклик міркувань працює з копією-кандидатом; власний випадок
  замінюється лише після успіху. Помилка або скасування (CancelledError)
  лишає випадок без змін.
- Помилка тріажу після успішного кроку зупинки: випадок лишається
  completed з triage = None, помилка прокидається далі.
- Якщо випадок скинули або замінили, поки тривав запит, результат
  відкидається (ValidationError).

Оркестратор не знає, яка реалізація ReasoningClient активна.
"""

import logging
from typing import Any, Callable, Dict, Iterable, Optional

from dr_triage.config import InterviewConfig
from dr_triage.evidence import (
    create_evidence,
    ensure_initial,
    has_initial_evidence,
    normalize_concept_id,
    upsert_evidence,
)
from dr_triage.exceptions import InvalidCaseError, ValidationError
from dr_triage.nlp import MentionParser
from dr_triage.reasoning import ReasoningClient
from dr_triage.schemas import (
    CaseStatus,
    Demographics,
    EvidenceSource,
    EvidenceState,
    ExtractionResult,
    PatientCase,
    QuestionKind,
    TriageResult,
    coerce_state,
)


logger = logging.getLogger(__name__)


class InterviewOrchestrator:
    """
    Оркестратор інтерв'ю.

    Приклад:
        orchestrator = InterviewOrchestrator(LocalReasoner())

        case = await orchestrator.start_interview(34, "female", ["s_1193"])
        print(case.current_question.prompt)   # Are you sensitive to light?

        case = await orchestrator.answer_question("s_488", "present")
        ...
        if case.status == CaseStatus.COMPLETED:
            print(case.triage.label)
    """

    def __init__(
        self,
        client: ReasoningClient,
        config: Optional[InterviewConfig] = None,
        extractor: Optional[MentionParser] = None,
        on_complete: Optional[Callable[[PatientCase], Any]] = None,
    ):
        self.client = client
        self.config = config or InterviewConfig()
        self.extractor = extractor
        self.on_complete = on_complete

        self._case: Optional[PatientCase] = None

    # =========================================================================
    # Стан
    # =========================================================================

    @property
    def case(self) -> Optional[PatientCase]:
        """Знімок поточного випадку (None — інтерв'ю не розпочато)"""
        return self._case.snapshot() if self._case is not None else None

    @property
    def progress_percentage(self) -> float:
        if self._case is None:
            return 0.0
        progress = self._case.questions_asked / self.config.max_questions * 100
        return min(100.0, progress)

    @property
    def can_proceed(self) -> bool:
        """Чи можна запитувати міркування (є докази з початковим)"""
        if self._case is None:
            return False
        return bool(self._case.evidence) and has_initial_evidence(self._case.evidence)

    # =========================================================================
    # Життєвий цикл
    # =========================================================================

    async def start_interview(
        self,
        age: Any,
        sex: Any,
        initial_concept_ids: Iterable[str] = (),
    ) -> PatientCase:
        """
        Розпочати нове інтерв'ю.

        Args:
            age: Вік (0..120)
            sex: "male" / "female"
            initial_concept_ids: Початкові симптоми (present, source=initial)

        Returns:
            Знімок нового випадку

        Raises:
            ValidationError: некоректна демографія або ID концепту
        """
        demographics = Demographics.create(age, sex)

        evidence = []
        seen = set()
        for concept_id in map(normalize_concept_id, initial_concept_ids):
            if concept_id in seen:
                continue
            seen.add(concept_id)
            evidence.append(create_evidence(
                concept_id,
                EvidenceState.PRESENT,
                EvidenceSource.INITIAL,
                is_initial=not evidence,
            ))

        candidate = PatientCase(demographics=demographics, evidence=evidence)

        if evidence:
            result = await self._advance(candidate, base=self._case)
        else:
            self._case = candidate
            result = candidate.snapshot()

        logger.info(
            "Interview %s started: age=%d sex=%s initial=%d",
            candidate.id, demographics.age, demographics.sex.value, len(evidence),
        )
        return result

    async def answer_question(self, concept_id: str, state: Any) -> PatientCase:
        """
        Відповісти на поточне питання (один концепт).

        Raises:
            ValidationError: немає активного випадку / питання, концепт не
                з поточного питання, некоректний стан
        """
        return await self.answer_group({concept_id: state})

    async def answer_group(self, answers: Dict[str, Any]) -> PatientCase:
        """
        Відповісти на групове питання: всі відповіді застосовуються разом,
        лічильник питань збільшується на 1.
        """
        case = self._require_active()
        if not case.has_pending_question:
            raise ValidationError("There is no outstanding question to answer")
        question = case.current_question
        if not answers:
            raise ValidationError("At least one answer is required")

        answers = {normalize_concept_id(cid): state for cid, state in answers.items()}

        unknown = [cid for cid in answers if not question.has_concept(cid)]
        if unknown:
            raise ValidationError(
                "Answer does not belong to the current question",
                details={"concept_ids": unknown, "expected": question.concept_ids},
            )
        if question.kind == QuestionKind.GROUP_SINGLE and len(answers) != 1:
            raise ValidationError("A group_single question takes exactly one answer")

        states = {cid: coerce_state(state) for cid, state in answers.items()}

        candidate = case.snapshot()
        for concept_id, state in states.items():
            candidate.evidence = upsert_evidence(candidate.evidence, concept_id, state)
        candidate.questions_asked += 1

        return await self._advance(candidate, base=case)

    async def add_symptom(self, concept_id: str, state: Any = EvidenceState.PRESENT) -> PatientCase:
        """
        Додати доказ поза питаннями (пошук, NLP). Лічильник питань не змінюється.
        """
        case = self._require_active()
        candidate = case.snapshot()
        candidate.evidence = self._merge(candidate.evidence, concept_id, state)
        return await self._advance(candidate, base=case)

    async def parse_symptoms(self, text: str) -> ExtractionResult:
        """Витягнути згадки з тексту (випадок не змінюється)"""
        if self.extractor is not None:
            return await self.extractor.parse_text(text)
        return await self.client.parse_text(text)

    async def add_mentions(self, result: ExtractionResult) -> PatientCase:
        """Додати всі згадки разом (один виклик міркувань)"""
        case = self._require_active()
        if not result.mentions:
            return case.snapshot()

        candidate = case.snapshot()
        for mention in result.mentions:
            candidate.evidence = self._merge(candidate.evidence, mention.concept_id, mention.state)
        return await self._advance(candidate, base=case)

    async def request_triage(self) -> TriageResult:
        """
        Класифікувати терміновість для поточних доказів (перезаписує case.triage).

        Raises:
            InvalidCaseError: немає доказів
        """
        case = self._require_case()
        if case.status == CaseStatus.ABANDONED:
            raise ValidationError("Interview was abandoned")
        if not case.evidence:
            raise InvalidCaseError("Triage requires at least one evidence item")

        triage = await self.client.classify_triage(case.snapshot())

        self._check_unchanged(case)
        case.triage = triage
        case.touch()
        logger.info("Interview %s triage: %s", case.id, triage.level.value)
        return triage

    def complete_interview(self) -> PatientCase:
        """Примусово завершити (пацієнт вийшов раніше). Докази не змінюються."""
        case = self._require_case()
        if case.status == CaseStatus.ABANDONED:
            raise ValidationError("Interview was abandoned")
        if case.status == CaseStatus.COMPLETED:
            return case.snapshot()

        case.status = CaseStatus.COMPLETED
        case.current_question = None
        case.touch()
        logger.info("Interview %s completed by user", case.id)
        self._notify_complete(case)
        return case.snapshot()

    def abandon_interview(self) -> PatientCase:
        """Покинути інтерв'ю: подальші запити заборонені"""
        case = self._require_case()
        case.status = CaseStatus.ABANDONED
        case.current_question = None
        case.touch()
        logger.info("Interview %s abandoned", case.id)
        return case.snapshot()

    def reset_interview(self) -> None:
        """Відкинути випадок"""
        if self._case is not None:
            logger.info("Interview %s reset", self._case.id)
        self._case = None

    # =========================================================================
    # Внутрішні
    # =========================================================================

    def _require_case(self) -> PatientCase:
        if self._case is None:
            raise ValidationError("No interview in progress; call start_interview first")
        return self._case

    def _require_active(self) -> PatientCase:
        case = self._require_case()
        if case.status != CaseStatus.ACTIVE:
            raise ValidationError(
                f"Interview is {case.status.value}",
                details={"case_id": case.id, "status": case.status.value},
            )
        return case

    @staticmethod
    def _merge(evidence, concept_id: str, state: Any):
        concept_id = normalize_concept_id(concept_id)
        if any(item.concept_id == concept_id for item in evidence):
            updated = upsert_evidence(evidence, concept_id, state)
        else:
            updated = list(evidence) + [
                create_evidence(concept_id, state, EvidenceSource.SUGGESTED)
            ]
        return ensure_initial(updated)

    def _check_unchanged(self, base: Optional[PatientCase]) -> None:
        """Випадок не скинули і не замінили, поки тривав запит"""
        if self._case is not base:
            raise ValidationError(
                "Interview was reset or replaced while the request was in progress",
                details={"case_id": base.id if base is not None else None},
            )

    async def _advance(self, candidate: PatientCase, base: Optional[PatientCase]) -> PatientCase:
        """Запитати наступний крок і зафіксувати кандидата замість base"""
        step = await self.client.next_step(candidate)
        self._check_unchanged(base)

        candidate.conditions = list(step.conditions)
        candidate.should_stop = step.should_stop
        candidate.current_question = None if step.should_stop else step.question
        if step.should_stop:
            candidate.status = CaseStatus.COMPLETED
        candidate.touch()

        self._case = candidate

        if step.should_stop:
            logger.info(
                "Interview %s completed after %d questions",
                candidate.id, candidate.questions_asked,
            )
            await self._finalize(candidate)

        return candidate.snapshot()

    async def _finalize(self, case: PatientCase) -> None:
        try:
            if case.triage is None:
                triage = await self.client.classify_triage(case.snapshot())
                self._check_unchanged(case)
                case.triage = triage
                case.touch()
        finally:
            self._notify_complete(case)

    def _notify_complete(self, case: PatientCase) -> None:
        if self.on_complete is not None:
            self.on_complete(case.snapshot())
