"""
Dr.Triage — Критерії зупинки інтерв'ю

Критерії (перевіряються обидва на кожному кроці):
- QUESTION_LIMIT: пацієнт відповів на max_questions питань
- EVIDENCE_LIMIT: зібрано max_present_evidence присутніх симптомів
- NO_QUESTIONS: у таблиці не лишилось концептів для питань
- CONTINUE: продовжуємо інтерв'ю
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from dr_triage.config import InterviewConfig


class StopReason(Enum):
    """Причина зупинки інтерв'ю"""
    CONTINUE = "continue"               # Продовжуємо
    QUESTION_LIMIT = "question_limit"   # Досягнуто ліміту питань
    EVIDENCE_LIMIT = "evidence_limit"   # Достатньо присутніх симптомів
    NO_QUESTIONS = "no_questions"       # Немає більше питань


@dataclass
class StopDecision:
    """Результат перевірки критеріїв зупинки"""
    reason: StopReason
    should_stop: bool
    message: str = ""

    questions_asked: int = 0
    present_count: int = 0

    @property
    def should_continue(self) -> bool:
        return not self.should_stop


class StoppingCriteria:
    """
    Перевірка критеріїв зупинки.

    Приклад:
        criteria = StoppingCriteria()

        decision = criteria.check(questions_asked=5, present_count=2)
        if decision.should_stop:
            print(f"Зупинка: {decision.reason.value}")  # question_limit
    """

    def __init__(self, config: Optional[InterviewConfig] = None):
        self.config = config or InterviewConfig()

    def check(
        self,
        questions_asked: int,
        present_count: int,
        available_questions: int = 1,
    ) -> StopDecision:
        """
        Перевірити критерії зупинки.

        Args:
            questions_asked: Кількість відповідей на питання
            present_count: Кількість присутніх симптомів
            available_questions: Скільки концептів ще можна запитати

        Returns:
            StopDecision
        """
        if questions_asked >= self.config.max_questions:
            return StopDecision(
                reason=StopReason.QUESTION_LIMIT,
                should_stop=True,
                message=f"Задано {questions_asked} питань (ліміт {self.config.max_questions})",
                questions_asked=questions_asked,
                present_count=present_count,
            )

        if present_count >= self.config.max_present_evidence:
            return StopDecision(
                reason=StopReason.EVIDENCE_LIMIT,
                should_stop=True,
                message=f"Зібрано {present_count} присутніх симптомів",
                questions_asked=questions_asked,
                present_count=present_count,
            )

        if available_questions <= 0:
            return StopDecision(
                reason=StopReason.NO_QUESTIONS,
                should_stop=True,
                message="Немає більше доступних питань",
                questions_asked=questions_asked,
                present_count=present_count,
            )

        return StopDecision(
            reason=StopReason.CONTINUE,
            should_stop=False,
            message="Продовжуємо інтерв'ю",
            questions_asked=questions_asked,
            present_count=present_count,
        )
