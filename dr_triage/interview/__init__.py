"""
Dr.Triage — Інтерв'ю

InterviewOrchestrator — єдиний власник PatientCase: стартує інтерв'ю,
приймає відповіді, запитує сервіс міркувань і завершує випадок тріажем.

Приклад використання:
    from dr_triage.interview import InterviewOrchestrator
    from dr_triage.reasoning import create_reasoning_client

    orchestrator = InterviewOrchestrator(create_reasoning_client(config))
    case = await orchestrator.start_interview(34, "female", ["s_1193"])
    case = await orchestrator.answer_question("s_488", "present")
"""

from .orchestrator import InterviewOrchestrator


__all__ = [
    "InterviewOrchestrator",
]
