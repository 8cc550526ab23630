#!/usr/bin/env python3
"""
Dr.Triage — Інтерв'ю в консолі

Запуск:
    python scripts/run_interview.py --age 34 --sex female
    python scripts/run_interview.py --age 34 --sex female --text "bad headache and fever"

Без INFERMEDICA_APP_ID / INFERMEDICA_APP_KEY працює локальний міркувач.
"""

import sys
import asyncio
import argparse
from pathlib import Path

# Додаємо корінь проекту до path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dr_triage.config import DrTriageConfig
from dr_triage.exceptions import DrTriageError
from dr_triage.interview import InterviewOrchestrator
from dr_triage.reasoning import create_reasoning_client
from dr_triage.schemas import QuestionKind


ANSWERS = {"y": "present", "n": "absent", "?": "unknown"}


def print_header(text):
    print("\n" + "=" * 60)
    print(f" {text}")
    print("=" * 60)


def print_conditions(conditions, title="Стани"):
    print(f"\n{title}:")
    if not conditions:
        print("  (немає)")
    for i, c in enumerate(conditions, 1):
        print(f"  {i}. {c.display_name}: {c.probability:.0%} ({c.likelihood_label})")


def ask(prompt: str) -> str:
    while True:
        answer = input(f"{prompt} [y/n/?]: ").strip().lower()
        if answer in ANSWERS:
            return ANSWERS[answer]
        print("  Відповідь: y (так), n (ні), ? (не знаю)")


def choose_one(question) -> dict:
    print(f"❓ {question.prompt}")
    for i, item in enumerate(question.items, 1):
        print(f"  {i}. {item.name}")
    while True:
        choice = input("Номер: ").strip()
        if choice.isdigit() and 1 <= int(choice) <= len(question.items):
            return {question.items[int(choice) - 1].concept_id: "present"}


async def run(args) -> int:
    config = DrTriageConfig.from_env()

    async with create_reasoning_client(config) as client:
        orchestrator = InterviewOrchestrator(client, config.interview)

        concept_ids = list(args.symptom)
        if args.text:
            extraction = await orchestrator.parse_symptoms(args.text)
            print(f"📝 Знайдено: {[m.name for m in extraction.mentions]}")
            concept_ids.extend(extraction.concept_ids)

        if not concept_ids:
            print("❌ Потрібен хоча б один симптом (--symptom або --text)")
            return 1

        case = await orchestrator.start_interview(args.age, args.sex, concept_ids)
        print_header(f"Інтерв'ю {case.id[:8]}")

        while case.is_active and case.current_question is not None:
            question = case.current_question
            if question.kind == QuestionKind.GROUP_SINGLE:
                answers = choose_one(question)
            else:
                answers = {item.concept_id: ask(f"❓ {question.prompt} — {item.name}") for item in question.items}
            case = await orchestrator.answer_group(answers)
            print(f"   Прогрес: {orchestrator.progress_percentage:.0f}%")

        print_conditions(case.conditions)

        triage = case.triage or await orchestrator.request_triage()
        print_header(triage.label)
        print(triage.description)
        print_conditions(triage.serious_conditions, "Серйозні стани")

    return 0


def main():
    parser = argparse.ArgumentParser(description='Dr.Triage console interview')
    parser.add_argument('--age', type=int, required=True, help='Вік пацієнта')
    parser.add_argument('--sex', required=True, choices=['male', 'female'])
    parser.add_argument('--symptom', action='append', default=[], help='ID симптому (s_1193)')
    parser.add_argument('--text', help='Опис скарг')

    args = parser.parse_args()

    try:
        sys.exit(asyncio.run(run(args)))
    except DrTriageError as e:
        print(f"❌ {e.error_code}: {e.message}")
        sys.exit(2)


if __name__ == "__main__":
    main()
