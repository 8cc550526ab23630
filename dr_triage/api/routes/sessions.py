"""
Dr.Triage — Sessions Routes

Endpoints для інтерактивних сесій інтерв'ю:
- Створення сесії
- Отримання стану
- Відповідь на питання / додавання симптому
- Тріаж
- Завершення, відмова, видалення
"""

from fastapi import APIRouter, Depends, HTTPException

from dr_triage.exceptions import ValidationError
from dr_triage.schemas import TriageResult

from ..dependencies import (
    get_backend, get_sessions,
    BackendManager, InterviewSession, SessionManager
)
from ..models import (
    AddSymptomRequest,
    AnswerRequest,
    CreateSessionRequest,
    ErrorResponse,
    SessionState,
)

router = APIRouter(
    prefix="/sessions",
    tags=["Sessions"],
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)


def session_to_response(session: InterviewSession) -> SessionState:
    """Конвертувати сесію в Pydantic модель"""
    case = session.case
    if case is None:
        raise HTTPException(status_code=404, detail="Session was deleted")
    return SessionState(
        session_id=case.id,
        progress_percentage=session.orchestrator.progress_percentage,
        can_proceed=session.orchestrator.can_proceed,
        case=case,
    )


def get_or_404(sessions: SessionManager, session_id: str) -> InterviewSession:
    session = sessions.get_session(session_id)
    if session is None:
        raise HTTPException(
            status_code=404,
            detail=f"Session {session_id} not found"
        )
    return session


def require_open(session: InterviewSession, session_id: str) -> None:
    """Сесію могли видалити, поки запит чекав на lock"""
    if session.case is None:
        raise HTTPException(
            status_code=404,
            detail=f"Session {session_id} not found"
        )


@router.post("", response_model=SessionState)
async def create_session(
    request: CreateSessionRequest,
    backend: BackendManager = Depends(get_backend),
    sessions: SessionManager = Depends(get_sessions)
) -> SessionState:
    """
    Розпочати інтерв'ю.

    Можна передати:
    - **symptoms**: ID початкових симптомів
    - **text**: Текст з описом скарг (буде оброблено NLP)

    Приклад:
    ```json
    {
        "age": 34,
        "sex": "female",
        "text": "Bad headache since yesterday"
    }
    ```
    """
    concept_ids = list(request.symptoms)

    if request.text:
        extraction = await backend.client.parse_text(request.text)
        concept_ids.extend(cid for cid in extraction.concept_ids if cid not in concept_ids)

    session = await sessions.create_session(
        backend,
        age=request.age,
        sex=request.sex,
        concept_ids=concept_ids,
    )

    return session_to_response(session)


@router.get("/{session_id}", response_model=SessionState)
async def get_session(
    session_id: str,
    sessions: SessionManager = Depends(get_sessions)
) -> SessionState:
    """Поточний стан сесії"""
    return session_to_response(get_or_404(sessions, session_id))


@router.post("/{session_id}/answer", response_model=SessionState)
async def answer_question(
    session_id: str,
    request: AnswerRequest,
    sessions: SessionManager = Depends(get_sessions)
) -> SessionState:
    """
    Відповісти на поточне питання.

    Приклад:
    ```json
    {
        "concept_id": "s_488",
        "state": "present"
    }
    ```
    """
    session = get_or_404(sessions, session_id)

    async with session.lock:
        require_open(session, session_id)
        if request.answers:
            await session.orchestrator.answer_group(request.answers)
        elif request.concept_id and request.state:
            await session.orchestrator.answer_question(request.concept_id, request.state)
        else:
            raise ValidationError("Provide concept_id and state, or answers")
        session.touch()

    return session_to_response(session)


@router.post("/{session_id}/symptoms", response_model=SessionState)
async def add_symptom(
    session_id: str,
    request: AddSymptomRequest,
    sessions: SessionManager = Depends(get_sessions)
) -> SessionState:
    """Додати симптом поза питаннями (з пошуку)"""
    session = get_or_404(sessions, session_id)

    async with session.lock:
        require_open(session, session_id)
        await session.orchestrator.add_symptom(request.concept_id, request.state)
        session.touch()

    return session_to_response(session)


@router.post("/{session_id}/triage", response_model=TriageResult)
async def request_triage(
    session_id: str,
    sessions: SessionManager = Depends(get_sessions)
) -> TriageResult:
    """Класифікувати терміновість для поточних доказів"""
    session = get_or_404(sessions, session_id)

    async with session.lock:
        require_open(session, session_id)
        triage = await session.orchestrator.request_triage()
        session.touch()

    return triage


@router.post("/{session_id}/complete", response_model=SessionState)
async def complete_session(
    session_id: str,
    sessions: SessionManager = Depends(get_sessions)
) -> SessionState:
    """Завершити інтерв'ю раніше (докази зберігаються)"""
    session = get_or_404(sessions, session_id)

    async with session.lock:
        require_open(session, session_id)
        session.orchestrator.complete_interview()
        session.touch()

    return session_to_response(session)


@router.post("/{session_id}/abandon", response_model=SessionState)
async def abandon_session(
    session_id: str,
    sessions: SessionManager = Depends(get_sessions)
) -> SessionState:
    """Покинути інтерв'ю"""
    session = get_or_404(sessions, session_id)

    async with session.lock:
        require_open(session, session_id)
        session.orchestrator.abandon_interview()
        session.touch()

    return session_to_response(session)


@router.delete("/{session_id}")
async def delete_session(
    session_id: str,
    sessions: SessionManager = Depends(get_sessions)
) -> dict:
    """Відкинути та видалити сесію"""
    success = await sessions.delete_session(session_id)

    if not success:
        raise HTTPException(
            status_code=404,
            detail=f"Session {session_id} not found"
        )

    return {"deleted": True, "session_id": session_id}


@router.get("")
async def list_sessions(
    sessions: SessionManager = Depends(get_sessions)
) -> dict:
    """Список сесій (для адміністрування)"""
    return {
        "active_sessions": sessions.get_active_count(),
        "session_ids": list(sessions.sessions.keys())
    }
