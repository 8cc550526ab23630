"""
Dr.Triage — Health Routes

Health check та інформація про систему.
"""

from fastapi import APIRouter, Depends

from dr_triage import __version__

from ..dependencies import get_backend, get_sessions, BackendManager, SessionManager
from ..models import HealthResponse

router = APIRouter(tags=["Health"])


@router.get("/api/health", response_model=HealthResponse)
async def health_check(
    backend: BackendManager = Depends(get_backend),
    sessions: SessionManager = Depends(get_sessions)
) -> HealthResponse:
    """
    Перевірка стану сервера.

    Повертає:
    - Статус сервера
    - Активний сервіс міркувань (remote / local)
    - Розмір таблиці концептів
    - Кількість сесій
    """
    return HealthResponse(
        status="ok" if backend.is_loaded else "degraded",
        version=__version__,
        backend=backend.backend_name,
        concepts=len(backend.table.concepts) if backend.table else 0,
        conditions=len(backend.table.conditions) if backend.table else 0,
        active_sessions=sessions.get_active_count()
    )


@router.get("/")
async def root():
    """Головна сторінка API"""
    return {
        "name": "Dr.Triage API",
        "version": __version__,
        "description": "Адаптивне діагностичне інтерв'ю та тріаж",
        "docs": "/docs",
        "health": "/api/health",
    }
