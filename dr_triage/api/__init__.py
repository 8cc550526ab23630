"""
Dr.Triage — REST API модуль

FastAPI REST API для діагностичного інтерв'ю.

Компоненти:
- app.py: FastAPI application
- routes/: API endpoints
- models.py: Pydantic models
- dependencies.py: Сервіс міркувань та сесії

Запуск:
    uvicorn dr_triage.api.app:app --reload --port 8000

Endpoints:
    GET    /api/health                   - Health check
    POST   /api/sessions                 - Почати інтерв'ю
    GET    /api/sessions/{id}            - Стан сесії
    POST   /api/sessions/{id}/answer     - Відповісти на питання
    POST   /api/sessions/{id}/symptoms   - Додати симптом
    POST   /api/sessions/{id}/triage     - Тріаж
    POST   /api/sessions/{id}/complete   - Завершити
    POST   /api/sessions/{id}/abandon    - Покинути
    DELETE /api/sessions/{id}            - Видалити
    GET    /api/symptoms/search?q=       - Пошук симптомів
    POST   /api/symptoms/parse           - NLP витягування
"""

from .app import app
from .dependencies import backend_manager, session_manager, get_backend, get_sessions


__all__ = [
    "app",
    "backend_manager",
    "session_manager",
    "get_backend",
    "get_sessions",
]
