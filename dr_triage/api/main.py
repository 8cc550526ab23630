"""
Dr.Triage API — точка входу

Запуск:
    python -m dr_triage.api.main

Документація:
    http://localhost:8000/docs (Swagger UI)
    http://localhost:8000/redoc (ReDoc)
"""

import uvicorn

from .config import config


def run() -> None:
    """Запустити uvicorn сервер"""
    uvicorn.run(
        "dr_triage.api.app:app",
        host=config.host,
        port=config.port,
        reload=config.reload,
        log_level=config.log_level.lower(),
    )


# Для запуску напряму
if __name__ == "__main__":
    run()
