"""
Dr.Triage — FastAPI Application

Головний файл FastAPI додатку.

Запуск:
    uvicorn dr_triage.api.app:app --reload --host 0.0.0.0 --port 8000

    або:

    python -m dr_triage.api.main
"""

from contextlib import asynccontextmanager
import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dr_triage import __version__
from dr_triage.exceptions import DrTriageError

from .config import config
from .dependencies import backend_manager
from .models import ErrorResponse
from .routes import (
    health_router,
    symptoms_router,
    sessions_router,
)


logging.basicConfig(
    level=getattr(logging, config.log_level, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifecycle manager — створення сервісу міркувань при старті.
    """
    logger.info("🏥 Dr.Triage API starting...")

    backend_manager.load()
    logger.info("✅ API ready! Reasoning backend: %s", backend_manager.backend_name)
    logger.info("📍 Swagger UI: http://%s:%s/docs", config.host, config.port)

    yield

    # Cleanup при зупинці
    await backend_manager.close()
    logger.info("🛑 Dr.Triage API stopping...")


# Створюємо додаток
app = FastAPI(
    title=config.api_title,
    description=config.api_description,
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_credentials=config.cors_allow_credentials,
    allow_methods=config.cors_allow_methods,
    allow_headers=config.cors_allow_headers,
)


# Middleware для логування запитів
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()

    response = await call_next(request)

    process_time = time.time() - start_time

    # Логуємо тільки API запити
    if request.url.path.startswith("/api"):
        logger.info(
            "📨 %s %s → %d (%.1fms)",
            request.method, request.url.path, response.status_code, process_time * 1000,
        )

    return response


# Помилки ядра → HTTP статус з класу винятку
@app.exception_handler(DrTriageError)
async def dr_triage_exception_handler(request: Request, exc: DrTriageError):
    logger.warning("❌ %s: %s", exc.error_code, exc.message)
    headers = {}
    retry_after = getattr(exc, "retry_after", None)
    if retry_after is not None:
        headers["Retry-After"] = str(int(retry_after))
    return JSONResponse(
        status_code=exc.http_status,
        content=ErrorResponse(**exc.to_dict()).model_dump(exclude_none=True),
        headers=headers,
    )


# Глобальний обробник помилок
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("❌ Unhandled error: %s", exc)
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "detail": str(exc) if config.debug else None
        }
    )


# Підключаємо роутери
app.include_router(health_router)
app.include_router(symptoms_router, prefix=config.api_prefix)
app.include_router(sessions_router, prefix=config.api_prefix)
