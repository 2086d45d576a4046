import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from collabdocs.api.http import (
    auth_router,
    comments_router,
    documents_router,
    pages_router,
    replies_router,
    users_router
)
from collabdocs.core.config import settings
from collabdocs.core.db import init_models
from collabdocs.core.errors import register_exception_handlers
from collabdocs.core.middleware import AuthMiddleware

logging.basicConfig(
    level=settings.effective_log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logging.getLogger("httpx").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Таблицы создаются при старте
    await init_models()
    logger.info("Database schema ready")
    yield


app = FastAPI(
    title="CollabDocs",
    description="Совместное редактирование документов с комментариями к фрагментам текста",
    version="1.0.0",
    lifespan=lifespan
)

register_exception_handlers(app)

app.add_middleware(AuthMiddleware)

# CORS снаружи проверки сессии
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Подключаем роутеры
app.include_router(documents_router, prefix="/api")
app.include_router(comments_router, prefix="/api")
app.include_router(replies_router, prefix="/api")
app.include_router(users_router, prefix="/api")
app.include_router(auth_router, prefix="/api")
app.include_router(pages_router)


@app.get("/health")
async def health_check():
    return {"status": "healthy", "version": "1.0.0"}


@app.get("/")
async def root():
    """Корневой эндпоинт"""
    return {
        "message": "CollabDocs API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }
