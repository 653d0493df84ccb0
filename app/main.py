import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.guard import RoleGuardMiddleware
from app.core.logging import setup_logging
from app.api.http import (
    health_router, auth_router, posts_router, contact_router,
    dashboard_router, pages_router
)

setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Nexora",
    description="Сайт агентства Nexora: блог, контактная форма и дашборд контента",
    version="1.0.0"
)

app.add_middleware(RoleGuardMiddleware)

# Настройка CORS для работы с frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Подключаем роутеры
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(posts_router)
app.include_router(contact_router)
app.include_router(dashboard_router)
app.include_router(pages_router)


@app.get("/")
async def root():
    """Корневой эндпоинт"""
    return {
        "message": "Nexora API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }
