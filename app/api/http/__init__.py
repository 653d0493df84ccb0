from app.api.http.health import router as health_router
from app.api.http.auth import router as auth_router
from app.api.http.posts import router as posts_router
from app.api.http.contact import router as contact_router
from app.api.http.dashboard import router as dashboard_router
from app.api.http.pages import router as pages_router

__all__ = [
    "health_router",
    "auth_router",
    "posts_router",
    "contact_router",
    "dashboard_router",
    "pages_router"
]
