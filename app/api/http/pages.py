from fastapi import APIRouter

router = APIRouter(tags=["pages"])

# Разметку отдаёт фронтенд; здесь только точки входа, которые защищает RoleGuardMiddleware


@router.get("/login")
async def login_page(callbackUrl: str = "/dashboard"):
    """Страница входа"""
    return {"page": "login", "callbackUrl": callbackUrl}


@router.get("/dashboard")
async def dashboard_page():
    return {"page": "dashboard"}


@router.get("/dashboard/editor")
async def editor_page():
    """Редактор постов (EDITOR и ADMIN)"""
    return {"page": "editor"}


@router.get("/dashboard/admin")
async def admin_page():
    """Администрирование (только ADMIN)"""
    return {"page": "admin"}


@router.get("/dashboard/unauthorized")
async def unauthorized_page():
    return {"page": "unauthorized", "message": "You do not have access to this section"}
