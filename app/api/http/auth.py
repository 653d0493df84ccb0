from fastapi import APIRouter, Depends, HTTPException, status, Response
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from app.core.auth import get_current_user, require_roles
from app.core.db import get_db
from app.core.guard import SESSION_COOKIE
from app.domains.identity.entities import User, UserRole
from app.domains.identity.schemas import (
    UserCreate, UserLogin, UserResponse, Token, RoleUpdate
)
from app.domains.identity.services import IdentityService

router = APIRouter(prefix="/auth", tags=["authentication"])


def _to_response(user: User) -> UserResponse:
    return UserResponse(
        uuid=user.uuid,
        email=user.email,
        username=user.username,
        role=user.role,
        is_active=user.is_active,
        created_at=user.created_at,
        updated_at=user.updated_at
    )


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserCreate,
    db: AsyncSession = Depends(get_db)
):
    """Регистрация нового пользователя"""
    identity_service = IdentityService(db)

    try:
        user = await identity_service.register_user(user_data)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    return _to_response(user)


@router.post("/login", response_model=Token)
async def login(
    login_data: UserLogin,
    response: Response,
    db: AsyncSession = Depends(get_db)
):
    """Вход пользователя; токен также кладётся в cookie сессии для дашборда"""
    identity_service = IdentityService(db)

    token = await identity_service.login_user(login_data)

    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    response.set_cookie(SESSION_COOKIE, token, httponly=True, samesite="lax")
    return {"access_token": token, "token_type": "bearer"}


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Информация о текущем пользователе"""
    return _to_response(current_user)


@router.post("/logout")
async def logout(response: Response):
    """Выход пользователя"""
    response.delete_cookie(SESSION_COOKIE)
    return {"message": "Successfully logged out"}


@router.patch("/users/{user_uuid}/role", response_model=UserResponse)
async def change_user_role(
    user_uuid: uuid.UUID,
    role_data: RoleUpdate,
    current_user: User = Depends(require_roles(UserRole.ADMIN)),
    db: AsyncSession = Depends(get_db)
):
    """Смена роли пользователя (только ADMIN)"""
    identity_service = IdentityService(db)

    user = await identity_service.change_role(user_uuid, role_data.role)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )

    return _to_response(user)
