import logging
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from app.db.repositories.user_repository import UserRepository
from app.domains.identity.entities import User, UserRole
from app.domains.identity.schemas import UserCreate, UserLogin
from app.core.security import create_access_token, verify_token

logger = logging.getLogger(__name__)


class IdentityService:
    """Регистрация, вход и роли пользователей дашборда"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repository = UserRepository(session)

    async def register_user(self, user_data: UserCreate, role: UserRole = UserRole.USER) -> User:
        """Новый пользователь; по умолчанию без доступа к контенту"""
        email_taken, username_taken = await self.user_repository.find_conflicts(
            user_data.email, user_data.username
        )
        if email_taken:
            raise ValueError("Email already registered")
        if username_taken:
            raise ValueError("Username already taken")

        user = await self.user_repository.create(User.create_user(
            email=user_data.email,
            username=user_data.username,
            password=user_data.password,
            role=role
        ))
        logger.info(f"User {user.uuid} registered as {user.role.value}")
        return user

    async def login_user(self, login_data: UserLogin) -> Optional[str]:
        """JWT для активного пользователя с верным паролем"""
        user = await self.user_repository.get_by_email(login_data.email)

        if not user or not user.is_active or not user.authenticate(login_data.password):
            logger.info(f"Failed login for {login_data.email}")
            return None

        return self.issue_token(user)

    @staticmethod
    def issue_token(user: User) -> str:
        """
        JWT сессии.

        Роль попадает в claims, чтобы RoleGuardMiddleware решал без обращения к БД.
        """
        return create_access_token(data={
            "sub": str(user.uuid),
            "role": user.role.value,
            "username": user.username,
            "email": user.email
        })

    async def change_role(self, user_uuid: uuid.UUID, role: UserRole) -> Optional[User]:
        user = await self.user_repository.get_by_uuid(user_uuid)
        if not user:
            return None

        user.change_role(role)
        updated = await self.user_repository.update_role(user)
        if updated:
            logger.info(f"User {user_uuid} role changed to {role.value}")
        return updated

    async def get_current_user_from_token(self, token: str) -> Optional[User]:
        """Пользователь из JWT; роль берётся из БД, а не из токена"""
        payload = verify_token(token)
        if not payload or not payload.get("sub"):
            return None

        try:
            user_uuid = uuid.UUID(payload["sub"])
        except ValueError:
            return None

        user = await self.user_repository.get_by_uuid(user_uuid)

        if user is None or not user.is_active:
            return None

        return user
