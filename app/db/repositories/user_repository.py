from typing import Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, func, or_
from sqlalchemy.exc import IntegrityError
import uuid

from app.db.base import as_utc
from app.db.models.user import User as UserModel
from app.domains.identity.entities import User


class UserRepository:
    """Репозиторий пользователей: авторы постов и сотрудники дашборда"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, user: User) -> User:
        """Создание нового пользователя"""
        db_user = UserModel(
            uuid=user.uuid,
            created_at=user.created_at,
            updated_at=user.updated_at,
            password_hash=user.password_hash,
            **self._columns(user)
        )

        self.session.add(db_user)
        try:
            await self.session.commit()
            await self.session.refresh(db_user)
            return self._to_domain(db_user)
        except IntegrityError:
            await self.session.rollback()
            raise ValueError("User with this email or username already exists")

    async def get_by_uuid(self, user_uuid: uuid.UUID) -> Optional[User]:
        return await self._first(UserModel.uuid == user_uuid)

    async def get_by_email(self, email: str) -> Optional[User]:
        return await self._first(UserModel.email == email)

    async def find_conflicts(self, email: str, username: str) -> Tuple[bool, bool]:
        """Заняты ли email и username (в таком порядке)"""
        result = await self.session.execute(
            select(UserModel.email, UserModel.username).where(
                or_(UserModel.email == email, UserModel.username == username)
            )
        )
        rows = result.all()
        return (
            any(row.email == email for row in rows),
            any(row.username == username for row in rows),
        )

    async def update_role(self, user: User) -> Optional[User]:
        """Сохранение новой роли. None, если пользователь исчез"""
        result = await self.session.execute(
            update(UserModel)
            .where(UserModel.uuid == user.uuid)
            .values(role=user.role, updated_at=user.updated_at)
        )
        await self.session.commit()

        if result.rowcount == 0:
            return None

        return await self.get_by_uuid(user.uuid)

    async def count(self) -> int:
        result = await self.session.execute(select(func.count(UserModel.uuid)))
        return result.scalar()

    async def _first(self, criterion) -> Optional[User]:
        result = await self.session.execute(
            select(UserModel).where(criterion).execution_options(populate_existing=True)
        )
        db_user = result.scalar_one_or_none()
        return self._to_domain(db_user) if db_user else None

    @staticmethod
    def _columns(user: User) -> dict:
        return dict(
            email=user.email,
            username=user.username,
            role=user.role,
            is_active=user.is_active
        )

    def _to_domain(self, db_user: UserModel) -> User:
        """Преобразование модели БД в доменную сущность"""
        return User(
            uuid=db_user.uuid,
            password_hash=db_user.password_hash,
            created_at=as_utc(db_user.created_at),
            updated_at=as_utc(db_user.updated_at),
            **self._columns(db_user)
        )
