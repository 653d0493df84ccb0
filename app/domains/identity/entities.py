import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from app.core.security import get_password_hash, verify_password


class UserRole(str, Enum):
    """Роли пользователей дашборда"""
    USER = "USER"
    EDITOR = "EDITOR"
    ADMIN = "ADMIN"


# Роли, которым доступно редактирование и публикация контента
CONTENT_ROLES = (UserRole.EDITOR, UserRole.ADMIN)


class User:
    """Сущность пользователя домена Identity"""
    
    def __init__(
        self,
        uuid: uuid.UUID,
        email: str,
        username: str,
        password_hash: str,
        role: UserRole = UserRole.USER,
        is_active: bool = True,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.uuid = uuid
        self.email = email
        self.username = username
        self.password_hash = password_hash
        self.role = UserRole(role)
        self.is_active = is_active
        self.created_at = created_at or datetime.now(timezone.utc)
        self.updated_at = updated_at or datetime.now(timezone.utc)
    
    def authenticate(self, password: str) -> bool:
        """Проверка пароля пользователя"""
        return verify_password(password, self.password_hash)
    
    def can_edit_content(self) -> bool:
        """Может ли пользователь создавать и публиковать посты"""
        return self.role in CONTENT_ROLES
    
    def change_role(self, role: UserRole) -> None:
        """Смена роли пользователя"""
        self.role = UserRole(role)
        self.updated_at = datetime.now(timezone.utc)
    
    @classmethod
    def create_user(
        cls,
        email: str,
        username: str,
        password: str,
        role: UserRole = UserRole.USER
    ) -> "User":
        """Создание нового пользователя с хешированием пароля"""
        return cls(
            uuid=uuid.uuid4(),
            email=email,
            username=username,
            password_hash=get_password_hash(password),
            role=role
        )
    
    def __eq__(self, other) -> bool:
        if not isinstance(other, User):
            return False
        return self.uuid == other.uuid
    
    def __repr__(self) -> str:
        return f"User(uuid={self.uuid}, email={self.email}, role={self.role.value})"
