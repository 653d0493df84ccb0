from app.domains.identity.entities import User, UserRole, CONTENT_ROLES
from app.domains.identity.schemas import (
    UserBase, UserCreate, UserLogin, UserResponse, RoleUpdate, Token
)

__all__ = [
    "User", "UserRole", "CONTENT_ROLES",
    "UserBase", "UserCreate", "UserLogin", "UserResponse", "RoleUpdate", "Token"
]
