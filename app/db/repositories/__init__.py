from app.db.repositories.user_repository import UserRepository
from app.db.repositories.post_repository import PostRepository
from app.db.repositories.contact_repository import ContactRepository

__all__ = [
    "UserRepository",
    "PostRepository",
    "ContactRepository"
]
