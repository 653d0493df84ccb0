from app.db.models.user import User
from app.db.models.post import Post
from app.db.models.contact import ContactSubmission

__all__ = [
    "User",
    "Post",
    "ContactSubmission"
]
