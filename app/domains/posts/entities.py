import re
import unicodedata
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, List

SLUG_MAX_LENGTH = 50


class PostStatus(str, Enum):
    """Статусы поста"""
    DRAFT = "draft"
    PUBLISHED = "published"


def generate_slug(title: str, max_length: int = SLUG_MAX_LENGTH) -> str:
    """
    Формирование URL slug из заголовка.

    >>> generate_slug("Hello, World!")
    'hello-world'
    """
    text = unicodedata.normalize('NFKD', title)
    text = text.encode('ascii', 'ignore').decode('ascii').lower()
    text = re.sub(r'[^a-z0-9]+', '-', text)
    text = text.strip('-')
    return text[:max_length].rstrip('-')


class Post:
    """Сущность поста (черновика или опубликованной записи)"""

    def __init__(
        self,
        uuid: uuid.UUID,
        author_id: uuid.UUID,
        title: str = "",
        content: str = "",
        slug: Optional[str] = None,
        featured_image: str = "",
        featured_image_alt: str = "",
        seo_title: str = "",
        seo_description: str = "",
        keywords: Optional[List[str]] = None,
        status: PostStatus = PostStatus.DRAFT,
        published_at: Optional[datetime] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.uuid = uuid
        self.author_id = author_id
        self.title = title
        self.content = content
        self.slug = slug
        self.featured_image = featured_image
        self.featured_image_alt = featured_image_alt
        self.seo_title = seo_title
        self.seo_description = seo_description
        self.keywords = list(keywords or [])
        self.status = PostStatus(status)
        self.published_at = published_at
        self.created_at = created_at or datetime.now(timezone.utc)
        self.updated_at = updated_at or datetime.now(timezone.utc)

    @property
    def last_saved(self) -> str:
        """Время последнего сохранения в ISO-8601"""
        return self.updated_at.isoformat()

    def is_published(self) -> bool:
        return self.status == PostStatus.PUBLISHED

    def apply_draft(
        self,
        title: str,
        content: str,
        featured_image: str,
        featured_image_alt: str,
        seo_title: str,
        seo_description: str,
        slug: str,
        keywords: List[str],
        status: PostStatus
    ) -> None:
        """Полная перезапись содержимого (last write wins)"""
        self.title = title
        self.content = content
        self.featured_image = featured_image
        self.featured_image_alt = featured_image_alt
        self.seo_title = seo_title
        self.seo_description = seo_description
        self.slug = slug
        self.keywords = list(keywords)
        self.status = PostStatus(status)
        self.updated_at = datetime.now(timezone.utc)

    def publish(self, published_at: Optional[datetime] = None) -> None:
        """Публикация поста"""
        self.status = PostStatus.PUBLISHED
        self.published_at = published_at or datetime.now(timezone.utc)
        self.updated_at = datetime.now(timezone.utc)

    @classmethod
    def create_post(cls, author_id: uuid.UUID, **fields) -> "Post":
        """Создание нового поста"""
        return cls(uuid=uuid.uuid4(), author_id=author_id, **fields)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Post):
            return False
        return self.uuid == other.uuid

    def __repr__(self) -> str:
        return f"Post(uuid={self.uuid}, title={self.title}, status={self.status.value})"
