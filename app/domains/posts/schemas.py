from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional, List
import uuid
from datetime import datetime

from app.domains.posts.entities import PostStatus


class CamelModel(BaseModel):
    """Схемы с camelCase-полями на границе HTTP"""
    model_config = ConfigDict(populate_by_name=True)


class SeoFields(CamelModel):
    """SEO метаданные поста"""
    title: str = ""
    description: str = ""
    slug: str = ""
    keywords: List[str] = Field(default_factory=list)

    @field_validator('title', 'description', 'slug', mode='before')
    @classmethod
    def none_to_empty(cls, v):
        return v or ""

    @field_validator('keywords', mode='before')
    @classmethod
    def none_to_list(cls, v):
        return v or []


class DraftPayload(CamelModel):
    """Тело запроса автосохранения черновика"""
    id: Optional[uuid.UUID] = None
    title: str = Field(default="", max_length=255)
    content: str = Field(default="", max_length=1000000)
    featured_image: str = Field(default="", alias="featuredImage")
    featured_image_alt: str = Field(default="", alias="featuredImageAlt")
    seo: SeoFields = Field(default_factory=SeoFields)
    status: PostStatus = PostStatus.DRAFT
    # Передаётся клиентом, но сервер всегда использует автора из токена
    author_id: Optional[str] = Field(default=None, alias="authorId")

    @field_validator('title', 'content', 'featured_image', 'featured_image_alt', mode='before')
    @classmethod
    def none_to_empty(cls, v):
        return v or ""

    @field_validator('seo', mode='before')
    @classmethod
    def none_to_seo(cls, v):
        return v or {}

    @field_validator('status', mode='before')
    @classmethod
    def lowercase_status(cls, v):
        return v.lower() if isinstance(v, str) else v

    def has_content(self) -> bool:
        return bool(self.title.strip() or self.content.strip())


class PublishPayload(DraftPayload):
    """Тело запроса публикации"""
    published_at: Optional[datetime] = Field(default=None, alias="publishedAt")


class DraftRecord(CamelModel):
    """Каноническая запись черновика, возвращаемая после сохранения"""
    id: uuid.UUID
    title: str
    content: str
    featured_image: str = Field(alias="featuredImage")
    featured_image_alt: str = Field(alias="featuredImageAlt")
    seo: SeoFields
    status: PostStatus
    author_id: uuid.UUID = Field(alias="authorId")
    published_at: Optional[datetime] = Field(default=None, alias="publishedAt")
    created_at: datetime = Field(alias="createdAt")
    last_saved: str = Field(alias="lastSaved")


class PostCreate(CamelModel):
    """Схема для создания поста из дашборда"""
    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(default="", max_length=1000000)
    featured_image: str = Field(default="", alias="featuredImage")
    featured_image_alt: str = Field(default="", alias="featuredImageAlt")
    seo_title: Optional[str] = Field(default=None, alias="seoTitle")
    seo_description: str = Field(default="", alias="seoDescription")
    keywords: List[str] = Field(default_factory=list)
    status: PostStatus = PostStatus.DRAFT

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        if not v.strip():
            raise ValueError('Title cannot be empty')
        return v.strip()

    @field_validator('status', mode='before')
    @classmethod
    def lowercase_status(cls, v):
        return v.lower() if isinstance(v, str) else v


class PostAuthor(BaseModel):
    username: str


class PublishedPostSummary(CamelModel):
    """Карточка опубликованного поста для блога"""
    id: uuid.UUID
    title: str
    slug: Optional[str]
    featured_image: str = Field(alias="featuredImage")
    featured_image_alt: str = Field(alias="featuredImageAlt")
    seo_description: str = Field(alias="seoDescription")
    published_at: Optional[datetime] = Field(default=None, alias="publishedAt")
    author: Optional[PostAuthor] = None


class PublishedPostList(BaseModel):
    posts: List[PublishedPostSummary]
