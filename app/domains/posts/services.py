import logging
import secrets
from typing import Optional, List, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from app.db.repositories.post_repository import PostRepository
from app.domains.identity.entities import User
from app.domains.posts.entities import Post, PostStatus, generate_slug
from app.domains.posts.schemas import DraftPayload, PublishPayload, PostCreate

logger = logging.getLogger(__name__)


class PostService:
    """Сервис для работы с постами и черновиками"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.post_repository = PostRepository(session)

    async def save_draft(self, payload: DraftPayload, user: User) -> Post:
        """
        Upsert черновика: обновление по id (только своего) или создание нового.

        Запись перезаписывается целиком, последняя запись побеждает.
        """
        if not payload.has_content():
            raise ValueError("Title or content is required")

        if payload.status == PostStatus.PUBLISHED and not user.can_edit_content():
            raise PermissionError("Insufficient permissions")

        author_id = user.uuid

        seo = payload.seo
        fields = dict(
            title=payload.title,
            content=payload.content,
            featured_image=payload.featured_image,
            featured_image_alt=payload.featured_image_alt,
            seo_title=seo.title,
            seo_description=seo.description,
            keywords=seo.keywords,
            status=payload.status
        )

        if payload.id:
            post = await self.post_repository.get_for_author(payload.id, author_id)
            if not post:
                raise LookupError("Draft not found")

            post.apply_draft(slug=seo.slug, **fields)
            updated = await self.post_repository.update(post)
            if not updated:
                raise LookupError("Draft not found")

            logger.info(f"Draft {updated.uuid} updated by {author_id}")
            return updated

        post = Post.create_post(
            author_id=author_id,
            slug=seo.slug or generate_slug(payload.title or "untitled"),
            **fields
        )
        created = await self.post_repository.create(post)
        logger.info(f"Draft {created.uuid} created by {author_id}")
        return created

    async def get_draft(self, post_uuid: uuid.UUID, author_id: uuid.UUID) -> Optional[Post]:
        """Загрузка черновика автора"""
        return await self.post_repository.get_for_author(post_uuid, author_id)

    async def list_drafts(self, author_id: uuid.UUID, limit: int = 100, offset: int = 0) -> List[Post]:
        """Черновики автора"""
        return await self.post_repository.get_by_author(
            author_id, status=PostStatus.DRAFT, limit=limit, offset=offset
        )

    async def publish(self, payload: PublishPayload, user: User) -> Post:
        """Публикация поста (EDITOR и ADMIN)"""
        if not user.can_edit_content():
            raise PermissionError("Insufficient permissions")

        if not payload.title.strip():
            raise ValueError("Title is required for publishing")

        if not payload.content.strip():
            raise ValueError("Content is required for publishing")

        slug = payload.seo.slug.strip()
        if not slug:
            raise ValueError("URL slug is required for publishing")

        if await self.post_repository.published_slug_taken(slug, exclude_uuid=payload.id):
            raise ValueError("URL slug is already taken")

        seo = payload.seo
        fields = dict(
            title=payload.title,
            content=payload.content,
            featured_image=payload.featured_image,
            featured_image_alt=payload.featured_image_alt,
            seo_title=seo.title or payload.title,
            seo_description=seo.description,
            slug=slug,
            keywords=seo.keywords,
            status=PostStatus.PUBLISHED
        )

        if payload.id:
            post = await self.post_repository.get_for_author(payload.id, user.uuid)
            if not post:
                raise LookupError("Post not found")

            post.apply_draft(**fields)
            post.publish(payload.published_at)
            published = await self.post_repository.update(post)
            if not published:
                raise LookupError("Post not found")
        else:
            post = Post.create_post(author_id=user.uuid, **fields)
            post.publish(payload.published_at)
            published = await self.post_repository.create(post)

        logger.info(f"Post {published.uuid} published by {user.uuid}")
        return published

    async def create_post(self, post_data: PostCreate, user: User) -> Post:
        """Создание поста из дашборда с уникальным slug"""
        if not user.can_edit_content():
            raise PermissionError("Insufficient permissions")

        slug = generate_slug(post_data.title) or "untitled"
        if await self.post_repository.slug_exists(slug):
            slug = f"{slug}-{secrets.token_hex(3)}"

        post = Post.create_post(
            author_id=user.uuid,
            title=post_data.title,
            content=post_data.content,
            slug=slug,
            featured_image=post_data.featured_image,
            featured_image_alt=post_data.featured_image_alt,
            seo_title=post_data.seo_title or post_data.title,
            seo_description=post_data.seo_description,
            keywords=post_data.keywords,
            status=post_data.status
        )
        if post_data.status == PostStatus.PUBLISHED:
            post.publish()

        return await self.post_repository.create(post)

    async def list_published(self, limit: int = 100, offset: int = 0) -> List[Tuple[Post, str]]:
        """Опубликованные посты для блога"""
        return await self.post_repository.get_published(limit, offset)
