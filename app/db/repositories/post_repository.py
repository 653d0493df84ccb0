import json
from datetime import datetime
from typing import Optional, List, Tuple, TYPE_CHECKING
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, func, and_
from sqlalchemy.exc import IntegrityError
import uuid

from app.db.base import as_utc
from app.db.models.post import Post as PostModel
from app.db.models.user import User as UserModel
from app.domains.posts.entities import PostStatus

if TYPE_CHECKING:
    from app.domains.posts.entities import Post


class PostRepository:
    """Репозиторий для работы с постами и черновиками"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, post: "Post") -> "Post":
        """Создание нового поста"""
        db_post = PostModel(
            uuid=post.uuid,
            author_id=post.author_id,
            created_at=post.created_at,
            updated_at=post.updated_at,
            **self._columns(post)
        )

        self.session.add(db_post)
        try:
            await self.session.commit()
            await self.session.refresh(db_post)
            return self._to_domain(db_post)
        except IntegrityError:
            await self.session.rollback()
            raise ValueError("Invalid author_id")

    async def get_by_uuid(self, post_uuid: uuid.UUID) -> Optional["Post"]:
        """Получение поста по UUID"""
        result = await self.session.execute(
            select(PostModel).where(PostModel.uuid == post_uuid)
            .execution_options(populate_existing=True)
        )
        db_post = result.scalar_one_or_none()
        return self._to_domain(db_post) if db_post else None

    async def get_for_author(self, post_uuid: uuid.UUID, author_id: uuid.UUID) -> Optional["Post"]:
        """Получение поста, принадлежащего автору"""
        result = await self.session.execute(
            select(PostModel).where(
                and_(PostModel.uuid == post_uuid, PostModel.author_id == author_id)
            )
        )
        db_post = result.scalar_one_or_none()
        return self._to_domain(db_post) if db_post else None

    async def get_by_author(
        self,
        author_id: uuid.UUID,
        status: Optional[PostStatus] = None,
        limit: int = 100,
        offset: int = 0
    ) -> List["Post"]:
        """Получение постов автора, новые сверху"""
        query = select(PostModel).where(PostModel.author_id == author_id)
        if status is not None:
            query = query.where(PostModel.status == status)

        result = await self.session.execute(
            query
            .order_by(PostModel.updated_at.desc())
            .offset(offset)
            .limit(limit)
        )
        return [self._to_domain(post) for post in result.scalars().all()]

    async def get_published(self, limit: int = 100, offset: int = 0) -> List[Tuple["Post", str]]:
        """Опубликованные посты вместе с именем автора"""
        result = await self.session.execute(
            select(PostModel, UserModel.username)
            .join(UserModel, UserModel.uuid == PostModel.author_id)
            .where(PostModel.status == PostStatus.PUBLISHED)
            .order_by(PostModel.published_at.desc())
            .offset(offset)
            .limit(limit)
        )
        return [(self._to_domain(post), username) for post, username in result.all()]

    async def get_latest(self, limit: int = 3) -> List[Tuple["Post", str]]:
        """Последние созданные посты любого статуса вместе с именем автора"""
        result = await self.session.execute(
            select(PostModel, UserModel.username)
            .join(UserModel, UserModel.uuid == PostModel.author_id)
            .order_by(PostModel.created_at.desc())
            .limit(limit)
        )
        return [(self._to_domain(post), username) for post, username in result.all()]

    async def update(self, post: "Post") -> Optional["Post"]:
        """Обновление поста автора. None, если запись не найдена"""
        stmt = (
            update(PostModel)
            .where(
                and_(PostModel.uuid == post.uuid, PostModel.author_id == post.author_id)
            )
            .values(updated_at=post.updated_at, **self._columns(post))
        )

        result = await self.session.execute(stmt)
        await self.session.commit()

        if result.rowcount == 0:
            return None

        return await self.get_by_uuid(post.uuid)

    async def slug_exists(self, slug: str) -> bool:
        """Проверка существования slug среди всех постов"""
        result = await self.session.execute(
            select(PostModel.uuid).where(PostModel.slug == slug).limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def published_slug_taken(self, slug: str, exclude_uuid: Optional[uuid.UUID] = None) -> bool:
        """Занят ли slug другим опубликованным постом"""
        query = select(PostModel.uuid).where(
            and_(PostModel.slug == slug, PostModel.status == PostStatus.PUBLISHED)
        )
        if exclude_uuid is not None:
            query = query.where(PostModel.uuid != exclude_uuid)

        result = await self.session.execute(query.limit(1))
        return result.scalar_one_or_none() is not None

    async def count(self, status: Optional[PostStatus] = None, since: Optional[datetime] = None) -> int:
        """Подсчет постов с фильтрами по статусу и дате создания"""
        query = select(func.count(PostModel.uuid))
        if status is not None:
            query = query.where(PostModel.status == status)
        if since is not None:
            query = query.where(PostModel.created_at >= since)

        result = await self.session.execute(query)
        return result.scalar()

    @staticmethod
    def _columns(post: "Post") -> dict:
        return dict(
            title=post.title,
            content=post.content,
            slug=post.slug,
            featured_image=post.featured_image,
            featured_image_alt=post.featured_image_alt,
            seo_title=post.seo_title,
            seo_description=post.seo_description,
            keywords=json.dumps(post.keywords),
            status=post.status,
            published_at=post.published_at
        )

    def _to_domain(self, db_post: PostModel) -> "Post":
        """Преобразование модели БД в доменную сущность"""
        from app.domains.posts.entities import Post

        return Post(
            uuid=db_post.uuid,
            author_id=db_post.author_id,
            title=db_post.title,
            content=db_post.content,
            slug=db_post.slug,
            featured_image=db_post.featured_image or "",
            featured_image_alt=db_post.featured_image_alt or "",
            seo_title=db_post.seo_title or "",
            seo_description=db_post.seo_description or "",
            keywords=json.loads(db_post.keywords) if db_post.keywords else [],
            status=db_post.status,
            published_at=as_utc(db_post.published_at),
            created_at=as_utc(db_post.created_at),
            updated_at=as_utc(db_post.updated_at)
        )
