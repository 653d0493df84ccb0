import logging
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from typing import List
import uuid

from app.core.auth import get_current_user, require_roles
from app.core.db import get_db
from app.domains.identity.entities import User, CONTENT_ROLES
from app.domains.posts.entities import Post
from app.domains.posts.schemas import (
    DraftPayload, PublishPayload, DraftRecord, PostCreate, SeoFields,
    PublishedPostSummary, PublishedPostList, PostAuthor
)
from app.domains.posts.services import PostService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/posts", tags=["posts"])


def _to_record(post: Post) -> DraftRecord:
    """Каноническая запись поста для клиента"""
    return DraftRecord(
        id=post.uuid,
        title=post.title,
        content=post.content,
        featured_image=post.featured_image,
        featured_image_alt=post.featured_image_alt,
        seo=SeoFields(
            title=post.seo_title,
            description=post.seo_description,
            slug=post.slug or "",
            keywords=post.keywords
        ),
        status=post.status,
        author_id=post.author_id,
        published_at=post.published_at,
        created_at=post.created_at,
        last_saved=post.last_saved
    )


@router.get("", response_model=PublishedPostList)
async def list_published_posts(
    page: int = Query(1, ge=1),
    per_page: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db)
):
    """Опубликованные посты для блога"""
    post_service = PostService(db)

    offset = (page - 1) * per_page
    rows = await post_service.list_published(limit=per_page, offset=offset)

    return PublishedPostList(posts=[
        PublishedPostSummary(
            id=post.uuid,
            title=post.title,
            slug=post.slug,
            featured_image=post.featured_image,
            featured_image_alt=post.featured_image_alt,
            seo_description=post.seo_description,
            published_at=post.published_at,
            author=PostAuthor(username=username)
        )
        for post, username in rows
    ])


@router.post("", response_model=DraftRecord, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    current_user: User = Depends(require_roles(*CONTENT_ROLES)),
    db: AsyncSession = Depends(get_db)
):
    """Создание поста из дашборда"""
    post_service = PostService(db)

    try:
        post = await post_service.create_post(post_data, current_user)
    except PermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except SQLAlchemyError:
        logger.exception("Error creating post")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create post"
        )

    return _to_record(post)


@router.post("/draft", response_model=DraftRecord)
async def save_draft(
    payload: DraftPayload,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Автосохранение черновика (создание или обновление своего)"""
    post_service = PostService(db)

    try:
        post = await post_service.save_draft(payload, current_user)
    except PermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except SQLAlchemyError:
        logger.exception("Draft save error")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update draft" if payload.id else "Failed to create draft"
        )

    return _to_record(post)


@router.get("/drafts", response_model=List[DraftRecord])
async def list_drafts(
    page: int = Query(1, ge=1),
    per_page: int = Query(50, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Черновики текущего автора"""
    post_service = PostService(db)

    offset = (page - 1) * per_page
    drafts = await post_service.list_drafts(current_user.uuid, limit=per_page, offset=offset)

    return [_to_record(post) for post in drafts]


@router.get("/draft/{draft_uuid}", response_model=DraftRecord)
async def get_draft(
    draft_uuid: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Загрузка черновика автора"""
    post_service = PostService(db)

    post = await post_service.get_draft(draft_uuid, current_user.uuid)

    if not post:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Draft not found"
        )

    return _to_record(post)


@router.post("/publish", response_model=DraftRecord)
async def publish_post(
    payload: PublishPayload,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Публикация поста"""
    post_service = PostService(db)

    try:
        post = await post_service.publish(payload, current_user)
    except PermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except SQLAlchemyError:
        logger.exception("Publish error")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to publish post"
        )

    return _to_record(post)
