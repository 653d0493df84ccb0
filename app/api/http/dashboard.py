from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from app.core.auth import require_roles
from app.core.db import get_db
from app.domains.dashboard.schemas import (
    DashboardStatsResponse, ActivityItem, NotificationsResponse
)
from app.domains.dashboard.services import DashboardService
from app.domains.identity.entities import User, CONTENT_ROLES

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStatsResponse)
async def get_dashboard_stats(
    current_user: User = Depends(require_roles(*CONTENT_ROLES)),
    db: AsyncSession = Depends(get_db)
):
    """Статистика постов, пользователей и заявок"""
    dashboard_service = DashboardService(db)
    stats = await dashboard_service.get_stats()
    return DashboardStatsResponse(**stats)


@router.get("/activity", response_model=List[ActivityItem])
async def get_recent_activity(
    current_user: User = Depends(require_roles(*CONTENT_ROLES)),
    db: AsyncSession = Depends(get_db)
):
    """Лента последних постов и заявок"""
    dashboard_service = DashboardService(db)
    return [ActivityItem(**item) for item in await dashboard_service.get_activity()]


@router.get("/notifications", response_model=NotificationsResponse)
async def get_notifications(
    current_user: User = Depends(require_roles(*CONTENT_ROLES)),
    db: AsyncSession = Depends(get_db)
):
    dashboard_service = DashboardService(db)
    notifications = await dashboard_service.get_notifications()
    return NotificationsResponse(**notifications)
