from pydantic import BaseModel, ConfigDict, Field
from typing import List
import uuid


class DashboardStatsResponse(BaseModel):
    """Сводка для главной страницы дашборда"""
    total_posts: int
    published_posts: int
    draft_posts: int
    total_users: int
    total_contacts: int
    recent_posts: int
    recent_contacts: int


class ActivityItem(BaseModel):
    """Запись ленты последних событий"""
    icon: str
    title: str
    description: str
    time: str
    color: str


class NotificationItem(BaseModel):
    id: uuid.UUID
    title: str
    description: str
    time: str
    type: str
    link: str
    services: List[str]


class NotificationsResponse(BaseModel):
    """Счётчики уведомлений и последние необработанные заявки"""
    model_config = ConfigDict(populate_by_name=True)

    new_contact_submissions: int = Field(alias="newContactSubmissions")
    draft_posts: int = Field(alias="draftPosts")
    recent_contacts: int = Field(alias="recentContacts")
    latest_submissions: List[NotificationItem] = Field(alias="latestSubmissions")
    total_notifications: int = Field(alias="totalNotifications")
