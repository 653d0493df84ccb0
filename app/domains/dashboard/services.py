from datetime import datetime, timedelta, timezone
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.repositories.contact_repository import ContactRepository
from app.db.repositories.post_repository import PostRepository
from app.db.repositories.user_repository import UserRepository
from app.domains.contact.entities import ContactStatus
from app.domains.posts.entities import PostStatus

RECENT_WINDOW = timedelta(days=7)

ACTIVITY_LIMIT = 5
ACTIVITY_POSTS = 3
ACTIVITY_CONTACTS = 2
LATEST_SUBMISSIONS = 3

SUBMISSIONS_LINK = "/dashboard/contact-submissions"


def time_ago(moment: datetime, now: Optional[datetime] = None) -> str:
    """
    Подпись «сколько прошло» для ленты дашборда.

    >>> time_ago(datetime(2026, 1, 1, 10, tzinfo=timezone.utc), datetime(2026, 1, 1, 12, tzinfo=timezone.utc))
    '2h ago'
    """
    now = now or datetime.now(timezone.utc)
    seconds = int((now - moment).total_seconds())

    if seconds < 60:
        return "Just now"
    if seconds < 3600:
        return f"{seconds // 60}m ago"
    if seconds < 86400:
        return f"{seconds // 3600}h ago"
    return f"{seconds // 86400}d ago"


def _origin(name: str, company_name: Optional[str], country: str) -> str:
    return f"{name} from {company_name or country}"


class DashboardService:
    """Статистика, лента событий и уведомления дашборда"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.post_repository = PostRepository(session)
        self.user_repository = UserRepository(session)
        self.contact_repository = ContactRepository(session)

    async def get_stats(self) -> dict:
        since = datetime.now(timezone.utc) - RECENT_WINDOW

        return {
            "total_posts": await self.post_repository.count(),
            "published_posts": await self.post_repository.count(status=PostStatus.PUBLISHED),
            "draft_posts": await self.post_repository.count(status=PostStatus.DRAFT),
            "total_users": await self.user_repository.count(),
            "total_contacts": await self.contact_repository.count(),
            "recent_posts": await self.post_repository.count(since=since),
            "recent_contacts": await self.contact_repository.count(since=since)
        }

    async def get_activity(self) -> List[dict]:
        """Последние посты и заявки одной лентой, новые сверху"""
        now = datetime.now(timezone.utc)
        events = []

        for post, username in await self.post_repository.get_latest(ACTIVITY_POSTS):
            published = post.is_published()
            events.append((post.created_at, {
                "icon": "FileText",
                "title": "New post published" if published else "New post created",
                "description": f'"{post.title}" by {username}',
                "color": "bg-blue-500" if published else "bg-gray-500"
            }))

        for submission in await self.contact_repository.get_all(limit=ACTIVITY_CONTACTS):
            events.append((submission.created_at, {
                "icon": "MessageSquare",
                "title": "New contact submission",
                "description": _origin(submission.name, submission.company_name, submission.country),
                "color": "bg-emerald-500"
            }))

        events.sort(key=lambda event: event[0], reverse=True)
        return [
            dict(item, time=time_ago(created_at, now))
            for created_at, item in events[:ACTIVITY_LIMIT]
        ]

    async def get_notifications(self) -> dict:
        """Необработанные заявки и черновики, требующие внимания"""
        now = datetime.now(timezone.utc)

        new_contacts = await self.contact_repository.count(status=ContactStatus.NEW)
        draft_posts = await self.post_repository.count(status=PostStatus.DRAFT)
        latest = await self.contact_repository.get_all(
            limit=LATEST_SUBMISSIONS, status=ContactStatus.NEW
        )

        return {
            "new_contact_submissions": new_contacts,
            "draft_posts": draft_posts,
            "recent_contacts": await self.contact_repository.count(since=now - RECENT_WINDOW),
            "latest_submissions": [
                {
                    "id": submission.uuid,
                    "title": "New Contact Submission",
                    "description": _origin(submission.name, submission.company_name, submission.country),
                    "time": time_ago(submission.created_at, now),
                    "type": "contact",
                    "link": SUBMISSIONS_LINK,
                    "services": submission.services
                }
                for submission in latest
            ],
            "total_notifications": new_contacts + draft_posts
        }
