from dataclasses import dataclass, field, replace
from typing import Optional, Tuple, Dict, Any

from app.domains.posts.entities import PostStatus


@dataclass(frozen=True)
class Identity:
    """Автор, от имени которого сохраняются черновики"""
    author_id: Optional[str]
    role: Optional[str] = None
    access_token: Optional[str] = None


@dataclass(frozen=True)
class SeoMeta:
    title: str = ""
    description: str = ""
    slug: str = ""
    keywords: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "keywords", tuple(self.keywords or ()))


@dataclass(frozen=True)
class DraftSnapshot:
    """
    Состояние редактора, которое наблюдает и сохраняет координатор автосохранения.

    id и last_saved назначает сервер; клиент их не придумывает.
    """
    title: str = ""
    content: str = ""
    id: Optional[str] = None
    featured_image: str = ""
    featured_image_alt: str = ""
    seo: SeoMeta = field(default_factory=SeoMeta)
    status: PostStatus = PostStatus.DRAFT
    last_saved: Optional[str] = None

    def has_content(self) -> bool:
        """Черновик с пустыми (после trim) заголовком и текстом не сохраняется"""
        return bool(self.title.strip() or self.content.strip())

    def content_key(self) -> tuple:
        """
        Значение для сравнения снимков.

        Поля сервера (id, last_saved) не участвуют; порядок и повторы
        ключевых слов не важны.
        """
        return (
            self.title,
            self.content,
            self.featured_image,
            self.featured_image_alt,
            self.seo.title,
            self.seo.description,
            self.seo.slug,
            tuple(sorted(set(self.seo.keywords))),
            PostStatus(self.status).value,
        )

    def with_server_fields(self, id: Optional[str], last_saved: Optional[str] = None) -> "DraftSnapshot":
        return replace(self, id=id, last_saved=last_saved if last_saved is not None else self.last_saved)

    def to_payload(self, author_id: str) -> Dict[str, Any]:
        """JSON тело запроса к эндпоинту сохранения черновика"""
        payload = {
            "title": self.title,
            "content": self.content,
            "featuredImage": self.featured_image,
            "featuredImageAlt": self.featured_image_alt,
            "seo": {
                "title": self.seo.title,
                "description": self.seo.description,
                "slug": self.seo.slug,
                "keywords": list(self.seo.keywords),
            },
            "status": PostStatus(self.status).value,
            "authorId": author_id,
        }
        if self.id:
            payload["id"] = self.id
        return payload

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "DraftSnapshot":
        """Снимок из канонической записи, которую вернул сервер"""
        seo = record.get("seo") or {}
        return cls(
            id=str(record["id"]) if record.get("id") else None,
            title=record.get("title") or "",
            content=record.get("content") or "",
            featured_image=record.get("featuredImage") or "",
            featured_image_alt=record.get("featuredImageAlt") or "",
            seo=SeoMeta(
                title=seo.get("title") or "",
                description=seo.get("description") or "",
                slug=seo.get("slug") or "",
                keywords=seo.get("keywords") or (),
            ),
            status=PostStatus((record.get("status") or PostStatus.DRAFT.value).lower()),
            last_saved=record.get("lastSaved"),
        )
