from sqlalchemy import Column, String, Text, ForeignKey, UUID, DateTime, Enum
from sqlalchemy.orm import relationship

from app.db.base import BaseModel
from app.domains.posts.entities import PostStatus


class Post(BaseModel):
    __tablename__ = "posts"
    
    title = Column(String(255), nullable=False, default="")
    content = Column(Text, nullable=False, default="")
    # Уникальность slug проверяется при публикации, черновики могут совпадать
    slug = Column(String(255), index=True, nullable=True)
    featured_image = Column(String(1024), default="")
    featured_image_alt = Column(String(512), default="")
    seo_title = Column(String(255), default="")
    seo_description = Column(Text, default="")
    keywords = Column(Text, default="[]")  # JSON-массив строк
    status = Column(Enum(PostStatus), nullable=False, default=PostStatus.DRAFT)
    published_at = Column(DateTime(timezone=True), nullable=True)
    author_id = Column(UUID(as_uuid=True), ForeignKey("users.uuid"), nullable=False)
    
    # Relationships
    author = relationship("User", back_populates="posts")
