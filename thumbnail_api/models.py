import uuid
from datetime import datetime, timezone
from sqlalchemy import Boolean, Column, DateTime, String, Text, Uuid
from .database import Base


def utcnow():
    return datetime.now(timezone.utc)


class Thumbnail(Base):
    __tablename__ = "thumbnails"
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(String(64), nullable=False, index=True)
    title = Column(String(100), nullable=False)
    user_prompt = Column(Text)
    prompt_used = Column(Text)
    style = Column(String(32), nullable=False)
    color_scheme = Column(String(32))
    aspect_ratio = Column(String(8), nullable=False)
    text_overlay = Column(Boolean, nullable=False, default=False)
    is_generating = Column(Boolean, nullable=False, default=True)
    image_url = Column(Text)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    @property
    def status(self):
        if self.is_generating:
            return "pending"
        return "succeeded" if self.image_url else "failed"
