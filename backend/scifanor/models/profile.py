"""Public profile of a student or admin; shares its id with the auth identity."""
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, Text

from scifanor.database import Base
from scifanor.models._common import utcnow


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    full_name = Column(String(200), nullable=True, index=True)
    avatar_url = Column(Text, nullable=True)
    bio = Column(Text, nullable=True)
    instagram_url = Column(String(500), nullable=True)
    is_admin = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    def __repr__(self):
        return f"<Profile(id={self.id}, full_name='{self.full_name}')>"
