"""Append-only activity log for plant changes."""
import enum

from sqlalchemy import Column, DateTime, ForeignKey, String, Text

from scifanor.database import Base
from scifanor.models._common import new_id, utcnow


class ActionType(str, enum.Enum):
    CREATE = "create"
    UPDATE = "update"
    IMAGE_ADD = "image_add"
    ADD_COLLABORATOR = "add_collaborator"
    REMOVE_COLLABORATOR = "remove_collaborator"


class PlantActivityLog(Base):
    __tablename__ = "plant_activity_logs"

    id = Column(String(36), primary_key=True, default=new_id)
    plant_id = Column(String(36), ForeignKey("plants.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True)
    action_type = Column(String(50), nullable=False)  # see ActionType
    details = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
