"""Many-to-many link between plants and contributing profiles."""
from sqlalchemy import Column, DateTime, ForeignKey, String, UniqueConstraint

from scifanor.database import Base
from scifanor.models._common import new_id, utcnow


class PlantCollaborator(Base):
    __tablename__ = "plant_collaborators"
    __table_args__ = (
        UniqueConstraint("plant_id", "user_id", name="uq_plant_collaborators_plant_user"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    plant_id = Column(String(36), ForeignKey("plants.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    added_by = Column(String(36), ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
