from sqlalchemy import JSON, Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from scifanor.database import Base
from scifanor.models._common import new_id, utcnow


class Plant(Base):
    """A catalogued plant with its taxonomy, descriptions and photos."""

    __tablename__ = "plants"

    id = Column(String(36), primary_key=True, default=new_id)
    nama_indonesia = Column(String(200), nullable=False, index=True)
    nama_latin = Column(String(200), nullable=True)

    kingdom = Column(String(100), nullable=True, default="Plantae")
    divisi = Column(String(100), nullable=True)
    class_ = Column("class", String(100), nullable=True)
    ordo = Column(String(100), nullable=True)
    famili = Column(String(100), nullable=True, index=True)
    genus = Column(String(100), nullable=True)
    spesies = Column(String(200), nullable=True)

    habitat = Column(Text, nullable=True)
    ciri_khas = Column(Text, nullable=True)
    manfaat = Column(Text, nullable=True)

    image_url = Column(Text, nullable=True)  # legacy single photo
    images = Column(JSON, nullable=True)  # part -> url
    taxonomy_descriptions = Column(JSON, nullable=True)
    youtube_url = Column(Text, nullable=True)

    created_by = Column(String(36), ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    collaborator_links = relationship("PlantCollaborator", cascade="all, delete-orphan")
    activity_logs = relationship("PlantActivityLog", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Plant(id={self.id}, nama_indonesia='{self.nama_indonesia}')>"
