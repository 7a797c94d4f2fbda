"""View models produced by the catalog normalization layer."""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from scifanor.catalog import avatars, text

IMAGE_PARTS = ("full_plant", "root", "stem", "leaf", "fruit", "flower")


class PlantImages(BaseModel):
    full_plant: Optional[str] = None
    root: Optional[str] = None
    stem: Optional[str] = None
    leaf: Optional[str] = None
    fruit: Optional[str] = None
    flower: Optional[str] = None


class ProfileSummary(BaseModel):
    id: str
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    instagram_url: Optional[str] = None
    bio: Optional[str] = None
    is_admin: bool = False

    @computed_field
    @property
    def initial(self) -> str:
        return avatars.initial_for(self.full_name)

    @computed_field
    @property
    def avatar_color(self) -> str:
        return avatars.avatar_color(self.initial)

    @computed_field
    @property
    def instagram_handle(self) -> Optional[str]:
        return text.instagram_handle(self.instagram_url)


class CollaboratorView(BaseModel):
    user_id: str
    profile: Optional[ProfileSummary] = None


class PlantView(BaseModel):
    """Render-ready plant: images reconciled, creator and collaborators joined."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    nama_indonesia: str = ""
    nama_latin: Optional[str] = None
    kingdom: Optional[str] = None
    divisi: Optional[str] = None
    class_: Optional[str] = Field(default=None, alias="class")
    ordo: Optional[str] = None
    famili: Optional[str] = None
    genus: Optional[str] = None
    spesies: Optional[str] = None
    habitat: Optional[str] = None
    ciri_khas: Optional[str] = None
    manfaat: Optional[str] = None

    image_url: Optional[str] = None
    images: PlantImages = Field(default_factory=PlantImages)
    main_image: Optional[str] = None
    taxonomy_descriptions: dict[str, str] = Field(default_factory=dict)
    youtube_url: Optional[str] = None
    youtube_embed_url: Optional[str] = None

    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    creator: Optional[ProfileSummary] = None
    collaborators: list[CollaboratorView] = Field(default_factory=list)

    @property
    def visible_collaborators(self) -> list[CollaboratorView]:
        """Collaborators whose profile could be resolved."""
        return [c for c in self.collaborators if c.profile is not None]


class ProfileStats(BaseModel):
    total: int
    created: int
    collaborated: int


class ProfilePage(BaseModel):
    profile: ProfileSummary
    role_label: str
    created_plants: list[PlantView]
    collaborated_plants: list[PlantView]
    stats: ProfileStats
