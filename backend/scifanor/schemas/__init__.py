"""Pydantic schemas for API request/response validation."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from scifanor.catalog.anatomy import AnatomyPart
from scifanor.catalog.filters import SortKey
from scifanor.catalog.media import is_valid_youtube_url
from scifanor.catalog.views import (
    IMAGE_PARTS,
    CollaboratorView,
    PlantImages,
    PlantView,
    ProfilePage,
    ProfileStats,
    ProfileSummary,
)


# === Auth Schemas ===
class SignupRequest(BaseModel):
    email: str
    password: str
    full_name: Optional[str] = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        v = v.strip().lower()
        local, _, domain = v.partition("@")
        if not local or "." not in domain:
            raise ValueError("email must look like name@domain.tld")
        return v

    @field_validator("password")
    @classmethod
    def validate_password(cls, v):
        if len(v) < 8:
            raise ValueError("Password must be at least 8 characters")
        return v


class LoginRequest(BaseModel):
    email: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class IdentityResponse(BaseModel):
    id: str
    email: str


# === Plant Schemas ===
class PlantWrite(BaseModel):
    """Fields accepted when creating or editing a plant."""

    model_config = ConfigDict(populate_by_name=True)

    nama_indonesia: str
    nama_latin: Optional[str] = None
    kingdom: Optional[str] = "Plantae"
    divisi: Optional[str] = None
    class_: Optional[str] = Field(default=None, alias="class")
    ordo: Optional[str] = None
    famili: Optional[str] = None
    genus: Optional[str] = None
    spesies: Optional[str] = None
    habitat: Optional[str] = None
    ciri_khas: Optional[str] = None
    manfaat: Optional[str] = None
    images: Optional[PlantImages] = None
    taxonomy_descriptions: Optional[dict[str, str]] = None
    youtube_url: Optional[str] = None

    @field_validator("nama_indonesia")
    @classmethod
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError("nama_indonesia must not be empty")
        return v.strip()

    @field_validator("youtube_url")
    @classmethod
    def validate_youtube(cls, v):
        if v is None or not v.strip():
            return None
        if not is_valid_youtube_url(v.strip()):
            raise ValueError("youtube_url must be a YouTube watch, short or embed link")
        return v.strip()

    @field_validator("taxonomy_descriptions")
    @classmethod
    def drop_empty_descriptions(cls, v):
        if v is None:
            return None
        return {key: text.strip() for key, text in v.items() if text and text.strip()}


class CatalogPageResponse(BaseModel):
    visible: list[PlantView]
    total_count: int
    visible_count: int
    empty_state: Optional[str] = None
    contributor_count: int
    collaboration_count: int
    families: list[str]
    query: dict


class PlantDetailResponse(BaseModel):
    plant: PlantView
    collaborators: list[CollaboratorView]
    anatomy: list[AnatomyPart]
    anatomy_message: Optional[str] = None
    share_url: str
    habitat_preview: Optional[str] = None
    ciri_khas_preview: Optional[str] = None
    manfaat_preview: Optional[str] = None


class CatalogQueryParams(BaseModel):
    q: str = ""
    family: Optional[str] = None
    sort: SortKey = SortKey.NAME_ASC


# === Activity Schemas ===
class ActivityEntry(BaseModel):
    id: str
    plant_id: str
    action_type: str
    details: str
    created_at: datetime
    time_ago: str
    user: Optional[ProfileSummary] = None
    user_name: str


# === Collaborator Schemas ===
class CollaboratorAdd(BaseModel):
    user_id: str


class CollaboratorOutcome(BaseModel):
    status: str  # "added" | "already_exists" | "removed"
    message: str
    collaborators: list[CollaboratorView]


# === Profile Schemas ===
class ProfileUpdate(BaseModel):
    full_name: Optional[str] = None
    bio: Optional[str] = None
    instagram_username: Optional[str] = None
    avatar_url: Optional[str] = None
    remove_avatar: bool = False

    @field_validator("full_name")
    @classmethod
    def validate_full_name(cls, v):
        if v is not None and not v.strip():
            raise ValueError("full_name must not be empty")
        return v.strip() if v else v


class UploadResponse(BaseModel):
    url: str
    path: str


__all__ = [
    "IMAGE_PARTS",
    "ActivityEntry",
    "CatalogPageResponse",
    "CatalogQueryParams",
    "CollaboratorAdd",
    "CollaboratorOutcome",
    "CollaboratorView",
    "IdentityResponse",
    "LoginRequest",
    "PlantDetailResponse",
    "PlantImages",
    "PlantView",
    "PlantWrite",
    "ProfilePage",
    "ProfileStats",
    "ProfileSummary",
    "ProfileUpdate",
    "SignupRequest",
    "TokenResponse",
    "UploadResponse",
]
