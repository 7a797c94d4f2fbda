"""Profile use cases: default profiles, directory, search and self-editing."""
import logging
from typing import Optional

from scifanor.backend import CatalogBackend
from scifanor.catalog.media import avatar_key, validate_image
from scifanor.catalog.normalize import profile_summary
from scifanor.catalog.text import instagram_url
from scifanor.config import Settings
from scifanor.errors import NotFound, PermissionDenied, TransientIOError
from scifanor.schemas import ProfileSummary, ProfileUpdate, UploadResponse

logger = logging.getLogger(__name__)

MIN_SEARCH_LENGTH = 2
SEARCH_LIMIT = 10


def ensure_default_profile(backend: CatalogBackend, full_name: Optional[str] = None) -> ProfileSummary:
    """Return the caller's profile, creating one named after the e-mail if missing."""
    identity = backend.current_identity()
    if identity is None:
        raise PermissionDenied("Login required")
    try:
        return profile_summary(backend.fetch_by_id("profiles", identity["id"]))
    except NotFound:
        pass

    name = (full_name or "").strip() or identity["email"].split("@")[0]
    row = backend.insert("profiles", {"id": identity["id"], "full_name": name})
    logger.info("Created default profile for %s", identity["email"])
    return profile_summary(row)


def list_profiles(backend: CatalogBackend) -> list[ProfileSummary]:
    return [profile_summary(row) for row in backend.fetch_all("profiles", order_by="full_name")]


def search_profiles(backend: CatalogBackend, text: str, limit: int = SEARCH_LIMIT) -> list[ProfileSummary]:
    """Name search for the collaborator picker; short queries return nothing."""
    needle = (text or "").strip()
    if len(needle) < MIN_SEARCH_LENGTH:
        return []
    rows = backend.search("profiles", "full_name", needle, limit=limit)
    return [profile_summary(row) for row in rows]


def update_profile(backend: CatalogBackend, data: ProfileUpdate) -> ProfileSummary:
    identity = backend.current_identity()
    if identity is None:
        raise PermissionDenied("Login required")

    fields = data.model_fields_set
    patch = {}
    if "full_name" in fields and data.full_name:
        patch["full_name"] = data.full_name
    if "bio" in fields:
        patch["bio"] = (data.bio or "").strip() or None
    if "instagram_username" in fields:
        patch["instagram_url"] = instagram_url(data.instagram_username)
    if "avatar_url" in fields and data.avatar_url:
        patch["avatar_url"] = data.avatar_url
    if data.remove_avatar:
        patch["avatar_url"] = None

    row = backend.update("profiles", identity["id"], patch)
    logger.info("Profile updated: %s (%s)", identity["id"], ", ".join(sorted(patch)) or "no changes")
    return profile_summary(row)


def upload_avatar(
    backend: CatalogBackend,
    blob: bytes,
    filename: Optional[str],
    content_type: Optional[str],
    settings: Settings,
) -> UploadResponse:
    """Store a new profile photo and point the caller's profile at it."""
    identity = backend.current_identity()
    if identity is None:
        raise PermissionDenied("Login required")

    validate_image(len(blob), content_type, settings.max_avatar_bytes)
    key = avatar_key(identity["id"], filename)
    url = backend.upload_file(settings.s3_bucket, key, blob, content_type)
    try:
        backend.update("profiles", identity["id"], {"avatar_url": url})
    except TransientIOError as exc:
        logger.warning("Avatar %s may be orphaned, the profile update failed: %s", key, exc)
        raise
    return UploadResponse(url=url, path=key)
