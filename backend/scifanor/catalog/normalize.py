"""Turn raw backend rows into render-ready plant view models.

Rows come straight from ``CatalogBackend``: plants, collaborator links and
profiles are fetched separately and joined here. Augmentation lookups that
fail are logged and replaced by empty values so that one missing profile
never takes down a whole page.
"""
import json
import logging
from datetime import datetime
from typing import Any, Iterable, Mapping, Optional

from scifanor.backend import CatalogBackend
from scifanor.catalog.media import youtube_embed_url
from scifanor.catalog.views import (
    IMAGE_PARTS,
    CollaboratorView,
    PlantImages,
    PlantView,
    ProfilePage,
    ProfileStats,
    ProfileSummary,
)
from scifanor.errors import TransientIOError

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("id", "full_name", "avatar_url", "instagram_url", "bio", "is_admin")
STUDENT_ROLE = "Siswa 12 IPS 2"


def _decode_json(value: Any, field: str, plant_id: Any) -> dict:
    if value is None or value == "":
        return {}
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            logger.warning("Plant %s has malformed %s, ignoring it", plant_id, field)
            return {}
    if not isinstance(value, Mapping):
        logger.warning("Plant %s has non-object %s, ignoring it", plant_id, field)
        return {}
    return dict(value)


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        logger.warning("Unparseable timestamp %r, treating it as missing", value)
        return None


def resolve_images(raw_plant: Mapping[str, Any]) -> PlantImages:
    """All six parts, with ``full_plant`` falling back to the legacy ``image_url``."""
    decoded = _decode_json(raw_plant.get("images"), "images", raw_plant.get("id"))
    parts = {part: (decoded.get(part) or None) for part in IMAGE_PARTS}
    if not parts["full_plant"]:
        parts["full_plant"] = raw_plant.get("image_url") or None
    return PlantImages(**parts)


def profile_summary(row: Optional[Mapping[str, Any]]) -> Optional[ProfileSummary]:
    if not row:
        return None
    data = {field: row.get(field) for field in PROFILE_FIELDS}
    data["is_admin"] = bool(data["is_admin"])
    return ProfileSummary(**data)


def normalize(
    raw_plant: Mapping[str, Any],
    raw_links: Iterable[Mapping[str, Any]] = (),
    raw_profiles: Iterable[Mapping[str, Any]] = (),
) -> PlantView:
    plant_id = raw_plant["id"]
    profiles = {row["id"]: row for row in raw_profiles if row and row.get("id")}

    images = resolve_images(raw_plant)
    descriptions = _decode_json(
        raw_plant.get("taxonomy_descriptions"), "taxonomy_descriptions", plant_id
    )

    collaborators = [
        CollaboratorView(
            user_id=link["user_id"],
            profile=profile_summary(profiles.get(link["user_id"])),
        )
        for link in raw_links
        if link.get("plant_id", plant_id) == plant_id
    ]

    created_by = raw_plant.get("created_by")
    return PlantView(
        id=plant_id,
        nama_indonesia=raw_plant.get("nama_indonesia") or "",
        nama_latin=raw_plant.get("nama_latin"),
        kingdom=raw_plant.get("kingdom"),
        divisi=raw_plant.get("divisi"),
        class_=raw_plant.get("class"),
        ordo=raw_plant.get("ordo"),
        famili=raw_plant.get("famili"),
        genus=raw_plant.get("genus"),
        spesies=raw_plant.get("spesies"),
        habitat=raw_plant.get("habitat"),
        ciri_khas=raw_plant.get("ciri_khas"),
        manfaat=raw_plant.get("manfaat"),
        image_url=raw_plant.get("image_url"),
        images=images,
        main_image=images.full_plant,
        taxonomy_descriptions={k: str(v) for k, v in descriptions.items() if v},
        youtube_url=raw_plant.get("youtube_url"),
        youtube_embed_url=youtube_embed_url(raw_plant.get("youtube_url")),
        created_by=created_by,
        created_at=_parse_timestamp(raw_plant.get("created_at")),
        creator=profile_summary(profiles.get(created_by)) if created_by else None,
        collaborators=collaborators,
    )


def _fetch_links(backend: CatalogBackend, plant_ids: list[str]) -> list[dict]:
    try:
        return backend.fetch_where("plant_collaborators", "plant_id", plant_ids)
    except TransientIOError as exc:
        logger.error("Failed to load collaborators: %s", exc)
        return []


def _fetch_profiles(backend: CatalogBackend, user_ids: set[str]) -> list[dict]:
    try:
        return backend.fetch_where("profiles", "id", sorted(user_ids))
    except TransientIOError as exc:
        logger.error("Failed to load profiles: %s", exc)
        return []


def _join(backend: CatalogBackend, raw_plants: list[dict]) -> list[PlantView]:
    links = _fetch_links(backend, [row["id"] for row in raw_plants])
    user_ids = {row["created_by"] for row in raw_plants if row.get("created_by")}
    user_ids.update(link["user_id"] for link in links)
    profiles = _fetch_profiles(backend, user_ids)

    links_by_plant: dict[str, list[dict]] = {}
    for link in links:
        links_by_plant.setdefault(link["plant_id"], []).append(link)

    return [normalize(row, links_by_plant.get(row["id"], []), profiles) for row in raw_plants]


def load_catalog(backend: CatalogBackend, order_by: str = "nama_indonesia") -> list[PlantView]:
    """Every plant, joined with creators and collaborators.

    A failure to read the plants themselves propagates; the caller shows its
    error state and keeps whatever it displayed before.
    """
    raw_plants = backend.fetch_all("plants", order_by=order_by)
    logger.info("Loaded %d plants", len(raw_plants))
    return _join(backend, raw_plants)


def load_plant_detail(backend: CatalogBackend, plant_id: str) -> PlantView:
    raw_plant = backend.fetch_by_id("plants", plant_id)
    return _join(backend, [raw_plant])[0]


def load_profile_page(backend: CatalogBackend, user_id: str) -> ProfilePage:
    profile = profile_summary(backend.fetch_by_id("profiles", user_id))

    created = backend.fetch_where("plants", "created_by", [user_id], order_by="-created_at")
    try:
        links = backend.fetch_where("plant_collaborators", "user_id", [user_id])
        collaborated = backend.fetch_where(
            "plants", "id", [link["plant_id"] for link in links], order_by="-created_at"
        )
    except TransientIOError as exc:
        logger.error("Failed to load collaborations for %s: %s", user_id, exc)
        collaborated = []

    created_views = [normalize(row) for row in created]
    collab_views = [normalize(row) for row in collaborated]
    role = f"Admin • {STUDENT_ROLE}" if profile.is_admin else STUDENT_ROLE
    return ProfilePage(
        profile=profile,
        role_label=role,
        created_plants=created_views,
        collaborated_plants=collab_views,
        stats=ProfileStats(
            total=len(created_views) + len(collab_views),
            created=len(created_views),
            collaborated=len(collab_views),
        ),
    )
