"""Catalog use cases: page assembly, plant writes, collaborators and photos.

Every function takes a ``CatalogBackend`` bound to the requesting user, so the
row-level policies apply no matter which router calls in.
"""
import logging
from typing import Optional

from scifanor.activity import COLLABORATOR_DETAILS, log_activity
from scifanor.backend import CatalogBackend
from scifanor.catalog.anatomy import AnatomyMap
from scifanor.catalog.diff import diff_to_summary
from scifanor.catalog.filters import CatalogQuery, apply_filters, compute_aggregates
from scifanor.catalog.media import plant_image_key, validate_image
from scifanor.catalog.normalize import load_catalog, load_plant_detail, normalize
from scifanor.catalog.text import share_url, truncate_preview
from scifanor.config import Settings
from scifanor.errors import Conflict, TransientIOError
from scifanor.models import ActionType
from scifanor.schemas import (
    CatalogPageResponse,
    CollaboratorOutcome,
    CollaboratorView,
    PlantDetailResponse,
    PlantView,
    PlantWrite,
    UploadResponse,
)

logger = logging.getLogger(__name__)

ALREADY_COLLABORATOR = "User sudah menjadi kolaborator"
COLLABORATOR_ADDED = "Kolaborator berhasil ditambahkan"
COLLABORATOR_REMOVED = "Kolaborator berhasil dihapus"


# ── Reads ─────────────────────────────────────────────────────
def build_catalog_page(backend: CatalogBackend, query: CatalogQuery) -> CatalogPageResponse:
    collection = load_catalog(backend)
    result = apply_filters(collection, query)
    stats = compute_aggregates(collection)
    return CatalogPageResponse(
        visible=result.visible,
        total_count=result.total_count,
        visible_count=result.visible_count,
        empty_state=result.empty_state.value if result.empty_state else None,
        contributor_count=stats.contributor_count,
        collaboration_count=stats.collaboration_count,
        families=stats.families,
        query={
            "q": query.search_text,
            "family": query.category_filter,
            "sort": query.sort_key.value,
        },
    )


def build_plant_detail(backend: CatalogBackend, plant_id: str, site_base_url: str) -> PlantDetailResponse:
    plant = load_plant_detail(backend, plant_id)
    anatomy = AnatomyMap.from_images(plant.images)
    return PlantDetailResponse(
        plant=plant,
        collaborators=plant.visible_collaborators,
        anatomy=anatomy.parts,
        anatomy_message=anatomy.message,
        share_url=share_url(site_base_url, plant.id),
        habitat_preview=truncate_preview(plant.habitat),
        ciri_khas_preview=truncate_preview(plant.ciri_khas),
        manfaat_preview=truncate_preview(plant.manfaat),
    )


# ── Plant writes ──────────────────────────────────────────────
def _plant_row(data: PlantWrite, exclude_unset: bool) -> dict:
    row = data.model_dump(by_alias=True, exclude_unset=exclude_unset)
    if "images" in row:
        images = row["images"] or {}
        row["images"] = {part: url for part, url in images.items() if url} or None
        # the legacy column keeps mirroring the main photo for older pages
        row["image_url"] = images.get("full_plant")
    if "taxonomy_descriptions" in row and not row["taxonomy_descriptions"]:
        row["taxonomy_descriptions"] = None
    return row


def _warn_orphans(row: dict, exc: TransientIOError) -> None:
    urls = [url for url in (row.get("images") or {}).values() if url]
    if urls:
        logger.warning("Plant write failed after upload, objects may be orphaned: %s (%s)", urls, exc)


def create_plant(backend: CatalogBackend, data: PlantWrite) -> PlantView:
    row = _plant_row(data, exclude_unset=False)
    row["kingdom"] = row.get("kingdom") or "Plantae"
    identity = backend.current_identity()
    if identity is not None:
        row["created_by"] = identity["id"]

    try:
        created = backend.insert("plants", row)
    except TransientIOError as exc:
        _warn_orphans(row, exc)
        raise
    logger.info("Plant created: %s (%s)", created["nama_indonesia"], created["id"])
    log_activity(backend, created["id"], ActionType.CREATE, f"Menambahkan tumbuhan {created['nama_indonesia']}")
    return normalize(created)


def update_plant(backend: CatalogBackend, plant_id: str, data: PlantWrite) -> PlantView:
    before = normalize(backend.fetch_by_id("plants", plant_id)).model_dump(by_alias=True)
    patch = _plant_row(data, exclude_unset=True)

    try:
        updated = backend.update("plants", plant_id, patch)
    except TransientIOError as exc:
        _warn_orphans(patch, exc)
        raise
    after = {**before, **patch}
    if "taxonomy_descriptions" in patch:
        # stored as NULL when cleared, compared as an empty mapping
        after["taxonomy_descriptions"] = data.taxonomy_descriptions or {}
    log_activity(backend, plant_id, ActionType.UPDATE, diff_to_summary(before, after))
    return normalize(updated)


def save_plant(backend: CatalogBackend, data: PlantWrite, plant_id: Optional[str] = None) -> PlantView:
    """Create when ``plant_id`` is None, otherwise update that plant."""
    if plant_id is None:
        return create_plant(backend, data)
    return update_plant(backend, plant_id, data)


def delete_plant(backend: CatalogBackend, plant_id: str) -> None:
    backend.delete("plants", plant_id)
    logger.info("Plant deleted: %s", plant_id)


# ── Collaborators ─────────────────────────────────────────────
def list_collaborators(backend: CatalogBackend, plant_id: str) -> list[CollaboratorView]:
    return load_plant_detail(backend, plant_id).collaborators


def add_collaborator(backend: CatalogBackend, plant_id: str, user_id: str) -> CollaboratorOutcome:
    """Link a profile to a plant; an existing link is reported, not raised."""
    backend.fetch_by_id("profiles", user_id)
    identity = backend.current_identity()
    try:
        backend.insert("plant_collaborators", {
            "plant_id": plant_id,
            "user_id": user_id,
            "added_by": identity["id"] if identity else None,
        })
    except Conflict:
        logger.info("User %s already collaborates on plant %s", user_id, plant_id)
        return CollaboratorOutcome(
            status="already_exists",
            message=ALREADY_COLLABORATOR,
            collaborators=list_collaborators(backend, plant_id),
        )

    log_activity(
        backend, plant_id, ActionType.ADD_COLLABORATOR,
        COLLABORATOR_DETAILS[ActionType.ADD_COLLABORATOR],
    )
    return CollaboratorOutcome(
        status="added",
        message=COLLABORATOR_ADDED,
        collaborators=list_collaborators(backend, plant_id),
    )


def remove_collaborator(backend: CatalogBackend, plant_id: str, user_id: str) -> CollaboratorOutcome:
    removed = backend.delete_where("plant_collaborators", plant_id=plant_id, user_id=user_id)
    if removed:
        log_activity(
            backend, plant_id, ActionType.REMOVE_COLLABORATOR,
            COLLABORATOR_DETAILS[ActionType.REMOVE_COLLABORATOR],
        )
    return CollaboratorOutcome(
        status="removed" if removed else "not_found",
        message=COLLABORATOR_REMOVED if removed else "User bukan kolaborator",
        collaborators=list_collaborators(backend, plant_id),
    )


# ── Photos ────────────────────────────────────────────────────
def upload_plant_image(
    backend: CatalogBackend,
    blob: bytes,
    filename: Optional[str],
    content_type: Optional[str],
    settings: Settings,
) -> UploadResponse:
    """Store a plant photo and return its public URL.

    The upload is not tied to a database write. If the plant save that should
    reference it fails, the object stays in the bucket unreferenced.
    """
    validate_image(len(blob), content_type, settings.max_image_bytes)
    key = plant_image_key(filename)
    url = backend.upload_file(settings.s3_bucket, key, blob, content_type)
    logger.info("Uploaded plant image %s/%s", settings.s3_bucket, key)
    return UploadResponse(url=url, path=key)


