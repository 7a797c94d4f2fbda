"""Plant catalog endpoints: list, detail, CRUD and history."""
from fastapi import APIRouter, Depends, Response

from scifanor.activity import get_activities
from scifanor.auth import get_current_user
from scifanor.backend import CatalogBackend
from scifanor.catalog.filters import CatalogQuery
from scifanor.config import get_settings
from scifanor.deps import get_backend
from scifanor.models import User
from scifanor.schemas import (
    ActivityEntry,
    CatalogPageResponse,
    CatalogQueryParams,
    PlantDetailResponse,
    PlantView,
    PlantWrite,
)
from scifanor.services import plant_service

router = APIRouter(prefix="/plants", tags=["plants"])


@router.get("", response_model=CatalogPageResponse)
def list_plants(
    params: CatalogQueryParams = Depends(),
    backend: CatalogBackend = Depends(get_backend),
):
    """Catalog page: search, family filter, sort and stats (public)."""
    query = CatalogQuery(search_text=params.q, category_filter=params.family, sort_key=params.sort)
    return plant_service.build_catalog_page(backend, query)


@router.post("", response_model=PlantView, status_code=201)
def create_plant(
    data: PlantWrite,
    backend: CatalogBackend = Depends(get_backend),
    current_user: User = Depends(get_current_user),
):
    """Create a plant (requires auth)."""
    return plant_service.save_plant(backend, data)


@router.get("/{plant_id}", response_model=PlantDetailResponse)
def get_plant(plant_id: str, backend: CatalogBackend = Depends(get_backend)):
    """Plant detail with anatomy map and share link (public)."""
    return plant_service.build_plant_detail(backend, plant_id, get_settings().site_base_url)


@router.put("/{plant_id}", response_model=PlantView)
def update_plant(
    plant_id: str,
    data: PlantWrite,
    backend: CatalogBackend = Depends(get_backend),
    current_user: User = Depends(get_current_user),
):
    """Update a plant (creator, collaborator or admin)."""
    return plant_service.save_plant(backend, data, plant_id=plant_id)


@router.delete("/{plant_id}", status_code=204)
def delete_plant(
    plant_id: str,
    backend: CatalogBackend = Depends(get_backend),
    current_user: User = Depends(get_current_user),
):
    """Delete a plant (creator or admin)."""
    plant_service.delete_plant(backend, plant_id)
    return Response(status_code=204)


@router.get("/{plant_id}/history", response_model=list[ActivityEntry])
def get_plant_history(plant_id: str, backend: CatalogBackend = Depends(get_backend)):
    """Activity timeline, newest first (public)."""
    backend.fetch_by_id("plants", plant_id)
    return get_activities(backend, plant_id)
