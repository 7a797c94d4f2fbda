"""Collaborator management for a single plant."""
from fastapi import APIRouter, Depends

from scifanor.auth import get_current_user
from scifanor.backend import CatalogBackend
from scifanor.deps import get_backend
from scifanor.models import User
from scifanor.schemas import CollaboratorAdd, CollaboratorOutcome, CollaboratorView
from scifanor.services import plant_service

router = APIRouter(prefix="/plants/{plant_id}/collaborators", tags=["collaborators"])


@router.get("", response_model=list[CollaboratorView])
def list_collaborators(plant_id: str, backend: CatalogBackend = Depends(get_backend)):
    return plant_service.list_collaborators(backend, plant_id)


@router.post("", response_model=CollaboratorOutcome)
def add_collaborator(
    plant_id: str,
    data: CollaboratorAdd,
    backend: CatalogBackend = Depends(get_backend),
    current_user: User = Depends(get_current_user),
):
    """Add a collaborator; an existing one is reported with status ``already_exists``."""
    return plant_service.add_collaborator(backend, plant_id, data.user_id)


@router.delete("/{user_id}", response_model=CollaboratorOutcome)
def remove_collaborator(
    plant_id: str,
    user_id: str,
    backend: CatalogBackend = Depends(get_backend),
    current_user: User = Depends(get_current_user),
):
    return plant_service.remove_collaborator(backend, plant_id, user_id)
