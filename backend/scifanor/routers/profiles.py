"""Profile directory, profile pages and self-editing."""
from fastapi import APIRouter, Depends, File, Query, UploadFile

from scifanor.auth import get_current_user
from scifanor.backend import CatalogBackend
from scifanor.catalog.normalize import load_profile_page
from scifanor.config import get_settings
from scifanor.deps import get_backend
from scifanor.models import User
from scifanor.schemas import ProfilePage, ProfileSummary, ProfileUpdate, UploadResponse
from scifanor.services import profile_service

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get("", response_model=list[ProfileSummary])
def list_profiles(backend: CatalogBackend = Depends(get_backend)):
    """All students ordered by name (public)."""
    return profile_service.list_profiles(backend)


@router.get("/search", response_model=list[ProfileSummary])
def search_profiles(
    q: str = Query("", max_length=100),
    backend: CatalogBackend = Depends(get_backend),
    current_user: User = Depends(get_current_user),
):
    """Collaborator picker search; fewer than two characters returns nothing."""
    return profile_service.search_profiles(backend, q)


@router.put("/me", response_model=ProfileSummary)
def update_my_profile(
    data: ProfileUpdate,
    backend: CatalogBackend = Depends(get_backend),
    current_user: User = Depends(get_current_user),
):
    profile_service.ensure_default_profile(backend)
    return profile_service.update_profile(backend, data)


@router.post("/me/avatar", response_model=UploadResponse, status_code=201)
async def upload_my_avatar(
    file: UploadFile = File(...),
    backend: CatalogBackend = Depends(get_backend),
    current_user: User = Depends(get_current_user),
):
    blob = await file.read()
    profile_service.ensure_default_profile(backend)
    return profile_service.upload_avatar(
        backend, blob, file.filename, file.content_type, get_settings()
    )


@router.get("/{user_id}", response_model=ProfilePage)
def get_profile(user_id: str, backend: CatalogBackend = Depends(get_backend)):
    """Profile page with created and collaborated plants (public)."""
    return load_profile_page(backend, user_id)
