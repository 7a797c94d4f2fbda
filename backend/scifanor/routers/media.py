"""Media endpoints: plant photo upload to the public bucket."""
from fastapi import APIRouter, Depends, File, UploadFile

from scifanor.auth import get_current_user
from scifanor.backend import CatalogBackend
from scifanor.config import get_settings
from scifanor.deps import get_backend
from scifanor.models import User
from scifanor.schemas import UploadResponse
from scifanor.services import plant_service

router = APIRouter(prefix="/media", tags=["media"])


@router.post("/images", response_model=UploadResponse, status_code=201)
async def upload_image(
    file: UploadFile = File(...),
    backend: CatalogBackend = Depends(get_backend),
    current_user: User = Depends(get_current_user),
):
    """Upload one plant photo; the returned URL goes into the plant's ``images``."""
    blob = await file.read()
    return plant_service.upload_plant_image(
        backend, blob, file.filename, file.content_type, get_settings()
    )
