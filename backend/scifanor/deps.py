"""Request-scoped dependencies shared by the routers."""
from typing import Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from scifanor.auth import get_optional_user
from scifanor.backend import CatalogBackend
from scifanor.database import get_db
from scifanor.models import User
from scifanor.storage import ObjectStorage, get_storage


def get_backend(
    db: Session = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    user: Optional[User] = Depends(get_optional_user),
) -> CatalogBackend:
    """Backend client bound to the requesting user (or anonymous)."""
    return CatalogBackend(db, storage=storage, user=user)
