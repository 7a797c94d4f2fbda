"""Authentication API endpoints."""
from fastapi import APIRouter, Depends, HTTPException, Request, status
from slowapi import Limiter
from slowapi.util import get_remote_address
from sqlalchemy.orm import Session

from scifanor.auth import create_access_token, get_current_user, hash_password, verify_password
from scifanor.backend import CatalogBackend
from scifanor.database import get_db
from scifanor.models import User
from scifanor.models._common import utcnow
from scifanor.schemas import IdentityResponse, LoginRequest, SignupRequest, TokenResponse
from scifanor.services.profile_service import ensure_default_profile

router = APIRouter(prefix="/auth", tags=["auth"])
limiter = Limiter(key_func=get_remote_address)


@router.post("/signup", response_model=IdentityResponse, status_code=201)
@limiter.limit("5/minute")
async def signup(request: Request, data: SignupRequest, db: Session = Depends(get_db)):
    """Create a new account together with its default profile."""
    existing = db.query(User).filter(User.email == data.email).first()
    if existing:
        # Don't reveal if email exists (prevent enumeration)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Could not create account"
        )

    user = User(email=data.email, password_hash=hash_password(data.password))
    db.add(user)
    db.commit()
    db.refresh(user)

    ensure_default_profile(CatalogBackend(db, user=user), data.full_name)
    return IdentityResponse(id=user.id, email=user.email)


@router.post("/login", response_model=TokenResponse)
@limiter.limit("10/minute")
async def login(request: Request, data: LoginRequest, db: Session = Depends(get_db)):
    """Login and get access token."""
    user = db.query(User).filter(User.email == data.email.strip().lower()).first()

    if not user or not verify_password(data.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password"
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account disabled"
        )

    user.last_login = utcnow()
    db.commit()
    # accounts created outside signup (seeding, admin tools) get their profile here
    ensure_default_profile(CatalogBackend(db, user=user))
    return TokenResponse(access_token=create_access_token(user))


@router.get("/me", response_model=IdentityResponse)
async def get_me(current_user: User = Depends(get_current_user)):
    """Get current authenticated user."""
    return IdentityResponse(id=current_user.id, email=current_user.email)
