"""
Public client gallery routes: viewing, password check and photo likes.
"""
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from typing import Optional
from app.db.session import get_db
from app.models.user import User
from app.schemas.gallery import (
    ClientGalleryResponse, PasswordVerifyRequest,
    PasswordVerifyResponse, LikeToggleResponse
)
from app.services.access_policy import require_gallery_access, verify_gallery_password
from app.services.like_service import toggle_gallery_photo_like, VisitorIdentifier
from app.core.rate_limit import like_rate_limit
from app.api.dependencies import (
    get_optional_user, get_visitor_identifier,
    get_gallery_password
)

router = APIRouter(prefix="/galleries", tags=["galleries"])


@router.get("/{token}", response_model=ClientGalleryResponse)
async def get_gallery(
    token: str,
    password: Optional[str] = Depends(get_gallery_password),
    current_user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db)
):
    """
    View a gallery by its token.

    404 if unknown, 410 once expired, 401 with `reason` when a password is
    required or wrong. Assigned accounts skip the password.
    """
    return require_gallery_access(
        token, db,
        password=password,
        account_id=current_user.id if current_user else None
    )


@router.post("/{token}/verify-password", response_model=PasswordVerifyResponse)
async def verify_password(
    token: str,
    body: PasswordVerifyRequest,
    db: Session = Depends(get_db)
):
    """Check a password guess without returning gallery content."""
    return {"valid": verify_gallery_password(token, body.password, db)}


@router.patch("/{token}/photos/{photo_id}/like", response_model=LikeToggleResponse)
@like_rate_limit
async def toggle_photo_like(
    request: Request,
    token: str,
    photo_id: int,
    password: Optional[str] = Depends(get_gallery_password),
    current_user: Optional[User] = Depends(get_optional_user),
    visitor: VisitorIdentifier = Depends(get_visitor_identifier),
    db: Session = Depends(get_db)
):
    """Like or unlike a photo in a gallery the caller may view."""
    require_gallery_access(
        token, db,
        password=password,
        account_id=current_user.id if current_user else None
    )
    result = toggle_gallery_photo_like(token, photo_id, visitor, db)
    return LikeToggleResponse(likes=result.likes, is_liked=result.is_liked, photo_id=result.photo_id)
