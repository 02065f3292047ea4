"""
Public photo catalog routes and the photo like toggle.
"""
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session
from typing import List
from app.db.session import get_db
from app.models.photo import Photo
from app.schemas.photo import PhotoResponse
from app.schemas.gallery import LikeToggleResponse
from app.services import catalog_service
from app.services.like_service import toggle_photo_like, VisitorIdentifier
from app.core.rate_limit import like_rate_limit
from app.api.dependencies import get_visitor_identifier

router = APIRouter(prefix="/photos", tags=["photos"])


@router.get("", response_model=List[PhotoResponse])
async def list_photos(db: Session = Depends(get_db)):
    """List all photos."""
    return db.query(Photo).order_by(Photo.id).all()


@router.get("/featured", response_model=List[PhotoResponse])
async def list_featured_photos(db: Session = Depends(get_db)):
    """Featured photos, most liked first."""
    return db.query(Photo).filter(
        Photo.is_featured.is_(True)
    ).order_by(Photo.likes.desc(), Photo.id).all()


@router.get("/{photo_id}", response_model=PhotoResponse)
async def get_photo(photo_id: int, db: Session = Depends(get_db)):
    """Get photo by ID."""
    photo = catalog_service.get_photo(photo_id, db)
    if not photo:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Photo not found"
        )
    return photo


@router.patch("/{photo_id}/like", response_model=LikeToggleResponse)
@like_rate_limit
async def toggle_like(
    request: Request,
    photo_id: int,
    visitor: VisitorIdentifier = Depends(get_visitor_identifier),
    db: Session = Depends(get_db)
):
    """Like or unlike a photo for the calling visitor."""
    result = toggle_photo_like(photo_id, visitor, db)
    return LikeToggleResponse(likes=result.likes, is_liked=result.is_liked, photo_id=result.photo_id)
