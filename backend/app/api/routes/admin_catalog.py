"""
Admin routes for catalog photos, albums and like counter maintenance.
"""
from fastapi import APIRouter, Depends, HTTPException, status, UploadFile, File, Form
from sqlalchemy.orm import Session
from typing import Optional
from app.db.session import get_db
from app.models.user import User
from app.models.photo import Album
from app.schemas.photo import (
    PhotoCreate, PhotoUpdate, PhotoResponse,
    AlbumCreate, AlbumUpdate, AlbumResponse
)
from app.schemas.gallery import ReconcileResponse
from app.services import catalog_service
from app.services.reconcile_service import reconcile_like_counters
from app.services.upload_service import read_image, store_image
from app.services.exif_service import extract_exif
from app.api.dependencies import get_current_admin
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_photo_or_404(photo_id: int, db: Session):
    photo = catalog_service.get_photo(photo_id, db)
    if not photo:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Photo not found"
        )
    return photo


def _get_album_or_404(album_id: int, db: Session) -> Album:
    album = catalog_service.get_album(album_id, db)
    if not album:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Album not found"
        )
    return album


def _check_slug_free(slug: str, db: Session, exclude_id: Optional[int] = None):
    query = db.query(Album).filter(Album.slug == slug)
    if exclude_id is not None:
        query = query.filter(Album.id != exclude_id)
    if query.first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Album slug already exists"
        )


# Photos

@router.post("/photos", response_model=PhotoResponse, status_code=status.HTTP_201_CREATED)
async def create_photo(
    photo_data: PhotoCreate,
    current_admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Create a catalog photo from an already hosted image."""
    photo = catalog_service.create_photo(photo_data.model_dump(), db)
    logger.info(f"Photo {photo.id} created by {current_admin.username}")
    return photo


@router.post("/photos/upload", response_model=PhotoResponse, status_code=status.HTTP_201_CREATED)
async def upload_photo(
    file: UploadFile = File(...),
    title: str = Form(...),
    description: Optional[str] = Form(""),
    location: Optional[str] = Form(""),
    album_id: Optional[int] = Form(None),
    camera_make: Optional[str] = Form(None),
    camera_model: Optional[str] = Form(None),
    lens: Optional[str] = Form(None),
    iso: Optional[int] = Form(None),
    aperture: Optional[str] = Form(None),
    shutter_speed: Optional[str] = Form(None),
    focal_length: Optional[str] = Form(None),
    date_taken: Optional[str] = Form(None),
    current_admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """
    Upload an image file and create a catalog photo for it.

    Capture metadata is read from the file's EXIF; any metadata form field
    that is sent overrides the EXIF value.
    """
    content = await read_image(file)
    image_url = store_image(content, file.content_type)

    data = extract_exif(content)
    overrides = {
        "camera_make": camera_make,
        "camera_model": camera_model,
        "lens": lens,
        "iso": iso,
        "aperture": aperture,
        "shutter_speed": shutter_speed,
        "focal_length": focal_length,
        "date_taken": date_taken,
    }
    data.update({key: value for key, value in overrides.items() if value not in (None, "")})
    data.update({
        "title": title,
        "description": description or "",
        "location": location or "",
        "album_id": album_id,
        "image_url": image_url,
    })

    photo = catalog_service.create_photo(data, db)
    logger.info(f"Photo {photo.id} uploaded by {current_admin.username}: {image_url}")
    return photo


@router.patch("/photos/{photo_id}", response_model=PhotoResponse)
async def update_photo(
    photo_id: int,
    photo_data: PhotoUpdate,
    current_admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Update photo fields."""
    photo = _get_photo_or_404(photo_id, db)
    return catalog_service.update_photo(photo, photo_data.model_dump(exclude_unset=True), db)


@router.delete("/photos/{photo_id}")
async def delete_photo(
    photo_id: int,
    current_admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Delete a photo."""
    photo = _get_photo_or_404(photo_id, db)
    catalog_service.delete_photo(photo, db)
    return {"message": "Photo deleted successfully"}


# Albums

@router.post("/albums", response_model=AlbumResponse, status_code=status.HTTP_201_CREATED)
async def create_album(
    album_data: AlbumCreate,
    current_admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Create an album, optionally under an existing parent."""
    _check_slug_free(album_data.slug, db)
    if album_data.parent_id is not None:
        _get_album_or_404(album_data.parent_id, db)
    return catalog_service.create_album(album_data.model_dump(), db)


@router.patch("/albums/{album_id}", response_model=AlbumResponse)
async def update_album(
    album_id: int,
    album_data: AlbumUpdate,
    current_admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Update album fields."""
    album = _get_album_or_404(album_id, db)
    updates = album_data.model_dump(exclude_unset=True)
    if updates.get("slug"):
        _check_slug_free(updates["slug"], db, exclude_id=album_id)

    for field, value in updates.items():
        setattr(album, field, value)
    db.commit()
    db.refresh(album)
    return album


@router.delete("/albums/{album_id}")
async def delete_album(
    album_id: int,
    current_admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Delete an album. Its photos and sub-albums are left in place."""
    album = _get_album_or_404(album_id, db)
    db.delete(album)
    db.commit()
    return {"message": "Album deleted successfully"}


# Likes

@router.post("/likes/reconcile", response_model=ReconcileResponse)
async def reconcile_likes(
    current_admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Recompute every like counter from the like ledger."""
    return {"repaired": reconcile_like_counters(db)}
