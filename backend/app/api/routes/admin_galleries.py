"""
Admin routes for client galleries.
"""
from fastapi import APIRouter, Depends, HTTPException, status, UploadFile, File, Form
from sqlalchemy.orm import Session
from typing import List, Optional
from app.db.session import get_db
from app.models.user import User
from app.models.gallery import ClientGallery
from app.schemas.gallery import (
    ClientGalleryCreate, ClientGalleryUpdate, ClientGalleryAdminResponse,
    GalleryPhotoCreate, GalleryPhotoResponse
)
from app.services import gallery_store
from app.services.upload_service import save_image
from app.api.dependencies import get_current_admin

router = APIRouter(prefix="/admin/client-galleries", tags=["admin"])


def _get_gallery_or_404(gallery_id: int, db: Session) -> ClientGallery:
    gallery = gallery_store.get_gallery(gallery_id, db)
    if not gallery:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Gallery not found"
        )
    return gallery


def _check_user_exists(user_id: Optional[int], db: Session):
    if user_id is not None and not db.query(User).filter(User.id == user_id).first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Assigned user does not exist"
        )


@router.post("", response_model=ClientGalleryAdminResponse, status_code=status.HTTP_201_CREATED)
async def create_gallery(
    gallery_data: ClientGalleryCreate,
    current_admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Create a client gallery with a fresh share token."""
    _check_user_exists(gallery_data.user_id, db)
    return gallery_store.create_gallery(
        gallery_data.client_name, db,
        description=gallery_data.description,
        password=gallery_data.password,
        user_id=gallery_data.user_id,
        expires_at=gallery_data.expires_at,
        allow_download=gallery_data.allow_download
    )


@router.get("", response_model=List[ClientGalleryAdminResponse])
async def list_galleries(
    current_admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """List all galleries, newest first."""
    return gallery_store.list_galleries(db)


@router.get("/{gallery_id}", response_model=ClientGalleryAdminResponse)
async def get_gallery(
    gallery_id: int,
    current_admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Get a gallery regardless of expiry or password."""
    return _get_gallery_or_404(gallery_id, db)


@router.patch("/{gallery_id}", response_model=ClientGalleryAdminResponse)
async def update_gallery(
    gallery_id: int,
    gallery_data: ClientGalleryUpdate,
    current_admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Update gallery settings. Send `password: ""` to remove protection."""
    gallery = _get_gallery_or_404(gallery_id, db)
    updates = gallery_data.model_dump(exclude_unset=True)
    if "user_id" in updates:
        _check_user_exists(updates["user_id"], db)
    return gallery_store.update_gallery(gallery, updates, db)


@router.delete("/{gallery_id}")
async def delete_gallery(
    gallery_id: int,
    current_admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Delete a gallery and its photos."""
    gallery = _get_gallery_or_404(gallery_id, db)
    gallery_store.delete_gallery(gallery, db)
    return {"message": "Gallery deleted successfully"}


@router.post("/{gallery_id}/photos", response_model=GalleryPhotoResponse, status_code=status.HTTP_201_CREATED)
async def add_photo(
    gallery_id: int,
    photo_data: GalleryPhotoCreate,
    current_admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Append an already hosted image to a gallery."""
    gallery = _get_gallery_or_404(gallery_id, db)
    return gallery_store.append_photo(
        gallery, photo_data.title, photo_data.image_url, db,
        description=photo_data.description
    )


@router.post("/{gallery_id}/photos/upload", response_model=GalleryPhotoResponse, status_code=status.HTTP_201_CREATED)
async def upload_photo(
    gallery_id: int,
    file: UploadFile = File(...),
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(""),
    current_admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Upload an image file into a gallery. Title defaults to the file name."""
    gallery = _get_gallery_or_404(gallery_id, db)
    image_url = await save_image(file)
    return gallery_store.append_photo(
        gallery, title or file.filename or "Untitled", image_url, db,
        description=description
    )


@router.delete("/{gallery_id}/photos/{photo_id}")
async def remove_photo(
    gallery_id: int,
    photo_id: int,
    current_admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Remove a photo from a gallery."""
    gallery = _get_gallery_or_404(gallery_id, db)
    if not gallery_store.remove_photo(gallery, photo_id, db):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Photo not found in this gallery"
        )
    return {"message": "Photo removed successfully"}
