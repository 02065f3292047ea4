"""
Public album routes.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from app.db.session import get_db
from app.models.photo import Album, Photo
from app.schemas.photo import AlbumResponse, PhotoResponse
from app.services import catalog_service

router = APIRouter(prefix="/albums", tags=["albums"])


def _get_album_or_404(album_id: int, db: Session) -> Album:
    album = catalog_service.get_album(album_id, db)
    if not album:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Album not found"
        )
    return album


@router.get("", response_model=List[AlbumResponse])
async def list_albums(db: Session = Depends(get_db)):
    """List all albums."""
    return db.query(Album).order_by(Album.id).all()


@router.get("/main", response_model=List[AlbumResponse])
async def list_main_albums(db: Session = Depends(get_db)):
    """Top-level albums only."""
    return db.query(Album).filter(Album.parent_id.is_(None)).order_by(Album.id).all()


@router.get("/slug/{slug:path}", response_model=AlbumResponse)
async def get_album_by_slug(slug: str, db: Session = Depends(get_db)):
    """Get album by slug; nested slugs like `athletics/cross-2025` are supported."""
    album = db.query(Album).filter(Album.slug == slug).first()
    if not album:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Album not found"
        )
    return album


@router.get("/{album_id}", response_model=AlbumResponse)
async def get_album(album_id: int, db: Session = Depends(get_db)):
    """Get album by ID."""
    return _get_album_or_404(album_id, db)


@router.get("/{album_id}/subalbums", response_model=List[AlbumResponse])
async def list_subalbums(album_id: int, db: Session = Depends(get_db)):
    """Direct children of an album."""
    return db.query(Album).filter(Album.parent_id == album_id).order_by(Album.id).all()


@router.get("/{album_id}/photos", response_model=List[PhotoResponse])
async def list_album_photos(album_id: int, db: Session = Depends(get_db)):
    """Photos assigned to an album."""
    return db.query(Photo).filter(Photo.album_id == album_id).order_by(Photo.id).all()
