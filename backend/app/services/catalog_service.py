"""
Catalog service for photo and album business logic.
"""
from sqlalchemy.orm import Session
from typing import Optional
from app.models.photo import Photo, Album


def get_photo(photo_id: int, db: Session) -> Optional[Photo]:
    return db.query(Photo).filter(Photo.id == photo_id).first()


def get_album(album_id: int, db: Session) -> Optional[Album]:
    return db.query(Album).filter(Album.id == album_id).first()


def adjust_album_photo_count(album_id: Optional[int], delta: int, db: Session) -> None:
    """Bump the advisory photo count; missing albums are ignored."""
    if album_id is None:
        return
    album = get_album(album_id, db)
    if album:
        album.photo_count = max(0, (album.photo_count or 0) + delta)


def create_photo(data: dict, db: Session) -> Photo:
    """Create a catalog photo. New photos start unfeatured with zero likes."""
    photo = Photo(**data, likes=0)
    db.add(photo)
    adjust_album_photo_count(photo.album_id, 1, db)
    db.commit()
    db.refresh(photo)
    return photo


def update_photo(photo: Photo, updates: dict, db: Session) -> Photo:
    if "album_id" in updates and updates["album_id"] != photo.album_id:
        adjust_album_photo_count(photo.album_id, -1, db)
        adjust_album_photo_count(updates["album_id"], 1, db)

    for field, value in updates.items():
        setattr(photo, field, value)

    db.commit()
    db.refresh(photo)
    return photo


def delete_photo(photo: Photo, db: Session) -> None:
    """Delete a photo. Albums using it as cover keep the dangling reference."""
    adjust_album_photo_count(photo.album_id, -1, db)
    db.delete(photo)
    db.commit()


def create_album(data: dict, db: Session) -> Album:
    album = Album(**data, photo_count=0)
    db.add(album)
    db.commit()
    db.refresh(album)
    return album
