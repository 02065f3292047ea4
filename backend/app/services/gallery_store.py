"""
Client gallery persistence: gallery records and their embedded photos.
"""
from sqlalchemy import case, or_, select, update
from sqlalchemy.orm import Session
from datetime import datetime
from typing import List, Optional
from app.models.gallery import ClientGallery, GalleryPhoto
from app.core.security import get_password_hash
from app.core.utils import generate_gallery_token, to_naive_utc, utcnow
import logging

logger = logging.getLogger(__name__)


def get_gallery_by_token(token: str, db: Session) -> Optional[ClientGallery]:
    return db.query(ClientGallery).filter(ClientGallery.token == token).first()


def get_gallery(gallery_id: int, db: Session) -> Optional[ClientGallery]:
    return db.query(ClientGallery).filter(ClientGallery.id == gallery_id).first()


def list_galleries(db: Session, user_id: Optional[int] = None) -> List[ClientGallery]:
    """All galleries newest first, optionally only those assigned to `user_id`."""
    query = db.query(ClientGallery)
    if user_id is not None:
        query = query.filter(ClientGallery.user_id == user_id)
    return query.order_by(ClientGallery.created_at.desc(), ClientGallery.id.desc()).all()


def create_gallery(
    client_name: str,
    db: Session,
    description: Optional[str] = None,
    password: Optional[str] = None,
    user_id: Optional[int] = None,
    expires_at: Optional[datetime] = None,
    allow_download: bool = False
) -> ClientGallery:
    """Create a gallery; its token is generated here and never changes."""
    gallery = ClientGallery(
        client_name=client_name,
        description=description or "",
        token=generate_gallery_token(),
        password_hash=get_password_hash(password) if password else None,
        user_id=user_id,
        expires_at=to_naive_utc(expires_at) if expires_at else None,
        allow_download=allow_download
    )
    db.add(gallery)
    db.commit()
    db.refresh(gallery)
    logger.info(f"Created client gallery {gallery.id} for '{client_name}'")
    return gallery


def update_gallery(gallery: ClientGallery, updates: dict, db: Session) -> ClientGallery:
    """
    Apply field updates. A `password` key sets a new secret; an empty or
    None password removes protection.
    """
    if "password" in updates:
        password = updates.pop("password")
        gallery.password_hash = get_password_hash(password) if password else None

    if "expires_at" in updates and updates["expires_at"] is not None:
        updates["expires_at"] = to_naive_utc(updates["expires_at"])

    for field, value in updates.items():
        setattr(gallery, field, value)

    db.commit()
    db.refresh(gallery)
    return gallery


def delete_gallery(gallery: ClientGallery, db: Session) -> None:
    db.delete(gallery)
    db.commit()
    logger.info(f"Deleted client gallery {gallery.id}")


def append_photo(
    gallery: ClientGallery,
    title: str,
    image_url: str,
    db: Session,
    description: Optional[str] = None
) -> GalleryPhoto:
    """Append a photo to the end of the gallery with a zero like counter."""
    photo = GalleryPhoto(
        gallery_id=gallery.id,
        title=title,
        description=description or "",
        image_url=image_url,
        uploaded_at=utcnow(),
        likes=0
    )
    db.add(photo)
    db.commit()
    db.refresh(photo)
    return photo


def remove_photo(gallery: ClientGallery, photo_id: int, db: Session) -> bool:
    photo = find_gallery_photo(gallery, photo_id, db)
    if not photo:
        return False
    db.delete(photo)
    db.commit()
    return True


def _photo_id_matchers(photo_id: int):
    # TODO: drop the legacy_id fallback once imported galleries are rewritten with integer ids
    return [
        GalleryPhoto.id == photo_id,
        GalleryPhoto.legacy_id == str(photo_id),
    ]


def find_gallery_photo(gallery: ClientGallery, photo_id: int, db: Session) -> Optional[GalleryPhoto]:
    """Membership check: the photo must belong to this gallery, by either id form."""
    return db.query(GalleryPhoto).filter(
        GalleryPhoto.gallery_id == gallery.id,
        or_(*_photo_id_matchers(photo_id))
    ).order_by(
        # Prefer the canonical id when both forms happen to match
        case((GalleryPhoto.id == photo_id, 0), else_=1)
    ).first()


def adjust_photo_likes(gallery_token: str, photo_id: int, delta: int, db: Session) -> Optional[int]:
    """
    Add `delta` to one embedded photo's counter, floored at zero.

    `photo_id` is the canonical id returned by `find_gallery_photo`. The
    update targets the single row matching gallery token and that id.
    Returns the new counter value, or None if no row matched. Does not commit.
    """
    gallery_id = select(ClientGallery.id).where(ClientGallery.token == gallery_token).scalar_subquery()
    if delta >= 0:
        new_value = GalleryPhoto.likes + delta
    else:
        new_value = case((GalleryPhoto.likes + delta > 0, GalleryPhoto.likes + delta), else_=0)

    target = (GalleryPhoto.gallery_id == gallery_id, GalleryPhoto.id == photo_id)
    result = db.execute(
        update(GalleryPhoto)
        .where(*target)
        .values(likes=new_value)
        .execution_options(synchronize_session=False)
    )
    if not result.rowcount:
        logger.debug(f"Positional update for gallery {gallery_token} photo {photo_id} matched no row")
        return None

    likes = db.execute(select(GalleryPhoto.likes).where(*target)).scalar()
    return max(0, likes or 0)
