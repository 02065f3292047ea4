"""
Like toggling for public photos and client gallery photos.

A toggle flips the (subject, visitor) pair between liked and not liked and
moves the subject's counter by exactly one. The ledger row is the source of
truth: it is written first, the counter is only adjusted after the ledger
write succeeded, and both commit in one transaction. Any failure rolls the
whole toggle back.

Visitors are identified by an opaque VisitorIdentifier. Today that is the
request's source address, which is coarse: people behind one NAT share a
like, and an address change allows a re-like. The rate limiter bounds abuse.
"""
from dataclasses import dataclass
from typing import NewType
from sqlalchemy import case, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.models.photo import Photo
from app.core.exceptions import AppError, NotFoundError, LikeUpdateError
from app.services import like_ledger, gallery_store
import logging

logger = logging.getLogger(__name__)

VisitorIdentifier = NewType("VisitorIdentifier", str)


@dataclass
class LikeToggleResult:
    """State after a toggle."""
    likes: int
    is_liked: bool
    photo_id: int


def toggle_photo_like(photo_id: int, visitor: VisitorIdentifier, db: Session) -> LikeToggleResult:
    """Toggle a visitor's like on a public catalog photo."""
    if not db.query(Photo.id).filter(Photo.id == photo_id).first():
        raise NotFoundError("Photo not found")

    try:
        existing = like_ledger.find_photo_like(photo_id, visitor, db)
        if existing:
            like_ledger.remove_photo_like(photo_id, visitor, db)
            is_liked, delta = False, -1
        else:
            like_ledger.add_photo_like(photo_id, visitor, db)
            is_liked, delta = True, 1

        updated = _adjust_photo_counter(photo_id, delta, db)
        if not updated:
            # Photo was deleted between the existence check and the update
            raise NotFoundError("Photo not found")

        db.commit()
    except AppError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Like toggle for photo {photo_id} by {visitor} failed: {e}", exc_info=True)
        raise LikeUpdateError("Failed to process like")

    likes = db.query(Photo.likes).filter(Photo.id == photo_id).scalar()
    if likes is None:
        raise NotFoundError("Photo not found")

    logger.info(f"Photo {photo_id} {'liked' if is_liked else 'unliked'} by {visitor}, likes={likes}")
    return LikeToggleResult(likes=max(0, likes), is_liked=is_liked, photo_id=photo_id)


def toggle_gallery_photo_like(
    gallery_token: str,
    photo_id: int,
    visitor: VisitorIdentifier,
    db: Session
) -> LikeToggleResult:
    """
    Toggle a visitor's like on a photo inside a client gallery.

    The counter lives on the gallery's own copy of the photo, so the same
    image in two galleries (or in the public catalog) is counted separately.
    """
    gallery = gallery_store.get_gallery_by_token(gallery_token, db)
    if not gallery:
        raise NotFoundError("Gallery not found")

    photo = gallery_store.find_gallery_photo(gallery, photo_id, db)
    if not photo:
        raise NotFoundError("Photo not found in this gallery")

    # Ledger and counter are keyed by the resolved photo, whichever id form was sent
    resolved_id = photo.id

    try:
        existing = like_ledger.find_gallery_like(gallery_token, resolved_id, visitor, db)
        if existing:
            like_ledger.remove_gallery_like(gallery_token, resolved_id, visitor, db)
            is_liked, delta = False, -1
        else:
            like_ledger.add_gallery_like(gallery_token, resolved_id, visitor, db)
            is_liked, delta = True, 1

        likes = gallery_store.adjust_photo_likes(gallery_token, resolved_id, delta, db)
        if likes is None:
            logger.error(
                f"Positional like update matched nothing for gallery {gallery_token} photo {resolved_id} "
                f"(requested as {photo_id})"
            )
            raise LikeUpdateError()

        db.commit()
    except AppError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Like toggle for gallery {gallery_token} photo {photo_id} failed: {e}", exc_info=True)
        raise LikeUpdateError("Failed to process like")

    logger.info(
        f"Gallery {gallery.id} photo {photo_id} {'liked' if is_liked else 'unliked'} by {visitor}, likes={likes}"
    )
    return LikeToggleResult(likes=likes, is_liked=is_liked, photo_id=photo_id)


def _adjust_photo_counter(photo_id: int, delta: int, db: Session) -> int:
    if delta >= 0:
        new_value = Photo.likes + delta
    else:
        new_value = case((Photo.likes + delta > 0, Photo.likes + delta), else_=0)
    result = db.execute(
        update(Photo)
        .where(Photo.id == photo_id)
        .values(likes=new_value)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount
