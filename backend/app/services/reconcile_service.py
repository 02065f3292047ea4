"""
Counter reconciliation: recompute like counters from the ledger.

A toggle whose process died between ledger write and counter write leaves a
counter that disagrees with the ledger. Running this repairs every counter.
"""
from sqlalchemy import func
from sqlalchemy.orm import Session
from app.models.photo import Photo
from app.models.gallery import ClientGallery, GalleryPhoto
from app.models.like import LikeRecord, GalleryLikeRecord
import logging

logger = logging.getLogger(__name__)


def reconcile_photo_likes(db: Session) -> int:
    """Repair public photo counters. Returns the number of photos changed."""
    counts = dict(
        db.query(LikeRecord.photo_id, func.count(LikeRecord.id))
        .group_by(LikeRecord.photo_id)
        .all()
    )

    repaired = 0
    for photo in db.query(Photo).all():
        expected = counts.get(photo.id, 0)
        if photo.likes != expected:
            logger.info(f"Photo {photo.id} likes {photo.likes} -> {expected}")
            photo.likes = expected
            repaired += 1
    return repaired


def reconcile_gallery_likes(db: Session) -> int:
    """Repair gallery photo counters. Returns the number of photos changed."""
    counts = {
        (token, photo_id): count
        for token, photo_id, count in db.query(
            GalleryLikeRecord.gallery_token,
            GalleryLikeRecord.photo_id,
            func.count(GalleryLikeRecord.id)
        ).group_by(GalleryLikeRecord.gallery_token, GalleryLikeRecord.photo_id).all()
    }

    repaired = 0
    rows = db.query(GalleryPhoto, ClientGallery.token).join(
        ClientGallery, GalleryPhoto.gallery_id == ClientGallery.id
    ).all()
    for photo, token in rows:
        # Ledger rows always carry the canonical id, never legacy_id
        expected = counts.get((token, photo.id), 0)
        if photo.likes != expected:
            logger.info(f"Gallery {token} photo {photo.id} likes {photo.likes} -> {expected}")
            photo.likes = expected
            repaired += 1
    return repaired


def reconcile_like_counters(db: Session) -> int:
    """Repair all like counters in one transaction."""
    try:
        repaired = reconcile_photo_likes(db) + reconcile_gallery_likes(db)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info(f"Like counter reconciliation repaired {repaired} counter(s)")
    return repaired
