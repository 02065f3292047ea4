"""
Like ledger: which visitor currently likes which subject.

The unique constraints on `likes` and `gallery_likes` are what prevent a
double like under concurrent requests. Every write here only flushes; the
caller owns the transaction so the counter update commits together with it.
"""
from typing import Optional
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from app.models.like import LikeRecord, GalleryLikeRecord
from app.core.exceptions import LikeConflictError
import logging

logger = logging.getLogger(__name__)


def find_photo_like(photo_id: int, visitor_id: str, db: Session) -> Optional[LikeRecord]:
    return db.query(LikeRecord).filter(
        LikeRecord.photo_id == photo_id,
        LikeRecord.visitor_id == visitor_id
    ).first()


def add_photo_like(photo_id: int, visitor_id: str, db: Session) -> LikeRecord:
    """Insert a like record. Raises LikeConflictError if the pair already exists."""
    record = LikeRecord(photo_id=photo_id, visitor_id=visitor_id)
    db.add(record)
    _flush_or_conflict(db, f"photo {photo_id}", visitor_id)
    return record


def remove_photo_like(photo_id: int, visitor_id: str, db: Session) -> None:
    """Delete a like record. Raises LikeConflictError if it was already gone."""
    deleted = db.query(LikeRecord).filter(
        LikeRecord.photo_id == photo_id,
        LikeRecord.visitor_id == visitor_id
    ).delete(synchronize_session=False)
    if deleted != 1:
        logger.warning(f"Unlike of photo {photo_id} by {visitor_id} found no record")
        raise LikeConflictError()


def count_photo_likes(photo_id: int, db: Session) -> int:
    return db.query(func.count(LikeRecord.id)).filter(LikeRecord.photo_id == photo_id).scalar() or 0


def find_gallery_like(
    gallery_token: str,
    photo_id: int,
    visitor_id: str,
    db: Session
) -> Optional[GalleryLikeRecord]:
    return db.query(GalleryLikeRecord).filter(
        GalleryLikeRecord.gallery_token == gallery_token,
        GalleryLikeRecord.photo_id == photo_id,
        GalleryLikeRecord.visitor_id == visitor_id
    ).first()


def add_gallery_like(gallery_token: str, photo_id: int, visitor_id: str, db: Session) -> GalleryLikeRecord:
    record = GalleryLikeRecord(gallery_token=gallery_token, photo_id=photo_id, visitor_id=visitor_id)
    db.add(record)
    _flush_or_conflict(db, f"gallery {gallery_token} photo {photo_id}", visitor_id)
    return record


def remove_gallery_like(gallery_token: str, photo_id: int, visitor_id: str, db: Session) -> None:
    deleted = db.query(GalleryLikeRecord).filter(
        GalleryLikeRecord.gallery_token == gallery_token,
        GalleryLikeRecord.photo_id == photo_id,
        GalleryLikeRecord.visitor_id == visitor_id
    ).delete(synchronize_session=False)
    if deleted != 1:
        logger.warning(f"Unlike of gallery {gallery_token} photo {photo_id} by {visitor_id} found no record")
        raise LikeConflictError()


def count_gallery_likes(gallery_token: str, photo_id: int, db: Session) -> int:
    return db.query(func.count(GalleryLikeRecord.id)).filter(
        GalleryLikeRecord.gallery_token == gallery_token,
        GalleryLikeRecord.photo_id == photo_id
    ).scalar() or 0


def _flush_or_conflict(db: Session, subject: str, visitor_id: str) -> None:
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        logger.warning(f"Concurrent like of {subject} by {visitor_id} rejected by ledger constraint")
        raise LikeConflictError()
