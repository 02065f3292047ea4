"""
Like ledger models. A row exists exactly while that visitor likes the subject.
"""
from sqlalchemy import Column, String, Integer, BigInteger, UniqueConstraint
from app.db.base import BaseModel


class LikeRecord(BaseModel):
    """One like of a public photo by one visitor."""
    __tablename__ = "likes"
    __table_args__ = (
        UniqueConstraint("photo_id", "visitor_id", name="uq_likes_photo_visitor"),
    )

    photo_id = Column(Integer, nullable=False, index=True)
    visitor_id = Column(String(64), nullable=False)


class GalleryLikeRecord(BaseModel):
    """One like of a photo inside a specific client gallery by one visitor."""
    __tablename__ = "gallery_likes"
    __table_args__ = (
        UniqueConstraint("gallery_token", "photo_id", "visitor_id", name="uq_gallery_likes_token_photo_visitor"),
    )

    gallery_token = Column(String(64), nullable=False, index=True)
    photo_id = Column(BigInteger, nullable=False)  # Wide enough for legacy millisecond ids
    visitor_id = Column(String(64), nullable=False)
