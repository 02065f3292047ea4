"""
Client gallery models for delivering photos to individual customers.
"""
from sqlalchemy import Column, String, Text, Integer, Boolean, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from app.db.base import BaseModel
from app.core.utils import utcnow


class ClientGallery(BaseModel):
    """
    Gallery shared with a client through an unguessable token.

    expires_at None means the gallery never expires; password_hash None means
    anyone holding the token may view it; user_id assigns it to an account
    that bypasses the password.
    """
    __tablename__ = "client_galleries"

    client_name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True, default="")
    token = Column(String(64), unique=True, nullable=False, index=True)
    expires_at = Column(DateTime, nullable=True)
    password_hash = Column(String(255), nullable=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    allow_download = Column(Boolean, default=False, nullable=False)

    # Relationships
    user = relationship("User", back_populates="galleries")
    photos = relationship(
        "GalleryPhoto",
        back_populates="gallery",
        cascade="all, delete-orphan",
        order_by="GalleryPhoto.id",
    )

    @property
    def is_protected(self) -> bool:
        return bool(self.password_hash)

    def is_expired(self, now=None) -> bool:
        if self.expires_at is None:
            return False
        return self.expires_at < (now or utcnow())


class GalleryPhoto(BaseModel):
    """
    Photo embedded in a client gallery with its own like counter.

    `id` is the canonical photo id. `legacy_id` keeps string-encoded ids from
    data imported before ids were normalized; lookups fall back to it.
    """
    __tablename__ = "gallery_photos"
    __table_args__ = (
        CheckConstraint("likes >= 0", name="ck_gallery_photos_likes_non_negative"),
    )

    gallery_id = Column(Integer, ForeignKey("client_galleries.id", ondelete="CASCADE"), nullable=False, index=True)
    legacy_id = Column(String(64), nullable=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True, default="")
    image_url = Column(String(500), nullable=False)
    uploaded_at = Column(DateTime, default=utcnow, nullable=False)
    likes = Column(Integer, default=0, nullable=False)

    # Relationships
    gallery = relationship("ClientGallery", back_populates="photos")
