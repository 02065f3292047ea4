"""
Public catalog models: photos and albums.
"""
from sqlalchemy import Column, String, Text, Integer, Boolean, CheckConstraint
from app.db.base import BaseModel


class Photo(BaseModel):
    """Public portfolio photo with capture metadata and like counter."""
    __tablename__ = "photos"
    __table_args__ = (
        CheckConstraint("likes >= 0", name="ck_photos_likes_non_negative"),
    )

    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True, default="")
    image_url = Column(String(500), nullable=False)
    location = Column(String(200), nullable=True, default="")

    # Capture metadata
    camera_make = Column(String(100), nullable=True)
    camera_model = Column(String(100), nullable=True)
    lens = Column(String(100), nullable=True)
    iso = Column(Integer, nullable=True)
    aperture = Column(String(20), nullable=True)
    shutter_speed = Column(String(20), nullable=True)
    focal_length = Column(String(20), nullable=True)
    date_taken = Column(String(32), nullable=True)  # As reported by EXIF / admin, not normalized

    # Dangling album references are tolerated, so no FK constraint
    album_id = Column(Integer, nullable=True, index=True)
    width = Column(Integer, nullable=True)
    height = Column(Integer, nullable=True)
    is_featured = Column(Boolean, default=False, nullable=False, index=True)
    likes = Column(Integer, default=0, nullable=False)


class Album(BaseModel):
    """Album; a sub-album's slug is prefixed by its parent's slug."""
    __tablename__ = "albums"

    name = Column(String(200), nullable=False)
    slug = Column(String(255), unique=True, nullable=False, index=True)
    description = Column(Text, nullable=True, default="")
    cover_photo_id = Column(Integer, nullable=True)
    parent_id = Column(Integer, nullable=True, index=True)  # None = top-level album
    photo_count = Column(Integer, default=0, nullable=False)  # Advisory only
