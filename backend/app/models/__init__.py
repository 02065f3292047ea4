"""Models package - Import all models for SQLAlchemy registration."""
from app.models.user import User, UserRole
from app.models.photo import Photo, Album
from app.models.gallery import ClientGallery, GalleryPhoto
from app.models.like import LikeRecord, GalleryLikeRecord

__all__ = [
    "User",
    "UserRole",
    "Photo",
    "Album",
    "ClientGallery",
    "GalleryPhoto",
    "LikeRecord",
    "GalleryLikeRecord",
]
