"""
Pydantic schemas for Photo and Album entities.
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class PhotoBase(BaseModel):
    """Base photo schema."""
    title: str = Field(..., min_length=1)
    description: Optional[str] = ""
    location: Optional[str] = ""
    camera_make: Optional[str] = None
    camera_model: Optional[str] = None
    lens: Optional[str] = None
    iso: Optional[int] = None
    aperture: Optional[str] = None
    shutter_speed: Optional[str] = None
    focal_length: Optional[str] = None
    date_taken: Optional[str] = None
    album_id: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None


class PhotoCreate(PhotoBase):
    """Schema for photo creation from an already hosted image."""
    image_url: str = Field(..., min_length=1)


class PhotoUpdate(BaseModel):
    """Schema for photo update. The like counter is not editable."""
    title: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    location: Optional[str] = None
    camera_make: Optional[str] = None
    camera_model: Optional[str] = None
    lens: Optional[str] = None
    iso: Optional[int] = None
    aperture: Optional[str] = None
    shutter_speed: Optional[str] = None
    focal_length: Optional[str] = None
    date_taken: Optional[str] = None
    album_id: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None
    is_featured: Optional[bool] = None


class PhotoResponse(PhotoBase):
    """Schema for photo response."""
    id: int
    image_url: str
    is_featured: bool
    likes: int
    created_at: datetime

    class Config:
        from_attributes = True


class AlbumBase(BaseModel):
    """Base album schema."""
    name: str = Field(..., min_length=1)
    slug: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = ""
    cover_photo_id: Optional[int] = None


class AlbumCreate(AlbumBase):
    """Schema for album creation. parent_id must reference an existing album."""
    parent_id: Optional[int] = None


class AlbumUpdate(BaseModel):
    """Schema for album update. Albums cannot be re-parented."""
    name: Optional[str] = None
    slug: Optional[str] = None
    description: Optional[str] = None
    cover_photo_id: Optional[int] = None


class AlbumResponse(AlbumBase):
    """Schema for album response."""
    id: int
    parent_id: Optional[int] = None
    photo_count: int

    class Config:
        from_attributes = True
