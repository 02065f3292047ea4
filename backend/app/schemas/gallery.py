"""
Pydantic schemas for client galleries and likes.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime


class GalleryPhotoCreate(BaseModel):
    """Schema for appending an already hosted image to a gallery."""
    title: str = Field(..., min_length=1)
    description: Optional[str] = ""
    image_url: str = Field(..., min_length=1)


class GalleryPhotoResponse(BaseModel):
    """Schema for a photo inside a gallery."""
    id: int
    title: str
    description: Optional[str] = ""
    image_url: str
    uploaded_at: datetime
    likes: int

    class Config:
        from_attributes = True


class ClientGalleryCreate(BaseModel):
    """Schema for gallery creation."""
    client_name: str = Field(..., min_length=1)
    description: Optional[str] = ""
    password: Optional[str] = None
    user_id: Optional[int] = None
    expires_at: Optional[datetime] = None
    allow_download: bool = False


class ClientGalleryUpdate(BaseModel):
    """Schema for gallery update. An empty password removes protection."""
    client_name: Optional[str] = None
    description: Optional[str] = None
    password: Optional[str] = None
    user_id: Optional[int] = None
    expires_at: Optional[datetime] = None
    allow_download: Optional[bool] = None


class ClientGalleryResponse(BaseModel):
    """Gallery as shown to a viewer who passed the access policy."""
    id: int
    client_name: str
    description: Optional[str] = ""
    photos: List[GalleryPhotoResponse] = []
    created_at: datetime
    expires_at: Optional[datetime] = None
    is_protected: bool
    allow_download: bool

    class Config:
        from_attributes = True


class ClientGalleryAdminResponse(ClientGalleryResponse):
    """Gallery as shown to admins, with the token and assignment."""
    token: str
    user_id: Optional[int] = None


class ClientGallerySummary(BaseModel):
    """Gallery entry in a client's own gallery list."""
    id: int
    client_name: str
    description: Optional[str] = ""
    token: str
    photo_count: int
    created_at: datetime
    expires_at: Optional[datetime] = None
    is_expired: bool
    allow_download: bool
    cover_image_url: Optional[str] = None


class PasswordVerifyRequest(BaseModel):
    password: str = ""


class PasswordVerifyResponse(BaseModel):
    valid: bool


class LikeToggleResponse(BaseModel):
    """Result of a like toggle; keys are camelCase on the wire."""
    likes: int = Field(..., ge=0)
    is_liked: bool = Field(..., alias="isLiked")
    photo_id: int = Field(..., alias="photoId")

    class Config:
        populate_by_name = True


class ReconcileResponse(BaseModel):
    repaired: int
