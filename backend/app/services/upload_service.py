"""
Image upload storage for catalog and gallery photos.
"""
from fastapi import HTTPException, UploadFile, status
from app.core.config import settings
import mimetypes
import os
import uuid

EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
}


def get_file_url(file_path: str) -> str:
    """Convert a stored file path to its public URL."""
    filename = os.path.basename(file_path)
    return f"{settings.SERVER_URL.rstrip('/')}/uploads/{filename}"


def extension_for(content_type: str) -> str:
    """File extension for a validated image content type."""
    return EXTENSIONS.get(content_type) or mimetypes.guess_extension(content_type) or ".img"


async def read_image(file: UploadFile) -> bytes:
    """Validate an uploaded image and return its bytes."""
    if file.content_type not in settings.ALLOWED_IMAGE_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid file type. Allowed types: {', '.join(settings.ALLOWED_IMAGE_TYPES)}"
        )

    content = await file.read()
    if len(content) > settings.MAX_UPLOAD_SIZE:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"File too large. Maximum size: {settings.MAX_UPLOAD_SIZE / 1024 / 1024}MB"
        )
    if not content:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No image file provided"
        )
    return content


def store_image(content: bytes, content_type: str) -> str:
    """Write image bytes under a generated name. Returns the public URL."""
    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    file_path = os.path.join(settings.UPLOAD_DIR, f"{uuid.uuid4()}{extension_for(content_type)}")
    with open(file_path, "wb") as f:
        f.write(content)
    return get_file_url(file_path)


async def save_image(file: UploadFile) -> str:
    """Validate and store an uploaded image. Returns its public URL."""
    content = await read_image(file)
    return store_image(content, file.content_type)
