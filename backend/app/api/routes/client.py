"""
Routes for logged-in clients to find the galleries assigned to them.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from app.db.session import get_db
from app.models.user import User
from app.schemas.gallery import ClientGallerySummary
from app.services import gallery_store
from app.api.dependencies import get_current_user

router = APIRouter(prefix="/client", tags=["client"])


@router.get("/galleries", response_model=List[ClientGallerySummary])
async def list_my_galleries(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Galleries assigned to the current account, expired ones flagged."""
    galleries = gallery_store.list_galleries(db, user_id=current_user.id)
    return [
        ClientGallerySummary(
            id=g.id,
            client_name=g.client_name,
            description=g.description,
            token=g.token,
            photo_count=len(g.photos),
            created_at=g.created_at,
            expires_at=g.expires_at,
            is_expired=g.is_expired(),
            allow_download=g.allow_download,
            cover_image_url=g.photos[0].image_url if g.photos else None,
        )
        for g in galleries
    ]
