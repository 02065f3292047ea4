"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from app.api.routes import (
    auth, users, photos, albums, galleries,
    client, admin_catalog, admin_galleries
)

api_router = APIRouter()

# Include all route modules
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(photos.router)
api_router.include_router(albums.router)
api_router.include_router(galleries.router)
api_router.include_router(client.router)
api_router.include_router(admin_catalog.router)
api_router.include_router(admin_galleries.router)
