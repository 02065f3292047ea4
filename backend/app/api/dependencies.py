"""
Shared route dependencies: authentication and visitor identity.
"""
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from typing import Optional
from app.db.session import get_db
from app.models.user import User
from app.core.security import decode_access_token
from app.core.rate_limit import get_client_ip
from app.services.like_service import VisitorIdentifier

security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)


def _user_from_token(token: str, db: Session) -> Optional[User]:
    payload = decode_access_token(token)
    if payload is None:
        return None

    user_id = payload.get("user_id")
    if user_id is None:
        return None

    user = db.query(User).filter(User.id == user_id).first()
    if user is None or not user.is_active:
        return None
    return user


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db)
) -> User:
    """Get current authenticated user from JWT token."""
    user = _user_from_token(credentials.credentials, db)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_security),
    db: Session = Depends(get_db)
) -> Optional[User]:
    """Authenticated user if a valid bearer token was sent, else None."""
    if credentials is None:
        return None
    return _user_from_token(credentials.credentials, db)


async def get_current_admin(current_user: User = Depends(get_current_user)) -> User:
    """Verify user is an admin."""
    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required"
        )
    return current_user


def get_visitor_identifier(request: Request) -> VisitorIdentifier:
    """Anonymous visitor fingerprint used to deduplicate likes."""
    return VisitorIdentifier(get_client_ip(request)[:64])


def get_gallery_password(request: Request, password: Optional[str] = None) -> Optional[str]:
    """Gallery password from the `password` query param or X-Gallery-Password header."""
    return password or request.headers.get("X-Gallery-Password")
