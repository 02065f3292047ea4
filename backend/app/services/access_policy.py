"""
Client gallery access policy.

Decides whether a request holding a gallery token, an optional password and
an optional authenticated account may see the gallery. The checks run in a
fixed order: existence, expiry, password protection, account assignment,
password match. Expiry always wins over any password outcome.
"""
from sqlalchemy.orm import Session
from datetime import datetime
from typing import Optional
from app.models.gallery import ClientGallery
from app.core.security import verify_password
from app.core.exceptions import NotFoundError, GalleryExpiredError, GalleryAccessDeniedError
from app.core.utils import utcnow
from app.services import gallery_store
import enum
import logging

logger = logging.getLogger(__name__)


class AccessDecision(str, enum.Enum):
    """Outcome of an access check."""
    ALLOW = "allow"
    DENY_NOT_FOUND = "not_found"
    DENY_EXPIRED = "expired"
    DENY_PASSWORD_REQUIRED = "password_required"
    DENY_PASSWORD_INCORRECT = "password_incorrect"


def evaluate_access(
    gallery: Optional[ClientGallery],
    password: Optional[str] = None,
    account_id: Optional[int] = None,
    now: Optional[datetime] = None
) -> AccessDecision:
    """Pure decision over an already loaded gallery record."""
    if gallery is None:
        return AccessDecision.DENY_NOT_FOUND

    if gallery.is_expired(now or utcnow()):
        return AccessDecision.DENY_EXPIRED

    if not gallery.password_hash:
        return AccessDecision.ALLOW

    if gallery.user_id is not None and account_id is not None and gallery.user_id == account_id:
        return AccessDecision.ALLOW

    if not password:
        return AccessDecision.DENY_PASSWORD_REQUIRED

    if not verify_password(password, gallery.password_hash):
        return AccessDecision.DENY_PASSWORD_INCORRECT

    return AccessDecision.ALLOW


def require_gallery_access(
    token: str,
    db: Session,
    password: Optional[str] = None,
    account_id: Optional[int] = None
) -> ClientGallery:
    """Load the gallery for `token` or raise the error matching the denial."""
    gallery = gallery_store.get_gallery_by_token(token, db)
    decision = evaluate_access(gallery, password, account_id)

    if decision == AccessDecision.ALLOW:
        return gallery
    if decision == AccessDecision.DENY_NOT_FOUND:
        raise NotFoundError("Gallery not found")
    if decision == AccessDecision.DENY_EXPIRED:
        raise GalleryExpiredError()

    logger.info(f"Gallery {gallery.id} access denied: {decision.value}")
    raise GalleryAccessDeniedError(decision.value)


def verify_gallery_password(token: str, password: str, db: Session) -> bool:
    """
    Check a password guess without returning gallery content.

    Missing and expired galleries raise the same errors as a full fetch. An
    unprotected gallery accepts any guess.
    """
    gallery = gallery_store.get_gallery_by_token(token, db)
    if gallery is None:
        raise NotFoundError("Gallery not found")
    if gallery.is_expired():
        raise GalleryExpiredError()
    if not gallery.password_hash:
        return True
    return bool(password) and verify_password(password, gallery.password_hash)
