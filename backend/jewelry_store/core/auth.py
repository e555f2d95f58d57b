"""Access gate: admin login and bearer-token authorization for mutations."""
import logging
import uuid
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session, sessionmaker

from jewelry_store.core.config import settings
from jewelry_store.core.deps import get_db
from jewelry_store.core.errors import AuthenticationError
from jewelry_store.core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)
from jewelry_store.models.admin_user import AdminUser

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)

ADMIN_ROLE = "admin"


def authenticate(db: Session, username: str, password: str) -> str:
    """Check admin credentials and return a signed access token.

    Unknown user and wrong password fail identically.
    """
    admin = db.query(AdminUser).filter(AdminUser.username == username).first()
    if not admin or not verify_password(password or "", admin.hashed_password):
        logger.info("Login failed for username %r", username)
        raise AuthenticationError("Invalid username or password")
    logger.info("Login successful for %s", admin.username)
    return create_access_token(
        subject=admin.id,
        extra_claims={"role": ADMIN_ROLE, "username": admin.username},
    )


def authorize(db: Session, token: Optional[str]) -> AdminUser:
    """Resolve a bearer token to its admin; raise AuthenticationError otherwise."""
    if not token:
        raise AuthenticationError("Not authenticated")
    payload = decode_access_token(token)
    if not payload or payload.get("role") != ADMIN_ROLE or "sub" not in payload:
        raise AuthenticationError("Invalid or expired token")
    admin = db.query(AdminUser).filter(AdminUser.id == payload["sub"]).first()
    if not admin:
        raise AuthenticationError("Admin not found")
    return admin


def get_current_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> AdminUser:
    token = credentials.credentials if credentials else None
    return authorize(db, token)


def seed_admin_user(session_factory: sessionmaker) -> None:
    """Create the configured admin if no admin users exist."""
    db = session_factory()
    try:
        if db.query(AdminUser).first() is not None:
            return
        hashed = settings.ADMIN_PASSWORD_HASH or get_password_hash(settings.ADMIN_PASSWORD)
        db.add(
            AdminUser(
                id=str(uuid.uuid4()),
                username=settings.ADMIN_USERNAME,
                hashed_password=hashed,
            )
        )
        db.commit()
        logger.info("Seeded admin user %s", settings.ADMIN_USERNAME)
    finally:
        db.close()
