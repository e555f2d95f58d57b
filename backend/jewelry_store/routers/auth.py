from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jewelry_store.core.auth import authenticate, get_current_admin
from jewelry_store.core.deps import get_db
from jewelry_store.models.admin_user import AdminUser
from jewelry_store.schemas.admin import AdminLogin, TokenResponse, VerifyTokenResponse

router = APIRouter()


@router.post("/login", response_model=TokenResponse)
def admin_login(body: AdminLogin, db: Session = Depends(get_db)):
    """Admin login; returns a JWT access token valid for ACCESS_TOKEN_EXPIRE_MINUTES."""
    token = authenticate(db, body.username, body.password)
    return TokenResponse(access_token=token, token=token)


@router.get("/verify-token", response_model=VerifyTokenResponse)
def verify_token(admin: AdminUser = Depends(get_current_admin)):
    """Returns 401 if the Bearer token is missing, invalid or expired."""
    return VerifyTokenResponse(username=admin.username)
