"""
Session tokens and viewer resolution

Provides:
- JWT token creation/verification
- FastAPI dependencies for authenticated and optional-viewer routes
- Shared-token guard for the notification cleanup job
"""
import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from talenthub.core.config import settings
from talenthub.core.database import get_db
from talenthub.models.user import User

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass
class AuthenticatedUser:
    id: str


@dataclass
class Viewer:
    """Identity of the caller, used for authorization and course ranking."""
    id: str
    userType: str
    course: Optional[str] = None


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token."""
    to_encode = data.copy()
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=settings.JWT_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> Optional[dict]:
    """Decode and verify JWT token."""
    try:
        return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        return None


def _subject(credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    if credentials is None:
        return None
    payload = decode_token(credentials.credentials)
    if not payload:
        return None
    return payload.get("sub")


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> AuthenticatedUser:
    """
    FastAPI dependency - require a valid session token.

    Only the token is checked here; services look the user up themselves
    so they can decide between 403 and 404.
    """
    user_id = _subject(credentials)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return AuthenticatedUser(id=user_id)


def get_optional_viewer(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> Optional[Viewer]:
    """FastAPI dependency - resolve the viewer if a session is present, else None."""
    user_id = _subject(credentials)
    if not user_id:
        return None

    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        logger.warning("session token refers to unknown user id=%s", user_id)
        return None

    return Viewer(id=user.id, userType=user.userType, course=user.course)


def require_cleanup_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> None:
    """
    FastAPI dependency - gate maintenance endpoints behind CLEANUP_TOKEN.

    User session tokens are not accepted here; the cleanup job presents its
    own shared token.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    expected = settings.CLEANUP_TOKEN
    if not expected or not secrets.compare_digest(credentials.credentials, expected):
        logger.warning("rejected cleanup request with an invalid token")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid cleanup token")
