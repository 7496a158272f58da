# community_events/api/deps.py
import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from community_events.constants.participation import UserRole
from community_events.core.config import settings
from community_events.crud import crud_user
from community_events.db.session import get_db
from community_events.models.user import User
from community_events.schemas.token import TokenPayload

logger = logging.getLogger(__name__)

# Tokens are issued by the identity provider; `tokenUrl` only feeds the
# OpenAPI docs.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="token")
# Optional version that doesn't raise an error when token is missing
oauth2_scheme_optional = OAuth2PasswordBearer(tokenUrl="token", auto_error=False)


def decode_token(token: str) -> TokenPayload:
    payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    return TokenPayload(**payload)


def get_current_user(token: str = Depends(oauth2_scheme)) -> TokenPayload:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        token_data = decode_token(token)
    except (JWTError, ValueError):
        # Catches any error from jose or Pydantic validation
        raise credentials_exception

    return token_data


def get_current_user_optional(
    token: Optional[str] = Depends(oauth2_scheme_optional),
) -> Optional[TokenPayload]:
    if token is None:
        return None
    try:
        return decode_token(token)
    except (JWTError, ValueError):
        # Anonymous access is allowed on these routes; a bad token is
        # treated the same as no token.
        return None


def get_current_profile(
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(get_current_user),
) -> User:
    """Profile row for the caller, provisioned on first use."""
    return crud_user.user.get_or_create(db, id=current_user.sub, email=current_user.email)


def get_current_profile_optional(
    db: Session = Depends(get_db),
    current_user: Optional[TokenPayload] = Depends(get_current_user_optional),
) -> Optional[User]:
    if current_user is None:
        return None
    return crud_user.user.get_or_create(db, id=current_user.sub, email=current_user.email)


def get_current_admin(profile: User = Depends(get_current_profile)) -> User:
    if profile.role != UserRole.ADMIN:
        logger.warning(f"User {profile.id} attempted an admin action")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Permission denied"
        )
    return profile


def is_admin(profile: Optional[User]) -> bool:
    return profile is not None and profile.role == UserRole.ADMIN
