"""
Cookie auth: the access_token cookie carries a JWT whose subject is the
learner's email. Route handlers depend on get_current_user.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Cookie, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from api.config import get_db, settings
from api.models.models import User
from api.schemas.auth_schemas import AuthTokenPayload
from api.utils.jwt import create_access_token, get_password_hash, verify_password, verify_token
from api.utils.logger import configure_logging, set_learner_id

logger = configure_logging()

AUTH_COOKIE = "access_token"
_COOKIE_FLAGS = {"httponly": True, "secure": False, "samesite": "lax"}


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


async def get_current_user(access_token: Optional[str] = Cookie(None), db: Session = Depends(get_db)) -> User:
    """Active learner behind the auth cookie: 401 without a valid one, 403 when suspended."""
    if not access_token:
        raise _unauthorized("Not authorized, no token")
    payload = verify_token(access_token)
    if not payload.sub:
        raise _unauthorized("Invalid token")

    user = get_user_by_email(payload.sub, db)
    if user is None:
        raise _unauthorized("User not found")
    if user.account_status != "active":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Your account has been suspended. Please contact support.",
        )
    set_learner_id(user.id)
    return user


def set_auth_cookie(response: Response, user: User) -> None:
    ttl = timedelta(minutes=settings.access_token_expire_minutes)
    token = create_access_token(AuthTokenPayload(sub=user.email, exp=datetime.now(timezone.utc) + ttl))
    response.set_cookie(key=AUTH_COOKIE, value=token, max_age=int(ttl.total_seconds()), **_COOKIE_FLAGS)


def clear_auth_cookie(response: Response) -> None:
    response.delete_cookie(key=AUTH_COOKIE, **_COOKIE_FLAGS)


def get_user_by_email(email: str, db: Session) -> Optional[User]:
    return db.query(User).filter(User.email == email.strip().lower()).first()


def create_user(name: str, email: str, password: str, db: Session, phone: Optional[str] = None) -> User:
    user = User(
        name=name,
        email=email.strip().lower(),
        hashed_password=get_password_hash(password),
        phone=phone,
        preferences={},
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("registered learner id=%s", user.id)
    return user


def authenticate_user(email: str, password: str, db: Session) -> Optional[User]:
    """The learner when the password matches, else None. Account status is checked by the caller."""
    user = get_user_by_email(email, db)
    if user is None or not verify_password(password, user.hashed_password):
        return None
    return user
