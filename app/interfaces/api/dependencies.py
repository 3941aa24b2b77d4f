"""FastAPI dependency utilities."""

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from app.config import Settings, get_settings
from app.domain.entities import User
from app.infrastructure.database import get_db
from app.infrastructure.repositories import UserRepository


def resolve_acting_user(user_id: int | None, db: Session) -> User:
    """Return the active user identified by ``user_id``.

    Authentication is handled upstream; the API only trusts the identifier it
    is given and checks that it refers to a reachable user.
    """

    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Usuario no identificado",
        )

    user = UserRepository(db).get(user_id)
    if user is None or user.deleted:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Usuario no encontrado",
        )
    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Usuario inactivo",
        )
    return user


def get_acting_user(
    x_user_id: int | None = Header(default=None),
    db: Session = Depends(get_db),
) -> User:
    """Return the user on whose behalf the request is made (``X-User-Id``)."""

    return resolve_acting_user(x_user_id, db)


def get_app_settings() -> Settings:
    return get_settings()
