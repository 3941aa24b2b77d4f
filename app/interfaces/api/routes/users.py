"""Rutas para administrar el directorio de usuarios."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.application.use_cases.users import (
    create_user as create_user_uc,
    get_user as get_user_uc,
    list_users as list_users_uc,
)
from app.domain.entities import User
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import get_acting_user
from app.interfaces.api.schemas import UserCreate, UserRead

router = APIRouter(prefix="/users", tags=["users"])


def _to_read_model(user: User) -> UserRead:
    return UserRead.model_validate(user)


@router.post("/", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register_user(user_in: UserCreate, db: Session = Depends(get_db)):
    """Registra un usuario que podrá ser mencionado en los comentarios."""

    try:
        user = create_user_uc(db, name=user_in.name, email=user_in.email)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _to_read_model(user)


@router.get("/me", response_model=UserRead)
def read_current_user(current_user: User = Depends(get_acting_user)):
    """Devuelve la información del usuario que realiza la petición."""

    return _to_read_model(current_user)


@router.get("/", response_model=list[UserRead])
def list_users(skip: int = 0, limit: int = 100, db: Session = Depends(get_db)):
    """Devuelve una lista de usuarios registrados."""

    return [_to_read_model(user) for user in list_users_uc(db, skip=skip, limit=limit)]


@router.get("/{user_id}", response_model=UserRead)
def read_user(user_id: int, db: Session = Depends(get_db)):
    """Obtiene al usuario identificado por ``user_id``."""

    try:
        user = get_user_uc(db, user_id, include_inactive=True)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return _to_read_model(user)
