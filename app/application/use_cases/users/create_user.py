"""Use case for creating users."""

from sqlalchemy.orm import Session

from app.domain.entities import User
from app.infrastructure.repositories import UserRepository
from app.utils import now_in_app_timezone

from .validators import ensure_valid_display_name, ensure_valid_email


def create_user(session: Session, *, name: str, email: str) -> User:
    """Create a new user ensuring unique email addresses."""

    repository = UserRepository(session)
    normalized_email = ensure_valid_email(email)
    display_name = ensure_valid_display_name(name)

    if repository.get_by_email(normalized_email):
        msg = "El correo electrónico ya está registrado"
        raise ValueError(msg)

    user = User(
        id=None,
        name=display_name,
        email=normalized_email,
        is_active=True,
        deleted=False,
        created_at=now_in_app_timezone(),
    )
    return repository.create(user)
