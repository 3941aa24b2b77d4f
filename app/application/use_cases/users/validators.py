"""Common validation helpers for user use cases."""

from app.application.timeline.mentions import MENTION_TERMINATORS


def ensure_valid_email(email: str) -> str:
    """Return a normalized e-mail address or raise ``ValueError``."""

    normalized = email.strip()
    if normalized.count("@") != 1:
        raise ValueError("El correo electrónico no es válido")

    local_part, domain = normalized.split("@", 1)
    if not local_part or "." not in domain:
        raise ValueError("El correo electrónico no es válido")

    return f"{local_part}@{domain.lower()}"


def ensure_valid_display_name(name: str) -> str:
    """Return ``name`` trimmed, rejecting names that cannot be mentioned.

    A display name is referenced as ``@name`` inside comments, so it must be a
    single token without whitespace, ``@`` or trailing punctuation.
    """

    normalized = name.strip()
    if not normalized:
        raise ValueError("El nombre es obligatorio")
    if any(char.isspace() for char in normalized) or "@" in normalized:
        raise ValueError("El nombre no puede contener espacios ni '@'")
    if any(char in MENTION_TERMINATORS for char in normalized):
        raise ValueError("El nombre contiene caracteres no permitidos")
    return normalized
