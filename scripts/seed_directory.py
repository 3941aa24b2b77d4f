"""Utility script to register users and clients in the database."""

from __future__ import annotations

import argparse

from sqlalchemy.exc import SQLAlchemyError

from app.application.use_cases.clients import create_client
from app.application.use_cases.users import create_user
from app.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for the seed."""

    parser = argparse.ArgumentParser(
        description="Register users that can be mentioned and, optionally, a client.",
    )
    parser.add_argument(
        "--user",
        action="append",
        default=[],
        metavar="NOMBRE:EMAIL",
        help="Usuario a registrar, por ejemplo 'alice:alice@example.com'. Repetible.",
    )
    parser.add_argument(
        "--client",
        default=None,
        help="Nombre de un cliente a registrar (opcional)",
    )
    return parser.parse_args()


def _split_user(value: str) -> tuple[str, str]:
    name, separator, email = value.partition(":")
    if not separator:
        raise SystemExit(f"Formato inválido para --user: {value!r} (use NOMBRE:EMAIL)")
    return name, email


def main() -> None:
    """Create the requested users and client."""

    args = parse_args()
    if not args.user and not args.client:
        raise SystemExit("No se indicó ningún usuario ni cliente.")

    initialize_database()

    session = SessionLocal()
    try:
        for value in args.user:
            name, email = _split_user(value)
            user = create_user(session, name=name, email=email)
            print(f"Usuario creado: ID {user.id} @{user.name} <{user.email}>")
        if args.client:
            client = create_client(session, name=args.client)
            print(f"Cliente creado: ID {client.id} {client.name}")
    except ValueError as exc:
        session.rollback()
        raise SystemExit(f"No se pudo completar el registro: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Error al guardar en la base de datos: {exc}") from exc
    finally:
        session.close()


if __name__ == "__main__":
    main()
