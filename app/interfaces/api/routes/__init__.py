from fastapi import FastAPI

from .clients import router as clients_router
from .comments import router as comments_router
from .notifications import router as notifications_router
from .timeline import router as timeline_router
from .users import router as users_router


def register_routes(app: FastAPI) -> None:
    """Registra todos los routers de la API en la aplicación FastAPI."""

    app.include_router(users_router)
    app.include_router(clients_router)
    app.include_router(comments_router)
    app.include_router(timeline_router)
    app.include_router(notifications_router)
