"""Use cases for clients and their collaborator events."""

from .manage_clients import create_client, get_client
from .record_client_event import DuplicateEventError, record_client_event

__all__ = ["DuplicateEventError", "create_client", "get_client", "record_client_event"]
