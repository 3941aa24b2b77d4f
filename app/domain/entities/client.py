"""Domain entity representing a customer account followed by the team."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Client:
    """A client whose interactions are collected in a timeline."""

    id: int | None
    name: str
    created_at: datetime | None


__all__ = ["Client"]
