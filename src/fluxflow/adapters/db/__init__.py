"""Database adapters."""

from fluxflow.adapters.db.app_db import AppDatabase
from fluxflow.adapters.db.memory import (
    InMemoryProfileRepository,
    InMemoryTaskRepository,
    InMemoryTokenDenylist,
)

__all__ = [
    "AppDatabase",
    "InMemoryProfileRepository",
    "InMemoryTaskRepository",
    "InMemoryTokenDenylist",
]
