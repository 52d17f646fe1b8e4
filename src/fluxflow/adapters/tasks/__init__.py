"""Task persistence adapters."""

from fluxflow.adapters.tasks.postgres import PostgresTaskRepository

__all__ = ["PostgresTaskRepository"]
