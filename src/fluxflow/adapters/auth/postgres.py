"""PostgreSQL implementations of the profile repository and token denylist."""

from datetime import datetime
from typing import Any
from uuid import UUID

from fluxflow.adapters.db.app_db import AppDatabase
from fluxflow.core.auth.types import Identity, Role


class PostgresProfileRepository:
    """PostgreSQL implementation of profile repository."""

    def __init__(self, db: AppDatabase) -> None:
        """Initialize with database connection.

        Args:
            db: Application database instance.
        """
        self._db = db

    def _row_to_identity(self, row: dict[str, Any]) -> Identity:
        """Convert a profiles row to an Identity."""
        return Identity(
            id=row["id"],
            email=row["email"],
            full_name=row["full_name"],
            role=Role(row["role"]),
            avatar_url=row.get("avatar_url"),
            client_id=row.get("client_id"),
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
            last_sign_in_at=row.get("last_sign_in_at"),
        )

    async def get_profile(self, user_id: UUID) -> Identity | None:
        """Get the identity for a user id."""
        row = await self._db.fetch_one(
            "SELECT * FROM profiles WHERE id = $1",
            user_id,
        )
        return self._row_to_identity(row) if row else None

    async def get_profile_by_email(self, email: str) -> Identity | None:
        """Get the identity for an email address, ignoring case."""
        row = await self._db.fetch_one(
            "SELECT * FROM profiles WHERE lower(email) = lower($1)",
            email.strip(),
        )
        return self._row_to_identity(row) if row else None


class PostgresTokenDenylist:
    """Revoked token ids, kept until the token would have expired."""

    def __init__(self, db: AppDatabase) -> None:
        """Initialize with database connection.

        Args:
            db: Application database instance.
        """
        self._db = db

    async def revoke(self, jti: str, expires_at: datetime) -> None:
        """Mark a token id as revoked."""
        await self._db.execute(
            """
            INSERT INTO revoked_tokens (jti, expires_at)
            VALUES ($1, $2)
            ON CONFLICT (jti) DO NOTHING
            """,
            jti,
            expires_at,
        )

    async def is_revoked(self, jti: str) -> bool:
        """Whether a token id has been revoked and not yet expired."""
        revoked = await self._db.fetch_value(
            """
            SELECT EXISTS(
                SELECT 1 FROM revoked_tokens
                WHERE jti = $1 AND expires_at > NOW()
            )
            """,
            jti,
        )
        return bool(revoked)
