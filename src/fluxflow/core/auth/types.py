"""Auth domain types."""

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, model_validator


class RoleFamily(str, Enum):
    """Grouping of roles into the agency side and the client side."""

    ADMIN = "admin"
    CLIENT = "client"


class Role(str, Enum):
    """Roles an identity can hold.

    ``admin`` is the full agency administrator; ``admin:member`` is an
    agency team member. ``client`` owns a client account and
    ``client:member`` belongs to one.
    """

    ADMIN = "admin"
    ADMIN_MEMBER = "admin:member"
    CLIENT = "client"
    CLIENT_MEMBER = "client:member"

    @property
    def family(self) -> RoleFamily:
        """Get the role family."""
        if self in (Role.ADMIN, Role.ADMIN_MEMBER):
            return RoleFamily.ADMIN
        return RoleFamily.CLIENT

    @property
    def is_admin_family(self) -> bool:
        """Whether the role belongs to the agency side."""
        return self.family is RoleFamily.ADMIN

    @property
    def is_client_family(self) -> bool:
        """Whether the role belongs to the client side."""
        return self.family is RoleFamily.CLIENT


class Identity(BaseModel):
    """The signed-in actor for the current session.

    A client-family identity always carries the client it belongs to.
    """

    id: UUID
    email: EmailStr
    full_name: str = Field(..., min_length=1)
    role: Role
    avatar_url: str | None = None
    client_id: UUID | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    last_sign_in_at: datetime | None = None

    @model_validator(mode="after")
    def _client_roles_need_client(self) -> "Identity":
        if self.role.is_client_family and self.client_id is None:
            raise ValueError(f"role '{self.role.value}' requires a client_id")
        return self

    @property
    def display_initial(self) -> str:
        """First letter of the display name, for avatar fallbacks."""
        return self.full_name[0].upper()


class TokenPayload(BaseModel):
    """JWT token payload claims."""

    sub: str  # user_id
    role: str
    client_id: str | None = None
    jti: str
    type: str = "access"
    exp: int  # expiration timestamp
    iat: int  # issued at timestamp

    @property
    def is_access(self) -> bool:
        """Whether this token may be presented as a bearer credential."""
        return self.type == "access"

    @property
    def is_refresh(self) -> bool:
        """Whether this is a refresh token."""
        return self.type == "refresh"

    @property
    def is_magic_link(self) -> bool:
        """Whether this is an emailed sign-in token."""
        return self.type == "magic_link"
