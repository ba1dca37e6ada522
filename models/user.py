"""
User schemas.

Only what the import and dashboard need: who is acting and which
praças (territories) they cover.
"""

from enum import Enum
from typing import Optional

from pydantic import Field, field_validator

from models.base import BaseSchema


class UserRole(str, Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    EXEC = "exec"
    VIEWER = "viewer"


class User(BaseSchema):
    """Commercial team member."""

    id: str = Field(..., min_length=1, description="User identifier")
    nome: str = Field(..., min_length=1)
    email: str = Field(...)
    telefone: Optional[str] = None
    cargo: str = Field("")
    role: UserRole = Field(UserRole.EXEC)
    praca_ids: list[str] = Field(default_factory=list, description="Praças served")
    praca_padrao_id: str = Field(..., min_length=1, description="Default praça")
    active: bool = True

    @field_validator("praca_ids", mode="before")
    @classmethod
    def split_praca_ids(cls, v):
        """Legacy rows store praças as a ';' separated string."""
        if v is None:
            return []
        if isinstance(v, str):
            return [p.strip() for p in v.split(";") if p.strip()]
        return v

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
