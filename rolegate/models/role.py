from datetime import datetime
from typing import Optional

from sqlalchemy import Column, ForeignKey, Integer
from sqlmodel import Field, SQLModel

from .base import timestamp_field


class Role(SQLModel, table=True):
    __tablename__ = "roles"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    slug: str = Field(unique=True, index=True)  # lowercase, e.g. 'editor.in.chief'
    description: Optional[str] = Field(default=None)
    special: Optional[str] = Field(default=None)  # 'all-access', 'no-access', 'level-access'

    created_at: datetime = timestamp_field()
    updated_at: datetime = timestamp_field()


class PermissionRole(SQLModel, table=True):
    """Permissions granted unconditionally by a role."""

    __tablename__ = "permission_role"

    id: Optional[int] = Field(default=None, primary_key=True)
    permission_id: int = Field(
        sa_column=Column(Integer, ForeignKey("permissions.id", ondelete="CASCADE"), nullable=False, index=True)
    )
    role_id: int = Field(sa_column=Column(Integer, ForeignKey("roles.id", ondelete="CASCADE"), nullable=False, index=True))


class RoleUser(SQLModel, table=True):
    """Role assignment edge. `role_on` is the scope; NULL means global."""

    __tablename__ = "role_user"

    id: Optional[int] = Field(default=None, primary_key=True)
    role_id: int = Field(sa_column=Column(Integer, ForeignKey("roles.id", ondelete="CASCADE"), nullable=False, index=True))
    user_id: int = Field(sa_column=Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True))
    role_on: Optional[str] = Field(default=None, index=True)
    role_type: Optional[str] = Field(default=None)  # free-form tag, not used by decisions

    created_at: datetime = timestamp_field()
