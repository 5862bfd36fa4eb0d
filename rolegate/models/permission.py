from datetime import datetime
from typing import Optional

from sqlalchemy import Column, ForeignKey, Integer
from sqlmodel import Field, SQLModel

from .base import timestamp_field


class Permission(SQLModel, table=True):
    __tablename__ = "permissions"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    slug: str = Field(unique=True, index=True)  # lowercase, e.g. 'edit.article'
    description: Optional[str] = Field(default=None)

    created_at: datetime = timestamp_field()
    updated_at: datetime = timestamp_field()


class PermissionUser(SQLModel, table=True):
    """Direct permission edge. `permission_on` is the scope; NULL means global."""

    __tablename__ = "permission_user"

    id: Optional[int] = Field(default=None, primary_key=True)
    permission_id: int = Field(
        sa_column=Column(Integer, ForeignKey("permissions.id", ondelete="CASCADE"), nullable=False, index=True)
    )
    user_id: int = Field(sa_column=Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True))
    permission_on: Optional[str] = Field(default=None, index=True)

    created_at: datetime = timestamp_field()
