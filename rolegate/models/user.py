from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from .base import timestamp_field


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(unique=True, index=True)
    email: Optional[str] = Field(default=None)

    created_at: datetime = timestamp_field()
