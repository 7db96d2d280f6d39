"""
User model.
Accounts are owned by the identity provider; this table mirrors what the core needs.
"""
from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(unique=True, index=True)
    full_name: Optional[str] = None
    is_admin: bool = Field(default=False)

    created_at: datetime = Field(default_factory=datetime.utcnow)
