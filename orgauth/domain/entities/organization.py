"""
Organization Entity

Named tenant container.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from orgauth.domain.base import utcnow


class Organization(SQLModel, table=True):
    """Organization entity - named tenant container users are members of"""

    __tablename__ = "organizations"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    slug: str = Field(unique=True, index=True, max_length=255)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
