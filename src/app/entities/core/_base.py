import uuid
from datetime import UTC, datetime

from pydantic import BaseModel
from pydantic import Field as PydanticField
from sqlmodel import Field, SQLModel


def utc_now() -> datetime:
    return datetime.now(UTC)


class Entity(BaseModel):
    """Base entity class with auto-generated UUID identifier."""

    id: str = PydanticField(
        default_factory=lambda: str(uuid.uuid4()),
        description="Unique identifier for the entity",
    )

    created_at: datetime = PydanticField(default_factory=utc_now)
    updated_at: datetime = PydanticField(default_factory=utc_now)


class EntityTable(SQLModel, table=False):
    """Base table with a UUID primary key and audit timestamps."""

    id: str = Field(
        primary_key=True,
        default_factory=lambda: str(uuid.uuid4()),
        description="Unique identifier for the entity",
    )

    created_at: datetime = Field(default_factory=utc_now, nullable=False)
    # Repositories refresh this explicitly on every update
    updated_at: datetime = Field(default_factory=utc_now, nullable=False)
