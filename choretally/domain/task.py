"""Task domain model."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    """Current time in UTC."""
    return datetime.now(UTC)


class Task(BaseModel):
    """A completed chore. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Unique task ID, strictly increasing in append order")
    user_id: int = Field(..., description="ID of the user who did the chore")
    category_id: int = Field(..., description="ID of the category the chore belongs to")
    timestamp: datetime = Field(default_factory=utc_now, description="When the task was logged")
