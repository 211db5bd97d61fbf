"""User domain model."""

from pydantic import BaseModel, Field


class User(BaseModel):
    """Household member."""

    id: int = Field(..., description="Unique user ID, global across households")
    name: str = Field(..., description="Display name of the user")
