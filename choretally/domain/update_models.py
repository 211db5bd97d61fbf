"""Update models for document mutations."""

from pydantic import BaseModel, PositiveInt, field_validator

from choretally.domain.create_models import validate_display_name


class UserRename(BaseModel):
    """Update payload for a user's display name."""

    user_id: PositiveInt
    name: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return validate_display_name(v)
