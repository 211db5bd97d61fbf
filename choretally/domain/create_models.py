"""Pydantic models validating input to the creating operations."""

from typing import Any, TypeVar

from pydantic import BaseModel, Field, PositiveInt, field_validator
from pydantic import ValidationError as PydanticValidationError

from choretally.core.config import constants
from choretally.core.errors import ValidationError


M = TypeVar("M", bound=BaseModel)


def validate_display_name(v: str) -> str:
    """Strip and check a user, household or category name."""
    v = v.strip()

    if not v:
        raise ValueError("Name cannot be empty")

    if len(v) > constants.MAX_NAME_LENGTH:
        raise ValueError(f"Name too long (max {constants.MAX_NAME_LENGTH} characters)")

    return v


def parse_input(model: type[M], **data: Any) -> M:
    """Validate ``data`` against ``model``.

    Raises:
        ValidationError: With the first failing field and its message
    """
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or model.__name__
        msg = f"{field}: {first['msg']}"
        raise ValidationError(msg) from e


class HouseholdCreate(BaseModel):
    """Input for creating a household together with its first user."""

    name: str = Field(..., description="Display name of the creating user")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return validate_display_name(v)


class HouseholdJoin(BaseModel):
    """Input for joining a household by share code."""

    code: str = Field(..., description="Share code, any case")
    name: str = Field(..., description="Display name of the joining user")

    @field_validator("code")
    @classmethod
    def validate_code(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Code cannot be empty")
        return v

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return validate_display_name(v)


class CategoryCreate(BaseModel):
    """Input for creating a category."""

    household_id: PositiveInt
    name: str
    weight: int | None = Field(default=None, description="Task multiplier; missing or zero means 1")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return validate_display_name(v)

    @field_validator("weight")
    @classmethod
    def validate_weight(cls, v: int | None) -> int:
        if not v:
            return constants.DEFAULT_CATEGORY_WEIGHT
        if v < 0:
            raise ValueError("Weight must be a positive integer")
        return v


class TaskCreate(BaseModel):
    """Input for logging a task."""

    user_id: PositiveInt
    category_id: PositiveInt
