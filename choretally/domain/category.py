"""Category domain model."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from choretally.core.config import constants


class Category(BaseModel):
    """Weighted chore category with per-user raw task counts."""

    model_config = ConfigDict(validate_assignment=True)

    id: int = Field(..., description="Unique category ID, global across households")
    name: str = Field(..., description="Category name, unique per household ignoring case")
    weight: int = Field(
        default=constants.DEFAULT_CATEGORY_WEIGHT,
        description="Multiplier applied to each task in the household's overall counts",
    )
    task_counts: dict[int, int] = Field(default_factory=dict, description="User ID to raw task count")

    @field_validator("weight", mode="before")
    @classmethod
    def coerce_weight(cls, v: Any) -> Any:
        """Weights that are missing, zero or negative read as the default, on load and on assignment."""
        if not v:
            return constants.DEFAULT_CATEGORY_WEIGHT
        if isinstance(v, int | float) and v < 1:
            return constants.DEFAULT_CATEGORY_WEIGHT
        return v

    def matches_name(self, name: str) -> bool:
        """Return True if ``name`` equals this category's name ignoring case."""
        return self.name.casefold() == name.casefold()

    def ensure_user(self, user_id: int) -> bool:
        """Add a zero count for ``user_id`` if missing. Returns True if added."""
        if user_id in self.task_counts:
            return False
        self.task_counts[user_id] = 0
        return True

    def record_task(self, user_id: int) -> None:
        """Count one more task for ``user_id``."""
        self.task_counts[user_id] = self.task_counts.get(user_id, 0) + 1
