"""The persisted document: every household plus the global id sequences."""

from enum import StrEnum

from pydantic import BaseModel, Field

from choretally.domain.category import Category
from choretally.domain.household import Household
from choretally.domain.user import User


class IdKind(StrEnum):
    """Entity kinds with their own id sequence."""

    HOUSEHOLD = "household"
    USER = "user"
    CATEGORY = "category"
    TASK = "task"


class Document(BaseModel):
    """Entire application state, stored as one encrypted snapshot.

    Each ``next_*_id`` field holds the id the next entity of that kind gets.
    Sequences are global across households and only ever move forward.
    """

    households: list[Household] = Field(default_factory=list)
    next_household_id: int = Field(default=1, ge=1)
    next_user_id: int = Field(default=1, ge=1)
    next_category_id: int = Field(default=1, ge=1)
    next_task_id: int = Field(default=1, ge=1)

    @classmethod
    def empty(cls) -> "Document":
        return cls()

    def allocate_id(self, kind: IdKind) -> int:
        """Take the next id of ``kind`` and advance its sequence."""
        field = f"next_{kind.value}_id"
        value = getattr(self, field)
        setattr(self, field, value + 1)
        return value

    def raise_sequence(self, kind: IdKind, floor: int) -> bool:
        """Move the sequence of ``kind`` up to at least ``floor``. Returns True if moved."""
        field = f"next_{kind.value}_id"
        if getattr(self, field) >= floor:
            return False
        setattr(self, field, floor)
        return True

    def find_household(self, household_id: int) -> Household | None:
        return next((h for h in self.households if h.id == household_id), None)

    def find_household_by_code(self, code: str) -> Household | None:
        """Look a household up by share code, ignoring case."""
        wanted = code.upper()
        return next((h for h in self.households if h.share_code.upper() == wanted), None)

    def find_user(self, user_id: int) -> tuple[Household, User] | None:
        for household in self.households:
            user = household.find_user(user_id)
            if user is not None:
                return household, user
        return None

    def find_user_and_category(self, user_id: int, category_id: int) -> tuple[Household, Category] | None:
        """Find the household holding both the user and the category."""
        for household in self.households:
            if household.find_user(user_id) is None:
                continue
            category = household.find_category(category_id)
            if category is not None:
                return household, category
        return None

    def share_codes(self) -> set[str]:
        return {h.share_code.upper() for h in self.households}
