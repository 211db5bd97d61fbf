"""Pydantic models for service layer return types.

These models are what callers of the services (the HTTP layer included)
receive; they never expose the document itself.
"""

from datetime import datetime

from pydantic import BaseModel

from choretally.domain.user import User


class HouseholdCreated(BaseModel):
    """Result of creating a household."""

    household_id: int
    user_id: int
    share_code: str


class HouseholdJoined(BaseModel):
    """Result of joining a household."""

    household_id: int
    user_id: int


class HouseholdMembers(BaseModel):
    """Users of a household plus the code to invite more."""

    users: list[User]
    share_code: str


class CategorySummary(BaseModel):
    """A newly created category."""

    id: int
    name: str
    weight: int


class CategoryView(BaseModel):
    """Category with per-user task counts."""

    id: int
    name: str
    weight: int
    task_counts: dict[int, int]


class TaskLogged(BaseModel):
    """Result of logging a task."""

    task_id: int


class HistoryEntry(BaseModel):
    """Task resolved to current user and category names."""

    task_id: int
    user: str
    category: str
    time: datetime
