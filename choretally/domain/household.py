"""Household domain model and its invariant-preserving mutations."""

from pydantic import BaseModel, Field

from choretally.core.errors import ConflictError
from choretally.domain.category import Category
from choretally.domain.task import Task
from choretally.domain.user import User


class Household(BaseModel):
    """A group of users sharing categories and task history."""

    id: int = Field(..., description="Unique household ID")
    share_code: str = Field(..., description="Code other users enter to join")
    users: list[User] = Field(default_factory=list)
    categories: list[Category] = Field(default_factory=list)
    tasks: list[Task] = Field(default_factory=list, description="Append-only task history")
    overall_counts: dict[int, int] = Field(default_factory=dict, description="User ID to weighted total")

    def find_user(self, user_id: int) -> User | None:
        return next((u for u in self.users if u.id == user_id), None)

    def find_category(self, category_id: int) -> Category | None:
        return next((c for c in self.categories if c.id == category_id), None)

    def find_category_by_name(self, name: str) -> Category | None:
        return next((c for c in self.categories if c.matches_name(name)), None)

    def add_member(self, user: User) -> None:
        """Append ``user`` and give them zero counts everywhere."""
        self.users.append(user)
        self.overall_counts[user.id] = 0
        for category in self.categories:
            category.task_counts[user.id] = 0

    def add_category(self, *, category_id: int, name: str, weight: int) -> Category:
        """Create a category with zero counts for every current user.

        Raises:
            ConflictError: If a category with the same name (ignoring case) exists
        """
        if self.find_category_by_name(name) is not None:
            msg = "Category already exists"
            raise ConflictError(msg)

        category = Category(
            id=category_id,
            name=name,
            weight=weight,
            task_counts={user.id: 0 for user in self.users},
        )
        self.categories.append(category)
        return category

    def record_task(self, task: Task, category: Category) -> None:
        """Append ``task`` and apply its counts.

        The category's raw count for the user goes up by one and the user's
        overall count goes up by the category weight.
        """
        if self.tasks and task.id <= self.tasks[-1].id:
            msg = f"Task id {task.id} does not follow {self.tasks[-1].id}"
            raise ValueError(msg)

        category.record_task(task.user_id)
        self.overall_counts[task.user_id] = self.overall_counts.get(task.user_id, 0) + category.weight
        self.tasks.append(task)

    def recent_tasks(self, limit: int) -> list[Task]:
        """Return up to ``limit`` tasks, most recent first."""
        if limit <= 0:
            return []
        return list(reversed(self.tasks[-limit:]))

    def backfill_counts(self) -> int:
        """Give every user an entry in every count map. Returns entries added."""
        added = 0
        for user in self.users:
            if user.id not in self.overall_counts:
                self.overall_counts[user.id] = 0
                added += 1
            for category in self.categories:
                if category.ensure_user(user.id):
                    added += 1
        return added
