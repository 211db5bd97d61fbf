"""Task service: logging completed chores and reading the history."""

import logging

from choretally.core.config import constants
from choretally.core.document_store import get_document_store
from choretally.core.errors import NotFoundError
from choretally.core.logging import span
from choretally.domain.create_models import TaskCreate, parse_input
from choretally.domain.document import IdKind
from choretally.domain.task import Task
from choretally.models.service_models import HistoryEntry, TaskLogged
from choretally.services.household_service import require_household


logger = logging.getLogger(__name__)


async def log_task(*, user_id: int, category_id: int) -> TaskLogged:
    """Record that a user completed a chore in a category.

    The user's raw count in the category goes up by one and their overall
    count goes up by the category weight. Nobody else's counts change.

    Args:
        user_id: ID of the user who did the chore
        category_id: ID of the chore's category

    Returns:
        ID of the appended task

    Raises:
        ValidationError: If either id is missing or not a positive integer
        NotFoundError: If no household holds both the user and the category
    """
    data = parse_input(TaskCreate, user_id=user_id, category_id=category_id)

    with span("task_service.log_task", user_id=data.user_id, category_id=data.category_id):
        async with get_document_store().transaction() as document:
            found = document.find_user_and_category(data.user_id, data.category_id)
            if found is None:
                logger.warning(
                    "log_task_unresolved",
                    extra={"user_id": data.user_id, "category_id": data.category_id},
                )
                msg = "Invalid user or category"
                raise NotFoundError(msg)

            household, category = found
            task = Task(
                id=document.allocate_id(IdKind.TASK),
                user_id=data.user_id,
                category_id=category.id,
            )
            household.record_task(task, category)

        logger.info(
            "task_logged",
            extra={
                "household_id": household.id,
                "task_id": task.id,
                "user_id": task.user_id,
                "category_id": task.category_id,
                "weight": category.weight,
            },
        )
        return TaskLogged(task_id=task.id)


async def get_history(*, household_id: int, limit: int = constants.HISTORY_LIMIT) -> list[HistoryEntry]:
    """Return the household's most recent tasks, newest first.

    User and category names are resolved at read time, so renames show up
    in older entries. A reference that no longer resolves reads as "".

    Raises:
        NotFoundError: If the household does not exist
    """
    document = await get_document_store().snapshot()
    household = require_household(document, household_id)

    entries = []
    for task in household.recent_tasks(limit):
        user = household.find_user(task.user_id)
        category = household.find_category(task.category_id)
        entries.append(
            HistoryEntry(
                task_id=task.id,
                user=user.name if user else "",
                category=category.name if category else "",
                time=task.timestamp,
            )
        )
    return entries
