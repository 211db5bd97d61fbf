from choretally.services import (
    category_service,
    household_service,
    task_service,
    user_service,
)


__all__ = [
    "category_service",
    "household_service",
    "task_service",
    "user_service",
]
