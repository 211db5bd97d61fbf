"""Domain models and DTOs."""

from choretally.domain.category import Category
from choretally.domain.create_models import CategoryCreate, HouseholdCreate, HouseholdJoin, TaskCreate
from choretally.domain.document import Document, IdKind
from choretally.domain.household import Household
from choretally.domain.repair import repair_document
from choretally.domain.task import Task
from choretally.domain.update_models import UserRename
from choretally.domain.user import User


__all__ = [
    "Category",
    "CategoryCreate",
    "Document",
    "Household",
    "HouseholdCreate",
    "HouseholdJoin",
    "IdKind",
    "Task",
    "TaskCreate",
    "User",
    "UserRename",
    "repair_document",
]
