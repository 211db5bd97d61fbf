"""Category service for creating and listing weighted chore categories."""

import logging

from choretally.core.document_store import get_document_store
from choretally.core.errors import ConflictError
from choretally.core.logging import span
from choretally.domain.create_models import CategoryCreate, parse_input
from choretally.domain.document import IdKind
from choretally.models.service_models import CategorySummary, CategoryView
from choretally.services.household_service import require_household


logger = logging.getLogger(__name__)


async def create_category(*, household_id: int, name: str, weight: int | None = None) -> CategorySummary:
    """Create a category in a household.

    Every current user starts with a zero task count in the new category.

    Args:
        household_id: Household to add the category to
        name: Category name, unique within the household ignoring case
        weight: Multiplier for overall counts; None or 0 means 1

    Raises:
        ValidationError: If an argument is missing or malformed
        NotFoundError: If the household does not exist
        ConflictError: If a category with the same name exists
    """
    data = parse_input(CategoryCreate, household_id=household_id, name=name, weight=weight)

    with span("category_service.create_category", household_id=data.household_id):
        async with get_document_store().transaction() as document:
            household = require_household(document, data.household_id)
            try:
                category = household.add_category(
                    category_id=document.allocate_id(IdKind.CATEGORY),
                    name=data.name,
                    weight=data.weight,
                )
            except ConflictError:
                logger.info(
                    "category_name_conflict",
                    extra={"household_id": household.id, "category_name": data.name},
                )
                raise

        logger.info(
            "category_created",
            extra={"household_id": household.id, "category_id": category.id, "weight": category.weight},
        )
        return CategorySummary(id=category.id, name=category.name, weight=category.weight)


async def get_categories(*, household_id: int) -> list[CategoryView]:
    """List a household's categories with per-user task counts."""
    document = await get_document_store().snapshot()
    household = require_household(document, household_id)
    return [
        CategoryView(id=c.id, name=c.name, weight=c.weight, task_counts=dict(c.task_counts))
        for c in household.categories
    ]
