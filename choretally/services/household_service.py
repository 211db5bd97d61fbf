"""Household service: creation, joining by share code, and household projections."""

import logging

from choretally.core.document_store import get_document_store
from choretally.core.errors import NotFoundError
from choretally.core.logging import span
from choretally.core.share_code import generate_unique_share_code
from choretally.domain.create_models import HouseholdCreate, HouseholdJoin, parse_input
from choretally.domain.document import Document, IdKind
from choretally.domain.household import Household
from choretally.domain.user import User
from choretally.models.service_models import HouseholdCreated, HouseholdJoined, HouseholdMembers


logger = logging.getLogger(__name__)


def require_household(document: Document, household_id: int) -> Household:
    """Return the household or raise NotFoundError."""
    household = document.find_household(household_id)
    if household is None:
        msg = "Household not found"
        raise NotFoundError(msg)
    return household


async def create_household(*, name: str) -> HouseholdCreated:
    """Create a household with its creator as the first user.

    Args:
        name: Display name of the creating user

    Returns:
        New household id, creator user id and share code

    Raises:
        ValidationError: If name is missing or empty
        ConflictError: If no unused share code could be generated
    """
    data = parse_input(HouseholdCreate, name=name)

    with span("household_service.create_household"):
        async with get_document_store().transaction() as document:
            share_code = generate_unique_share_code(document.share_codes())
            household_id = document.allocate_id(IdKind.HOUSEHOLD)
            user_id = document.allocate_id(IdKind.USER)

            household = Household(id=household_id, share_code=share_code)
            household.add_member(User(id=user_id, name=data.name))
            document.households.append(household)

        logger.info("household_created", extra={"household_id": household_id, "user_id": user_id})
        return HouseholdCreated(household_id=household_id, user_id=user_id, share_code=share_code)


async def join_household(*, code: str, name: str) -> HouseholdJoined:
    """Add a new user to the household with the given share code.

    The code is matched ignoring case. The new user starts at zero in the
    household's overall counts and in every existing category.

    Raises:
        ValidationError: If code or name is missing or empty
        NotFoundError: If no household has that code
    """
    data = parse_input(HouseholdJoin, code=code, name=name)

    with span("household_service.join_household"):
        async with get_document_store().transaction() as document:
            household = document.find_household_by_code(data.code)
            if household is None:
                logger.warning("join_household_invalid_code")
                msg = "Invalid code"
                raise NotFoundError(msg)

            user_id = document.allocate_id(IdKind.USER)
            household.add_member(User(id=user_id, name=data.name))

        logger.info("household_joined", extra={"household_id": household.id, "user_id": user_id})
        return HouseholdJoined(household_id=household.id, user_id=user_id)


async def get_users(*, household_id: int) -> HouseholdMembers:
    """List a household's users together with its share code."""
    document = await get_document_store().snapshot()
    household = require_household(document, household_id)
    return HouseholdMembers(users=household.users, share_code=household.share_code)


async def get_overall_counts(*, household_id: int) -> dict[int, int]:
    """Weighted per-user totals across all categories of a household."""
    document = await get_document_store().snapshot()
    household = require_household(document, household_id)
    return dict(household.overall_counts)
