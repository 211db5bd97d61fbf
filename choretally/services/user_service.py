"""User service for member management."""

import logging

from choretally.core.document_store import get_document_store
from choretally.core.errors import NotFoundError
from choretally.core.logging import span
from choretally.domain.create_models import parse_input
from choretally.domain.update_models import UserRename
from choretally.domain.user import User


logger = logging.getLogger(__name__)


async def rename_user(*, user_id: int, name: str) -> User:
    """Change a user's display name.

    The user is looked up across all households. History entries show the
    new name from then on since they resolve names when read.

    Args:
        user_id: ID of the user to rename
        name: New display name

    Returns:
        Updated user

    Raises:
        ValidationError: If user_id or name is missing or malformed
        NotFoundError: If no household has that user
    """
    data = parse_input(UserRename, user_id=user_id, name=name)

    with span("user_service.rename_user", user_id=data.user_id):
        async with get_document_store().transaction() as document:
            found = document.find_user(data.user_id)
            if found is None:
                msg = "User not found"
                raise NotFoundError(msg)

            _, user = found
            user.name = data.name

        logger.info("user_renamed", extra={"user_id": user.id})
        return user.model_copy()
