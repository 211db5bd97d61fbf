"""Share code generation for joining households."""

import logging
import secrets
from collections.abc import Container

from choretally.core.config import constants
from choretally.core.errors import ConflictError


logger = logging.getLogger(__name__)


def generate_share_code(length: int = constants.SHARE_CODE_LENGTH) -> str:
    """Generate a random code from the unambiguous alphabet."""
    return "".join(secrets.choice(constants.SHARE_CODE_ALPHABET) for _ in range(length))


def generate_unique_share_code(existing: Container[str]) -> str:
    """Generate a share code not present in ``existing``.

    Args:
        existing: Upper-cased share codes already in use

    Returns:
        A fresh share code

    Raises:
        ConflictError: If no free code was found within the retry budget
    """
    for attempt in range(1, constants.SHARE_CODE_MAX_ATTEMPTS + 1):
        code = generate_share_code()
        if code not in existing:
            if attempt > 1:
                logger.info("share_code_collision_resolved", extra={"attempts": attempt})
            return code

    logger.error("share_code_space_exhausted", extra={"attempts": constants.SHARE_CODE_MAX_ATTEMPTS})
    msg = "Could not generate a unique share code"
    raise ConflictError(msg)
