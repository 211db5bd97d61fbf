"""JSON API router over the household, category, task and user services."""

import json
import logging
from typing import Any

from fastapi import APIRouter, Request

from choretally.core.errors import ValidationError
from choretally.models.service_models import (
    CategorySummary,
    CategoryView,
    HistoryEntry,
    HouseholdCreated,
    HouseholdJoined,
    HouseholdMembers,
)
from choretally.services import category_service, household_service, task_service, user_service


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["api"])


async def read_json_body(request: Request) -> dict[str, Any]:
    """Parse the request body as a JSON object.

    Raises:
        ValidationError: If the body is not a JSON object
    """
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.info("api_invalid_json", extra={"path": request.url.path})
        msg = "Invalid JSON"
        raise ValidationError(msg) from e

    if not isinstance(body, dict):
        msg = "Invalid JSON"
        raise ValidationError(msg)
    return body


def household_id_param(household_id: str | None) -> int:
    """Read the ``household_id`` query parameter.

    Missing or non-numeric values map to 0, which matches no household, so
    the service answers 404 for them as for any unknown id.
    """
    try:
        return int(household_id or 0)
    except ValueError:
        return 0


@router.get("/users")
async def get_users(household_id: str | None = None) -> HouseholdMembers:
    return await household_service.get_users(household_id=household_id_param(household_id))


@router.post("/update-user")
async def update_user(request: Request) -> dict[str, Any]:
    body = await read_json_body(request)
    user = await user_service.rename_user(user_id=body.get("user_id"), name=body.get("name"))
    return {"success": True, "user": user.model_dump()}


@router.post("/create-household")
async def create_household(request: Request) -> HouseholdCreated:
    body = await read_json_body(request)
    return await household_service.create_household(name=body.get("name"))


@router.post("/join-household")
async def join_household(request: Request) -> HouseholdJoined:
    body = await read_json_body(request)
    return await household_service.join_household(code=body.get("code"), name=body.get("name"))


@router.get("/categories")
async def get_categories(household_id: str | None = None) -> list[CategoryView]:
    return await category_service.get_categories(household_id=household_id_param(household_id))


@router.get("/master-scale")
async def get_master_scale(household_id: str | None = None) -> dict[str, dict[int, int]]:
    counts = await household_service.get_overall_counts(household_id=household_id_param(household_id))
    return {"overall_counts": counts}


@router.post("/categories")
async def create_category(request: Request) -> CategorySummary:
    body = await read_json_body(request)
    return await category_service.create_category(
        household_id=body.get("household_id"),
        name=body.get("name"),
        weight=body.get("weight"),
    )


@router.post("/task")
async def log_task(request: Request) -> dict[str, Any]:
    body = await read_json_body(request)
    result = await task_service.log_task(user_id=body.get("user_id"), category_id=body.get("category_id"))
    return {"success": True, "task_id": result.task_id}


@router.get("/history")
async def get_history(household_id: str | None = None) -> list[HistoryEntry]:
    return await task_service.get_history(household_id=household_id_param(household_id))
