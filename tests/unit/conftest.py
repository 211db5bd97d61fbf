"""Pytest configuration and fixtures for unit tests."""

import pytest

from choretally.domain.category import Category
from choretally.domain.document import Document
from choretally.domain.household import Household
from choretally.domain.user import User


@pytest.fixture
def smiths_document() -> Document:
    """Document with one household: Alice, Bob and a weight-2 Laundry category."""
    household = Household(
        id=1,
        share_code="ABC234",
        users=[User(id=1, name="Alice"), User(id=2, name="Bob")],
        categories=[Category(id=1, name="Laundry", weight=2, task_counts={1: 0, 2: 0})],
        overall_counts={1: 0, 2: 0},
    )
    return Document(
        households=[household],
        next_household_id=2,
        next_user_id=3,
        next_category_id=2,
        next_task_id=1,
    )
