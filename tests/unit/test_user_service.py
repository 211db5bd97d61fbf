"""Unit tests for user_service module."""

import pytest

from choretally.core.errors import NotFoundError, ValidationError
from choretally.services import household_service, user_service


@pytest.mark.unit
class TestRenameUser:
    """Tests for rename_user function."""

    async def test_rename_user_success(self, document_store):
        """Test the user is renamed in place and persisted."""
        await household_service.create_household(name="Smiths")

        user = await user_service.rename_user(user_id=1, name="Alice")

        assert (user.id, user.name) == (1, "Alice")
        assert document_store.load().households[0].users[0].name == "Alice"

    async def test_rename_user_in_second_household(self, document_store):
        """Test users are found in any household."""
        await household_service.create_household(name="Ann")
        await household_service.create_household(name="Ben")

        await user_service.rename_user(user_id=2, name="Benjamin")

        households = document_store.load().households
        assert households[0].users[0].name == "Ann"
        assert households[1].users[0].name == "Benjamin"

    async def test_rename_unknown_user(self, document_store):
        """Test an unknown user is NotFoundError."""
        await household_service.create_household(name="Smiths")

        with pytest.raises(NotFoundError, match="User not found"):
            await user_service.rename_user(user_id=5, name="Ghost")

    @pytest.mark.parametrize(("user_id", "name"), [(None, "Alice"), (1, ""), (1, None), (-1, "Alice")])
    async def test_rename_user_invalid_input(self, document_store, user_id, name):
        """Test user_id and name are required."""
        with pytest.raises(ValidationError):
            await user_service.rename_user(user_id=user_id, name=name)

    async def test_stored_long_name_loads_but_rename_is_limited(self, document_store):
        """Test a name over 50 characters from an older file loads, renames must fit the limit."""
        await household_service.create_household(name="Smiths")
        long_name = "A" * 60
        document = document_store.load()
        document.households[0].users[0].name = long_name
        document_store.save(document)

        members = await household_service.get_users(household_id=1)
        assert members.users[0].name == long_name

        with pytest.raises(ValidationError, match="max 50"):
            await user_service.rename_user(user_id=1, name=long_name)

        user = await user_service.rename_user(user_id=1, name="A" * 50)
        assert user.name == "A" * 50
