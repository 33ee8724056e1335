import pytest
from unittest.mock import AsyncMock, MagicMock

from coursedesk.domain.access import Caller

REPOSITORY_METHODS = {
    "users": ["get_by_id", "get_by_username", "list_by_instructor", "create", "update"],
    "instructors": [
        "get_by_id",
        "get_linked_to_user",
        "get_by_email",
        "get_by_owner_and_email",
        "list",
        "create",
        "update",
        "delete",
    ],
    "courses": ["get_by_id", "list", "create", "update", "delete"],
    "invite_tokens": [
        "create",
        "get_by_token_hash",
        "update",
        "delete_siblings",
        "delete_expired",
    ],
    "subscriptions": ["get_by_owner", "get_by_customer_id", "create", "update"],
}


async def _echo(entity):
    return entity


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    # Mock repositories; create/update hand back what they were given
    for repo_name, methods in REPOSITORY_METHODS.items():
        repo = MagicMock()
        for method in methods:
            if method in ("create", "update"):
                setattr(repo, method, AsyncMock(side_effect=_echo))
            else:
                setattr(repo, method, AsyncMock(return_value=None))
        setattr(uow, repo_name, repo)

    uow.users.list_by_instructor.return_value = []
    uow.instructors.get_linked_to_user.return_value = []
    uow.instructors.get_by_email.return_value = []
    uow.instructors.list.return_value = []
    uow.courses.list.return_value = []
    uow.invite_tokens.delete_siblings.return_value = 0
    uow.invite_tokens.delete_expired.return_value = 0
    return uow


@pytest.fixture
def make_caller():
    def _make(user_id, username="owner@example.com", roles=("student",)):
        return Caller(user_id=user_id, username=username, roles=frozenset(roles))

    return _make
