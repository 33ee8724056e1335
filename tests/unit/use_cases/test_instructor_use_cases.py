from uuid import uuid4

import pytest

from coursedesk.app.use_cases.instructors import (
    CreateInstructorCommand,
    CreateInstructorUseCase,
    CreateInviteUseCase,
    DeleteInstructorUseCase,
    GetMyInstructorUseCase,
    LinkUserUseCase,
    UpdateInstructorUseCase,
)
from coursedesk.app.services.tokens import hash_password
from coursedesk.domain.entities import Instructor, User, UserStatus


def make_user(username="ada@example.com", **overrides):
    fields = dict(username=username, hashed_password=hash_password("SecurePass123"))
    fields.update(overrides)
    return User(**fields)


@pytest.mark.asyncio
async def test_create_instructor_owned_by_caller(mock_uow, make_caller):
    owner = make_caller(uuid4())
    command = CreateInstructorCommand(name="Ada", email=" Ada@Example.com ")

    result = await CreateInstructorUseCase(mock_uow).execute(owner, command)

    assert result.is_ok()
    created = mock_uow.instructors.create.call_args.args[0]
    assert created.owner_id == owner.user_id
    assert created.email == "ada@example.com"
    assert result.value.owner_id == str(owner.user_id)


@pytest.mark.asyncio
async def test_create_instructor_duplicate_email(mock_uow, make_caller):
    owner = make_caller(uuid4())
    mock_uow.instructors.get_by_owner_and_email.return_value = Instructor(
        name="Ada", email="ada@example.com", owner_id=owner.user_id
    )

    result = await CreateInstructorUseCase(mock_uow).execute(
        owner, CreateInstructorCommand(name="Ada", email="ada@example.com")
    )

    assert result.is_err()
    assert result.error.code == "INSTRUCTOR_EMAIL_EXISTS"


@pytest.mark.asyncio
async def test_linked_instructor_updates_only_allowed_fields(mock_uow, make_caller):
    me = make_caller(uuid4(), "ada@example.com", ("instructor",))
    owner_id = uuid4()
    instructor = Instructor(
        name="Ada", email="ada@example.com", owner_id=owner_id, user_id=me.user_id
    )
    mock_uow.instructors.get_by_id.return_value = instructor

    result = await UpdateInstructorUseCase(mock_uow).execute(
        me,
        instructor.id,
        {"name": "Ada L.", "bio": "Math", "email": "x@example.com", "owner_id": uuid4()},
    )

    assert result.is_ok()
    assert instructor.name == "Ada L."
    assert instructor.bio == "Math"
    assert instructor.email == "ada@example.com"
    assert instructor.owner_id == owner_id


@pytest.mark.asyncio
async def test_stranger_cannot_update_instructor(mock_uow, make_caller):
    instructor = Instructor(name="Ada", email="ada@example.com", owner_id=uuid4())
    mock_uow.instructors.get_by_id.return_value = instructor

    result = await UpdateInstructorUseCase(mock_uow).execute(
        make_caller(uuid4()), instructor.id, {"name": "Hacked"}
    )

    assert result.is_err()
    assert result.error.code == "FORBIDDEN"
    assert instructor.name == "Ada"


@pytest.mark.asyncio
async def test_get_my_instructor_links_unique_email_match(mock_uow, make_caller):
    user = make_user()
    me = make_caller(user.id, user.username)
    instructor = Instructor(name="Ada", email="ada@example.com", owner_id=uuid4())
    mock_uow.users.get_by_id.return_value = user
    mock_uow.instructors.get_by_email.return_value = [instructor]

    result = await GetMyInstructorUseCase(mock_uow).execute(me)

    assert result.is_ok()
    assert instructor.user_id == user.id
    assert user.instructor_id == instructor.id
    assert "instructor" in user.roles
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_get_my_instructor_ambiguous(mock_uow, make_caller):
    user = make_user()
    mock_uow.users.get_by_id.return_value = user
    mock_uow.instructors.get_by_email.return_value = [
        Instructor(name="Ada", email="ada@example.com", owner_id=uuid4()),
        Instructor(name="Ada", email="ada@example.com", owner_id=uuid4()),
    ]

    result = await GetMyInstructorUseCase(mock_uow).execute(make_caller(user.id, user.username))

    assert result.is_err()
    assert result.error.code == "AMBIGUOUS_INSTRUCTOR"
    mock_uow.instructors.update.assert_not_awaited()


@pytest.mark.asyncio
async def test_get_my_instructor_not_found(mock_uow, make_caller):
    mock_uow.users.get_by_id.return_value = make_user()

    result = await GetMyInstructorUseCase(mock_uow).execute(make_caller(uuid4(), "ada@example.com"))

    assert result.is_err()
    assert result.error.code == "INSTRUCTOR_NOT_FOUND"


@pytest.mark.asyncio
async def test_link_user_rejects_user_linked_elsewhere(mock_uow, make_caller):
    owner = make_caller(uuid4())
    instructor = Instructor(name="Ada", email="ada@example.com", owner_id=owner.user_id)
    user = make_user(instructor_id=uuid4())
    mock_uow.instructors.get_by_id.return_value = instructor
    mock_uow.users.get_by_id.return_value = user

    result = await LinkUserUseCase(mock_uow).execute(owner, instructor.id, user.id)

    assert result.is_err()
    assert result.error.code == "USER_ALREADY_LINKED"


@pytest.mark.asyncio
async def test_link_user_rejects_instructor_linked_elsewhere(mock_uow, make_caller):
    owner = make_caller(uuid4())
    instructor = Instructor(
        name="Ada", email="ada@example.com", owner_id=owner.user_id, user_id=uuid4()
    )
    mock_uow.instructors.get_by_id.return_value = instructor
    mock_uow.users.get_by_id.return_value = make_user()

    result = await LinkUserUseCase(mock_uow).execute(owner, instructor.id, uuid4())

    assert result.is_err()
    assert result.error.code == "INSTRUCTOR_ALREADY_LINKED"


@pytest.mark.asyncio
async def test_create_invite_creates_invited_user(mock_uow, make_caller):
    owner = make_caller(uuid4())
    instructor = Instructor(name="Ada", email="ada@example.com", owner_id=owner.user_id)
    mock_uow.instructors.get_by_id.return_value = instructor

    result = await CreateInviteUseCase(mock_uow).execute(owner, instructor.id)

    assert result.is_ok()
    new_user = mock_uow.users.create.call_args.args[0]
    assert new_user.username == "ada@example.com"
    assert new_user.status == UserStatus.invited
    assert new_user.roles == ["instructor"]
    assert instructor.user_id == new_user.id

    token = mock_uow.invite_tokens.create.call_args.args[0]
    raw = result.value.invite_url.split("token=")[1]
    assert token.token_hash != raw
    assert len(token.token_hash) == 64
    assert token.instructor_id == instructor.id
    assert token.owner_id == owner.user_id
    mock_uow.invite_tokens.delete_expired.assert_awaited_once()
    assert result.value.username == "ada@example.com"


@pytest.mark.asyncio
async def test_create_invite_owner_only(mock_uow, make_caller):
    instructor = Instructor(name="Ada", email="ada@example.com", owner_id=uuid4())
    mock_uow.instructors.get_by_id.return_value = instructor

    result = await CreateInviteUseCase(mock_uow).execute(make_caller(uuid4()), instructor.id)

    assert result.is_err()
    assert result.error.code == "FORBIDDEN"
    mock_uow.invite_tokens.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_delete_instructor_clears_back_references(mock_uow, make_caller):
    owner = make_caller(uuid4())
    instructor = Instructor(owner_id=owner.user_id, name="Ada", email="ada@example.com")
    linked = make_user(instructor_id=instructor.id)
    mock_uow.instructors.get_by_id.return_value = instructor
    mock_uow.users.list_by_instructor.return_value = [linked]

    result = await DeleteInstructorUseCase(mock_uow).execute(owner, instructor.id)

    assert result.is_ok()
    assert linked.instructor_id is None
    mock_uow.users.update.assert_awaited_once_with(linked)
    mock_uow.instructors.delete.assert_awaited_once_with(instructor)
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_delete_instructor_requires_owner(mock_uow, make_caller):
    instructor = Instructor(owner_id=uuid4(), name="Ada", email="ada@example.com")
    mock_uow.instructors.get_by_id.return_value = instructor

    result = await DeleteInstructorUseCase(mock_uow).execute(make_caller(uuid4()), instructor.id)

    assert result.is_err()
    assert result.error.code == "FORBIDDEN"
    mock_uow.instructors.delete.assert_not_awaited()
