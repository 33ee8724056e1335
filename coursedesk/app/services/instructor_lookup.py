"""
Loads the candidate instructor records for a caller and hands them to the
pure resolver.
"""

import logging

from libs.result import Error
from coursedesk.app.services.unit_of_work import UnitOfWork
from coursedesk.domain.access import (
    Caller,
    InstructorResolution,
    ResolutionKind,
    resolve_instructor,
)
from coursedesk.domain.entities import Instructor, User, UserRole

logger = logging.getLogger(__name__)


async def find_instructor_for_caller(
    uow: UnitOfWork, caller: Caller
) -> InstructorResolution:
    """Direct link first, then the username-as-email fallback. Never links."""
    linked = await uow.instructors.get_linked_to_user(caller.user_id)
    if linked:
        return resolve_instructor(caller.username, linked, [])

    username = caller.username
    user = await uow.users.get_by_id(caller.user_id)
    if user is not None:
        username = user.username
    if not username:
        return InstructorResolution(ResolutionKind.none)

    matches = await uow.instructors.get_by_email(username)
    return resolve_instructor(username, [], matches)


async def link_user_to_instructor(
    uow: UnitOfWork, user: User, instructor: Instructor
) -> None:
    """Bind both sides of the user <-> instructor link and grant the instructor role"""
    instructor.user_id = user.id
    await uow.instructors.update(instructor)

    user.instructor_id = instructor.id
    roles = list(user.roles or [])
    if UserRole.instructor.value not in roles:
        roles.append(UserRole.instructor.value)
    user.roles = roles
    await uow.users.update(user)

    logger.info(f"Linked user {user.id} to instructor {instructor.id}")


def ambiguous_instructor_error(caller: Caller, resolution: InstructorResolution) -> Error:
    logger.warning(
        f"Ambiguous instructor resolution for user {caller.user_id}: "
        f"{len(resolution.candidates)} candidates"
    )
    return Error(
        "AMBIGUOUS_INSTRUCTOR",
        "Several instructor profiles match this account; ask an administrator to link one",
    )
