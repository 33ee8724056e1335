"""
Which tenant's courses a caller sees when listing by instructor.
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from libs.result import Result, Return
from coursedesk.app.services.instructor_lookup import (
    ambiguous_instructor_error,
    find_instructor_for_caller,
)
from coursedesk.app.services.unit_of_work import UnitOfWork
from coursedesk.domain.access import Caller, ResolutionKind, has_admin_power


@dataclass(frozen=True)
class CourseScope:
    owner_id: Optional[UUID] = None
    instructor_id: Optional[str] = None
    empty: bool = False


async def resolve_course_scope(
    uow: UnitOfWork, caller: Caller, instructor: Optional[str]
) -> Result[CourseScope]:
    """
    No instructor: admin-class callers see all tenants, others their own.
    "me": the caller's instructor, within that instructor's tenant.
    <id>: that instructor's tenant when the caller is that instructor,
    all tenants for admin-class callers, the caller's tenant otherwise.
    With either filter an ambiguous caller resolution is an error.
    """
    if not instructor:
        owner_id = None if has_admin_power(caller.roles) else caller.user_id
        return Return.ok(CourseScope(owner_id=owner_id))

    resolution = await find_instructor_for_caller(uow, caller)
    if resolution.kind == ResolutionKind.ambiguous:
        return Return.err(ambiguous_instructor_error(caller, resolution))

    if instructor == "me":
        if not resolution.found:
            return Return.ok(CourseScope(empty=True))
        mine = resolution.instructor
        return Return.ok(
            CourseScope(owner_id=mine.owner_id, instructor_id=str(mine.id))
        )

    try:
        target_id = UUID(str(instructor))
    except ValueError:
        return Return.ok(CourseScope(empty=True))

    target = await uow.instructors.get_by_id(target_id)
    if target is None:
        return Return.ok(CourseScope(empty=True))

    if resolution.found and resolution.instructor.id == target.id:
        owner_id = target.owner_id
    elif has_admin_power(caller.roles):
        owner_id = None
    else:
        owner_id = caller.user_id
    return Return.ok(CourseScope(owner_id=owner_id, instructor_id=str(target.id)))
