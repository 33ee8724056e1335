"""
Ownership, tenant and instructor-linkage checks.

Pure functions over already-loaded records. Callers load the candidate
instructors; nothing here touches the database.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Sequence, Tuple
from uuid import UUID

from .entities import Course, Instructor
from .scheduling import parse_date

ADMIN_ROLES = frozenset({"admin", "owner", "manager", "staff"})

# Fields a linked instructor may change on their own profile
INSTRUCTOR_SELF_FIELDS = frozenset({"name", "bio", "phone", "photo", "skills"})


@dataclass(frozen=True)
class Caller:
    """Authenticated identity attached to a request"""

    user_id: UUID
    username: Optional[str] = None
    roles: FrozenSet[str] = field(default_factory=frozenset)


class ResolutionKind(str, Enum):
    linked = "linked"
    unlinked = "unlinked"
    ambiguous = "ambiguous"
    none = "none"


@dataclass(frozen=True)
class InstructorResolution:
    """
    Outcome of resolving a caller to an instructor profile.

    linked: profile.user_id is the caller.
    unlinked: exactly one unlinked profile whose email is the caller's username.
    ambiguous: several profiles share that email; needs manual linking.
    none: no profile.
    """

    kind: ResolutionKind
    instructor: Optional[Instructor] = None
    candidates: Tuple[Instructor, ...] = ()

    @property
    def found(self) -> bool:
        return self.kind in (ResolutionKind.linked, ResolutionKind.unlinked)


def has_admin_power(roles: Iterable[str]) -> bool:
    return any(str(role).lower() in ADMIN_ROLES for role in roles or ())


def is_owner(owner_id: Any, caller: Caller) -> bool:
    return owner_id is not None and str(owner_id) == str(caller.user_id)


def resolve_instructor(
    username: Optional[str],
    linked: Sequence[Instructor],
    email_matches: Sequence[Instructor],
) -> InstructorResolution:
    """Direct link first, then a unique case-insensitive email match on username"""
    if linked:
        return InstructorResolution(ResolutionKind.linked, linked[0])

    uname = (username or "").strip().lower()
    if not uname:
        return InstructorResolution(ResolutionKind.none)

    matches = tuple(
        i
        for i in email_matches
        if (i.email or "").strip().lower() == uname and i.user_id is None
    )
    if len(matches) > 1:
        return InstructorResolution(ResolutionKind.ambiguous, candidates=matches)
    if matches:
        return InstructorResolution(ResolutionKind.unlinked, matches[0])
    return InstructorResolution(ResolutionKind.none)


def course_includes_instructor(course: Course, instructor_id: Any) -> bool:
    if instructor_id is None:
        return False
    return str(instructor_id) in {str(i) for i in course.instructor_ids or []}


def course_involves_instructor(course: Course, instructor_id: Any) -> bool:
    """Listed on the course, or carrying a rate on it"""
    if course_includes_instructor(course, instructor_id):
        return True
    return instructor_id is not None and str(instructor_id) in (course.instructor_rates or {})


def is_assigned_instructor(course: Course, instructor: Optional[Instructor]) -> bool:
    """Listed on the course and belonging to the same tenant"""
    if instructor is None:
        return False
    return course_includes_instructor(course, instructor.id) and str(
        instructor.owner_id
    ) == str(course.owner_id)


def is_enrolled(course: Course, caller: Caller) -> bool:
    return str(caller.user_id) in {str(s) for s in course.enrolled or []}


def can_view_course(
    caller: Caller, course: Course, instructor: Optional[Instructor] = None
) -> bool:
    return (
        is_owner(course.owner_id, caller)
        or has_admin_power(caller.roles)
        or is_assigned_instructor(course, instructor)
        or is_enrolled(course, caller)
    )


def can_modify(caller: Caller, owner_id: Any) -> bool:
    """Writes on a course or instructor are reserved to the exact owner"""
    return is_owner(owner_id, caller)


def can_view_instructor(caller: Caller, instructor: Instructor) -> bool:
    return (
        is_owner(instructor.owner_id, caller)
        or has_admin_power(caller.roles)
        or (instructor.user_id is not None and str(instructor.user_id) == str(caller.user_id))
    )


def filter_self_update(changes: Mapping[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in changes.items() if k in INSTRUCTOR_SELF_FIELDS}


def session_key_map(sessions: Sequence[Mapping[str, Any]]) -> Dict[str, str]:
    """Accepted attendance key -> canonical date key ("YYYY-MM-DD")"""
    keys: Dict[str, str] = {}
    for index, session in enumerate(sessions or []):
        day = parse_date(session.get("date"))
        if day is None:
            continue
        canonical = day.isoformat()
        keys[canonical] = canonical
        keys[f"idx-{index}"] = canonical
    return keys


def sanitize_attendance_keys(
    sessions: Sequence[Mapping[str, Any]], submitted: Any
) -> List[str]:
    """Keep keys naming an existing session, as date keys, without duplicates"""
    allowed = session_key_map(sessions)
    out: List[str] = []
    if not isinstance(submitted, (list, tuple)):
        return out
    for raw in submitted:
        canonical = allowed.get(str(raw if raw is not None else ""))
        if canonical is None or canonical in out:
            continue
        out.append(canonical)
    return out


def prune_attendance(
    attendance: Optional[Mapping[str, Any]], sessions: Sequence[Mapping[str, Any]]
) -> Dict[str, List[str]]:
    return {
        str(instructor_id): sanitize_attendance_keys(sessions, keys)
        for instructor_id, keys in (attendance or {}).items()
    }


def owner_attendance_update(course: Course, body: Any) -> Dict[str, List[str]]:
    """Owner replaces the whole map"""
    incoming = body if isinstance(body, Mapping) else {}
    return prune_attendance(incoming, course.sessions)


def instructor_attendance_update(
    course: Course, instructor_id: Any, body: Any
) -> Dict[str, List[str]]:
    """
    An assigned instructor replaces only their own entry.

    body is either a list of keys or a mapping holding the instructor's id.
    """
    my_id = str(instructor_id)
    if isinstance(body, Mapping):
        submitted = body.get(my_id, [])
    else:
        submitted = body
    updated = {
        str(k): [str(key) for key in v] if isinstance(v, list) else []
        for k, v in (course.attendance or {}).items()
    }
    updated[my_id] = sanitize_attendance_keys(course.sessions, submitted)
    return updated
