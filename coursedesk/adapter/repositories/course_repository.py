from datetime import date
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, or_
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from coursedesk.app.repositories.course_repository import ICourseRepository
from coursedesk.domain.entities import Course

SORTABLE_FIELDS = {
    "created_at": Course.created_at,
    "updated_at": Course.updated_at,
    "start_date": Course.start_date,
    "end_date": Course.end_date,
    "title": Course.title,
}


class CourseRepository(ICourseRepository):
    """Course repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, course_id: UUID) -> Optional[Course]:
        """Get course by ID"""
        stmt = select(Course).where(Course.id == course_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list(
        self,
        owner_id: Optional[UUID] = None,
        text_query: Optional[str] = None,
        start_from: Optional[date] = None,
        start_to: Optional[date] = None,
        sort: str = "-created_at",
    ) -> List[Course]:
        """List courses matching the filters; owner_id None means all owners"""
        stmt = select(Course)
        if owner_id is not None:
            stmt = stmt.where(Course.owner_id == owner_id)
        if text_query:
            needle = text_query.strip().lower()
            stmt = stmt.where(
                or_(
                    func.lower(Course.title).contains(needle),
                    func.lower(Course.description).contains(needle),
                )
            )
        if start_from is not None:
            stmt = stmt.where(Course.start_date >= start_from)
        if start_to is not None:
            stmt = stmt.where(Course.start_date <= start_to)

        descending = sort.startswith("-")
        column = SORTABLE_FIELDS.get(sort.lstrip("-+"), Course.created_at)
        stmt = stmt.order_by(column.desc() if descending else column.asc())

        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, course: Course) -> Course:
        """Create a new course"""
        self.session.add(course)
        await self.session.flush()
        await self.session.refresh(course)
        return course

    async def update(self, course: Course) -> Course:
        """Update existing course"""
        self.session.add(course)
        await self.session.flush()
        await self.session.refresh(course)
        return course

    async def delete(self, course: Course) -> None:
        """Delete course"""
        await self.session.delete(course)
        await self.session.flush()
