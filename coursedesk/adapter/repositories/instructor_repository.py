from typing import List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from coursedesk.app.repositories.instructor_repository import IInstructorRepository
from coursedesk.domain.entities import Instructor


class InstructorRepository(IInstructorRepository):
    """Instructor repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, instructor_id: UUID) -> Optional[Instructor]:
        """Get instructor by ID"""
        stmt = select(Instructor).where(Instructor.id == instructor_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_linked_to_user(self, user_id: UUID) -> List[Instructor]:
        """Get instructors whose user link is the given user"""
        stmt = (
            select(Instructor)
            .where(Instructor.user_id == user_id)
            .order_by(Instructor.created_at)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_by_email(self, email: str) -> List[Instructor]:
        """Get instructors with this email across all owners (case-insensitive)"""
        stmt = (
            select(Instructor)
            .where(func.lower(Instructor.email) == email.strip().lower())
            .order_by(Instructor.created_at)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_by_owner_and_email(
        self, owner_id: UUID, email: str
    ) -> Optional[Instructor]:
        """Get an owner's instructor by email"""
        stmt = select(Instructor).where(
            Instructor.owner_id == owner_id,
            func.lower(Instructor.email) == email.strip().lower(),
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def list(
        self, owner_id: Optional[UUID] = None, name_query: Optional[str] = None
    ) -> List[Instructor]:
        """List instructors, newest first, optionally scoped to an owner"""
        stmt = select(Instructor)
        if owner_id is not None:
            stmt = stmt.where(Instructor.owner_id == owner_id)
        if name_query:
            stmt = stmt.where(
                func.lower(Instructor.name).contains(name_query.strip().lower())
            )
        stmt = stmt.order_by(Instructor.created_at.desc())
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, instructor: Instructor) -> Instructor:
        """Create a new instructor"""
        self.session.add(instructor)
        await self.session.flush()
        await self.session.refresh(instructor)
        return instructor

    async def update(self, instructor: Instructor) -> Instructor:
        """Update existing instructor"""
        self.session.add(instructor)
        await self.session.flush()
        await self.session.refresh(instructor)
        return instructor

    async def delete(self, instructor: Instructor) -> None:
        """Delete instructor"""
        await self.session.delete(instructor)
        await self.session.flush()
