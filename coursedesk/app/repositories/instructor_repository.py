from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from coursedesk.domain.entities import Instructor


class IInstructorRepository(ABC):
    """Instructor repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, instructor_id: UUID) -> Optional[Instructor]:
        """Get instructor by ID"""
        pass

    @abstractmethod
    async def get_linked_to_user(self, user_id: UUID) -> List[Instructor]:
        """Get instructors whose user link is the given user"""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> List[Instructor]:
        """Get instructors with this email across all owners (case-insensitive)"""
        pass

    @abstractmethod
    async def get_by_owner_and_email(
        self, owner_id: UUID, email: str
    ) -> Optional[Instructor]:
        """Get an owner's instructor by email"""
        pass

    @abstractmethod
    async def list(
        self, owner_id: Optional[UUID] = None, name_query: Optional[str] = None
    ) -> List[Instructor]:
        """List instructors, newest first, optionally scoped to an owner"""
        pass

    @abstractmethod
    async def create(self, instructor: Instructor) -> Instructor:
        """Create a new instructor"""
        pass

    @abstractmethod
    async def update(self, instructor: Instructor) -> Instructor:
        """Update existing instructor"""
        pass

    @abstractmethod
    async def delete(self, instructor: Instructor) -> None:
        """Delete instructor"""
        pass
