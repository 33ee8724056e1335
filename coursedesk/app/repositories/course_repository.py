from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional
from uuid import UUID

from coursedesk.domain.entities import Course


class ICourseRepository(ABC):
    """Course repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, course_id: UUID) -> Optional[Course]:
        """Get course by ID"""
        pass

    @abstractmethod
    async def list(
        self,
        owner_id: Optional[UUID] = None,
        text_query: Optional[str] = None,
        start_from: Optional[date] = None,
        start_to: Optional[date] = None,
        sort: str = "-created_at",
    ) -> List[Course]:
        """List courses matching the filters; owner_id None means all owners"""
        pass

    @abstractmethod
    async def create(self, course: Course) -> Course:
        """Create a new course"""
        pass

    @abstractmethod
    async def update(self, course: Course) -> Course:
        """Update existing course"""
        pass

    @abstractmethod
    async def delete(self, course: Course) -> None:
        """Delete course"""
        pass
