from sqlmodel.ext.asyncio.session import AsyncSession

from coursedesk.adapter.repositories.course_repository import CourseRepository
from coursedesk.adapter.repositories.instructor_repository import InstructorRepository
from coursedesk.adapter.repositories.invite_token_repository import InviteTokenRepository
from coursedesk.adapter.repositories.subscription_repository import SubscriptionRepository
from coursedesk.adapter.repositories.user_repository import UserRepository
from coursedesk.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.instructors = InstructorRepository(self.session)
        self.courses = CourseRepository(self.session)
        self.invite_tokens = InviteTokenRepository(self.session)
        self.subscriptions = SubscriptionRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
