from abc import ABC, abstractmethod

from coursedesk.app.repositories.course_repository import ICourseRepository
from coursedesk.app.repositories.instructor_repository import IInstructorRepository
from coursedesk.app.repositories.invite_token_repository import IInviteTokenRepository
from coursedesk.app.repositories.subscription_repository import ISubscriptionRepository
from coursedesk.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    instructors: IInstructorRepository
    courses: ICourseRepository
    invite_tokens: IInviteTokenRepository
    subscriptions: ISubscriptionRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
