"""
CourseDesk Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    UserRole,
    UserStatus,
    CourseLocation,
    SubscriptionPlan,
    BillingCycle,
    SubscriptionStatus,
)

# Export all entities
from .user import User
from .instructor import Instructor
from .course import Course
from .invite_token import InviteToken
from .subscription import Subscription

__all__ = [
    # Enums
    "UserRole",
    "UserStatus",
    "CourseLocation",
    "SubscriptionPlan",
    "BillingCycle",
    "SubscriptionStatus",
    # Entities
    "User",
    "Instructor",
    "Course",
    "InviteToken",
    "Subscription",
]
