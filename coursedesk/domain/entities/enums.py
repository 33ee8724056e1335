"""
CourseDesk Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class UserRole(str, Enum):
    """Role carried on a user account"""

    admin = "admin"
    instructor = "instructor"
    student = "student"
    staff = "staff"
    manager = "manager"
    owner = "owner"


class UserStatus(str, Enum):
    """User account status"""

    active = "active"
    invited = "invited"
    suspended = "suspended"


class CourseLocation(str, Enum):
    """Fixed set of course locations"""

    news = "News"
    games = "Games"
    music = "Music"
    movies = "Movies"
    sports = "Sports"
    television = "Television"


class SubscriptionPlan(str, Enum):
    """Subscription plan tier"""

    free = "free"
    pro = "pro"
    business = "business"


class BillingCycle(str, Enum):
    """Subscription billing cycle"""

    monthly = "monthly"
    annual = "annual"


class SubscriptionStatus(str, Enum):
    """Subscription status mirrored from the billing processor"""

    active = "active"
    trialing = "trialing"
    past_due = "past_due"
    canceled = "canceled"
    incomplete = "incomplete"
    incomplete_expired = "incomplete_expired"
