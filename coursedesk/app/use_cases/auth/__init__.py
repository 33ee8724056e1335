"""
Authentication Use Cases

Sign-up, sign-in and invite consumption.
"""

from .sign_up_use_case import SignUpUseCase
from .sign_in_use_case import SignInUseCase
from .inspect_invite_use_case import InspectInviteUseCase
from .accept_invite_use_case import AcceptInviteUseCase
from .dtos import (
    SignUpCommand,
    TokenResponse,
    UserInfo,
    InspectInviteResponse,
    AcceptInviteResponse,
)

__all__ = [
    # Use Cases
    "SignUpUseCase",
    "SignInUseCase",
    "InspectInviteUseCase",
    "AcceptInviteUseCase",
    # DTOs - Commands
    "SignUpCommand",
    # DTOs - Responses
    "TokenResponse",
    "InspectInviteResponse",
    "AcceptInviteResponse",
    # DTOs - Nested Models
    "UserInfo",
]
