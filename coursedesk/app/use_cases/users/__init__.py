"""
User Use Cases

Current-user context.
"""

from .load_me_use_case import LoadMeUseCase

__all__ = [
    "LoadMeUseCase",
]
