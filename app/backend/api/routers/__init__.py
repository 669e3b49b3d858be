"""Router package for API endpoints."""

from .foods import router as foods
from .users import router as users

__all__ = [
    "foods",
    "users",
]
