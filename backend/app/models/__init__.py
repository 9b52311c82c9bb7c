"""Database models"""

from backend.app.models.base import TimestampMixin
from backend.app.models.user import User, UserRole
from backend.app.models.candidate import Candidate
from backend.app.models.score import Score, ScoreCategory

__all__ = [
    "TimestampMixin",
    "User",
    "UserRole",
    "Candidate",
    "Score",
    "ScoreCategory",
]
