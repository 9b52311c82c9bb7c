"""Data access layer"""

from backend.app.repositories.user_repository import UserRepository
from backend.app.repositories.candidate_repository import CandidateRepository
from backend.app.repositories.score_repository import ScoreRepository

__all__ = ['UserRepository', 'CandidateRepository', 'ScoreRepository']
