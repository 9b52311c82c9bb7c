"""Business logic services"""

from backend.app.services.candidate_service import CandidateService
from backend.app.services.judge_service import JudgeService
from backend.app.services.score_service import ScoreService
from backend.app.services.tabulation_service import TabulationService
from backend.app.services.progress_service import ProgressService

__all__ = ['CandidateService', 'JudgeService', 'ScoreService', 'TabulationService', 'ProgressService']
