"""Score submission service"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import List, Optional, Union
from uuid import UUID

from backend.app.repositories.score_repository import ScoreRepository
from backend.app.repositories.candidate_repository import CandidateRepository
from backend.app.repositories.user_repository import UserRepository
from backend.app.models.score import Score
from backend.app.models.user import User
from backend.app.scoring.weights import CategoryWeights, get_weights
from backend.app.core.logging import get_logger
from backend.app.core.exceptions import (
    ValidationException, NotFoundException, ForbiddenException, ConflictException
)

logger = get_logger(__name__)

MIN_SCORE = Decimal("0")
MAX_SCORE = Decimal("100")
TWO_PLACES = Decimal("0.01")


def normalize_score_value(value: Union[int, float, str, Decimal]) -> Decimal:
    """
    Validate a raw score and round it to two decimals

    The range check runs on the unrounded value, so 100.004 is rejected
    rather than rounded down to 100.00.

    Raises:
        ValidationException: If the value is not a finite number in [0, 100]
    """
    if isinstance(value, bool):
        raise ValidationException("Score must be a number", details={"value": value})
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise ValidationException("Score must be a number", details={"value": str(value)}) from e

    if not number.is_finite():
        raise ValidationException("Score must be a finite number", details={"value": str(value)})

    if number < MIN_SCORE or number > MAX_SCORE:
        raise ValidationException(
            "Score must be between 0 and 100",
            details={"value": str(value)}
        )

    return number.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


class ScoreService:
    """Service for submitting and listing judge scores"""

    def __init__(
        self,
        score_repository: ScoreRepository,
        candidate_repository: CandidateRepository,
        user_repository: UserRepository,
        weights: Optional[CategoryWeights] = None
    ):
        """
        Initialize score service

        Args:
            score_repository: Score repository
            candidate_repository: Candidate repository
            user_repository: User repository
            weights: Active category weight table (loaded from settings if None)
        """
        self.score_repo = score_repository
        self.candidate_repo = candidate_repository
        self.user_repo = user_repository
        self.weights = weights or get_weights()

    async def submit_score(
        self,
        judge_id: UUID,
        candidate_id: UUID,
        category: str,
        value: Union[int, float, str, Decimal]
    ) -> Score:
        """
        Record a judge's score for a candidate in a category

        Scores are write-once: there is no update path.

        Args:
            judge_id: Judge UUID
            candidate_id: Candidate UUID
            category: Category of the active scheme
            value: Score between 0 and 100

        Returns:
            Created score

        Raises:
            ValidationException: Unknown category or value out of range
            NotFoundException: Judge or candidate does not exist
            ForbiddenException: Judge or candidate is inactive
            ConflictException: The judge already scored this candidate in this category
        """
        self.weights.require(category)
        rounded = normalize_score_value(value)

        judge = await self.user_repo.get_judge(judge_id)
        if not judge:
            raise NotFoundException(f"Judge not found: {judge_id}")
        if not judge.is_active:
            raise ForbiddenException("Judge account is inactive", details={"judge_id": str(judge_id)})

        candidate = await self.candidate_repo.get_by_id(candidate_id)
        if not candidate:
            raise NotFoundException(f"Candidate not found: {candidate_id}")
        if not candidate.is_active:
            raise ForbiddenException(
                "Candidate is not active",
                details={"candidate_id": str(candidate_id)}
            )

        existing = await self.score_repo.get_by_key(judge_id, candidate_id, category)
        if existing:
            raise ConflictException(
                "Score already submitted for this candidate in this category",
                details={"category": category, "score_id": str(existing.id)}
            )

        score = await self.score_repo.create({
            'judge_id': judge_id,
            'candidate_id': candidate_id,
            'category': category,
            'value': rounded,
        })

        logger.info(
            f"Judge {judge_id} scored candidate #{candidate.candidate_number} "
            f"{rounded} in {category}"
        )
        return score

    async def list_scores(
        self,
        judge_id: Optional[UUID] = None,
        candidate_id: Optional[UUID] = None,
        category: Optional[str] = None
    ) -> List[Score]:
        """List scores newest first, optionally filtered"""
        if category is not None:
            self.weights.require(category)
        return await self.score_repo.list_scores(
            judge_id=judge_id,
            candidate_id=candidate_id,
            category=category
        )

    async def judge_scores(self, judge_id: UUID, category: Optional[str] = None) -> List[Score]:
        """
        Scores submitted by one judge

        Raises:
            NotFoundException: If the judge does not exist
        """
        await self._get_judge(judge_id)
        return await self.list_scores(judge_id=judge_id, category=category)

    async def _get_judge(self, judge_id: UUID) -> User:
        judge = await self.user_repo.get_judge(judge_id)
        if not judge:
            raise NotFoundException(f"Judge not found: {judge_id}")
        return judge
