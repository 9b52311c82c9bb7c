"""Score repository for database operations"""

from collections import defaultdict
from decimal import Decimal
from typing import List, Optional, Dict, Any, Iterable, Set
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_, func, desc
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload

from backend.app.models.score import Score
from backend.app.models.candidate import Candidate
from backend.app.models.user import User, UserRole
from backend.app.core.exceptions import ConflictException
from backend.app.core.logging import get_logger

logger = get_logger(__name__)


class ScoreRepository:
    """Repository for score-related database operations"""

    def __init__(self, db: AsyncSession):
        """
        Initialize score repository

        Args:
            db: Database session
        """
        self.db = db

    async def create(self, score_data: Dict[str, Any]) -> Score:
        """
        Insert a score

        The unique (judge, candidate, category) constraint decides between
        concurrent writers; the loser's transaction is rolled back.

        Args:
            score_data: Score data dictionary

        Returns:
            Created score

        Raises:
            ConflictException: If a score already exists for the key
        """
        score = Score(**score_data)
        self.db.add(score)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(
                f"Duplicate score rejected: judge={score_data.get('judge_id')} "
                f"candidate={score_data.get('candidate_id')} category={score_data.get('category')}"
            )
            raise ConflictException(
                "Score already submitted for this candidate in this category",
                details={"category": score_data.get('category')}
            ) from e
        await self.db.refresh(score)

        logger.info(f"Created score: {score.id}")
        return score

    async def get_by_key(self, judge_id: UUID, candidate_id: UUID, category: str) -> Optional[Score]:
        """
        Get the score a judge gave a candidate in a category

        Args:
            judge_id: Judge UUID
            candidate_id: Candidate UUID
            category: Category name

        Returns:
            Score if found, None otherwise
        """
        stmt = select(Score).where(
            and_(
                Score.judge_id == judge_id,
                Score.candidate_id == candidate_id,
                Score.category == category
            )
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def list_scores(
        self,
        judge_id: Optional[UUID] = None,
        candidate_id: Optional[UUID] = None,
        category: Optional[str] = None,
        skip: int = 0,
        limit: Optional[int] = None
    ) -> List[Score]:
        """
        List scores newest first, with judge and candidate loaded

        Args:
            judge_id: Filter by judge
            candidate_id: Filter by candidate
            category: Filter by category
            skip: Number of records to skip
            limit: Maximum number of records to return

        Returns:
            List of scores
        """
        stmt = select(Score).options(
            selectinload(Score.judge),
            selectinload(Score.candidate)
        )

        if judge_id is not None:
            stmt = stmt.where(Score.judge_id == judge_id)
        if candidate_id is not None:
            stmt = stmt.where(Score.candidate_id == candidate_id)
        if category is not None:
            stmt = stmt.where(Score.category == category)

        stmt = stmt.order_by(desc(Score.created_at)).offset(skip)
        if limit is not None:
            stmt = stmt.limit(limit)

        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def values_by_category(self, candidate_id: UUID) -> Dict[str, List[Decimal]]:
        """
        Raw values of one candidate grouped by category

        Args:
            candidate_id: Candidate UUID

        Returns:
            {category: [value, ...]}
        """
        grouped = await self.values_by_candidate([candidate_id])
        return grouped.get(candidate_id, {})

    async def values_by_candidate(
        self,
        candidate_ids: Optional[Iterable[UUID]] = None
    ) -> Dict[UUID, Dict[str, List[Decimal]]]:
        """
        Raw values grouped by candidate and category in a single query

        Args:
            candidate_ids: Restrict to these candidates (all when None)

        Returns:
            {candidate_id: {category: [value, ...]}}
        """
        stmt = select(Score.candidate_id, Score.category, Score.value)
        if candidate_ids is not None:
            stmt = stmt.where(Score.candidate_id.in_(list(candidate_ids)))

        result = await self.db.execute(stmt)

        grouped: Dict[UUID, Dict[str, List[Decimal]]] = defaultdict(lambda: defaultdict(list))
        for candidate_id, category, value in result.all():
            grouped[candidate_id][category].append(Decimal(value))

        return {candidate_id: dict(categories) for candidate_id, categories in grouped.items()}

    async def count_for_judge(self, judge_id: UUID, category: str) -> int:
        """
        Count a judge's scores in a category on active candidates

        Args:
            judge_id: Judge UUID
            category: Category name

        Returns:
            Number of scores
        """
        stmt = select(func.count(Score.id)).join(
            Candidate, Score.candidate_id == Candidate.id
        ).where(
            and_(
                Score.judge_id == judge_id,
                Score.category == category,
                Candidate.is_active == True
            )
        )
        result = await self.db.execute(stmt)
        return result.scalar() or 0

    async def count_for_category(self, category: str) -> int:
        """
        Count scores in a category given by active judges to active candidates

        Args:
            category: Category name

        Returns:
            Number of scores
        """
        stmt = select(func.count(Score.id)).join(
            Candidate, Score.candidate_id == Candidate.id
        ).join(
            User, Score.judge_id == User.id
        ).where(
            and_(
                Score.category == category,
                Candidate.is_active == True,
                User.is_active == True,
                User.role == UserRole.JUDGE
            )
        )
        result = await self.db.execute(stmt)
        return result.scalar() or 0

    async def scored_candidate_ids(self, judge_id: UUID, category: str) -> Set[UUID]:
        """
        Candidates a judge has already scored in a category

        Args:
            judge_id: Judge UUID
            category: Category name

        Returns:
            Set of candidate UUIDs
        """
        stmt = select(Score.candidate_id).where(
            and_(
                Score.judge_id == judge_id,
                Score.category == category
            )
        )
        result = await self.db.execute(stmt)
        return set(result.scalars().all())
