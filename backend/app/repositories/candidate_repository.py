"""Candidate repository for database operations"""

from typing import List, Optional, Dict, Any
from uuid import UUID
from sqlalchemy import select, delete, or_, func, cast, String
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.models.candidate import Candidate
from backend.app.models.score import Score
from backend.app.core.logging import get_logger

logger = get_logger(__name__)


class CandidateRepository:
    """Repository for candidate database operations"""

    def __init__(self, session: AsyncSession):
        """
        Initialize repository

        Args:
            session: Database session
        """
        self.session = session

    async def create(self, candidate_data: Dict[str, Any]) -> Candidate:
        """
        Create a new candidate

        Args:
            candidate_data: Dictionary with candidate data

        Returns:
            Created candidate
        """
        candidate = Candidate(**candidate_data)
        self.session.add(candidate)
        await self.session.commit()
        await self.session.refresh(candidate)

        logger.info(f"Created candidate #{candidate.candidate_number}: {candidate.id}")
        return candidate

    async def get_by_id(self, candidate_id: UUID) -> Optional[Candidate]:
        """
        Get candidate by ID

        Args:
            candidate_id: Candidate UUID

        Returns:
            Candidate if found, None otherwise
        """
        result = await self.session.execute(
            select(Candidate).where(Candidate.id == candidate_id)
        )
        candidate = result.scalar_one_or_none()

        if candidate:
            logger.debug(f"Found candidate: {candidate_id}")
        else:
            logger.debug(f"Candidate not found: {candidate_id}")

        return candidate

    async def get_by_number(self, candidate_number: int) -> Optional[Candidate]:
        """Get candidate by display number"""
        result = await self.session.execute(
            select(Candidate).where(Candidate.candidate_number == candidate_number)
        )
        return result.scalar_one_or_none()

    async def update(self, candidate_id: UUID, update_data: Dict[str, Any]) -> Optional[Candidate]:
        """
        Update candidate

        Args:
            candidate_id: Candidate UUID
            update_data: Dictionary with fields to update

        Returns:
            Updated candidate if found, None otherwise
        """
        candidate = await self.get_by_id(candidate_id)

        if not candidate:
            return None

        for key, value in update_data.items():
            if hasattr(candidate, key):
                setattr(candidate, key, value)

        await self.session.commit()
        await self.session.refresh(candidate)

        logger.info(f"Updated candidate: {candidate_id}")
        return candidate

    async def delete(self, candidate_id: UUID) -> bool:
        """
        Delete candidate together with every score it received

        Args:
            candidate_id: Candidate UUID

        Returns:
            True if deleted, False if not found
        """
        candidate = await self.get_by_id(candidate_id)

        if not candidate:
            return False

        result = await self.session.execute(
            delete(Score).where(Score.candidate_id == candidate_id)
        )
        await self.session.delete(candidate)
        await self.session.commit()

        logger.info(f"Deleted candidate {candidate_id} and {result.rowcount} scores")
        return True

    async def list_all(
        self,
        active: Optional[bool] = None,
        search: Optional[str] = None,
        skip: int = 0,
        limit: Optional[int] = None
    ) -> List[Candidate]:
        """
        List candidates ordered by candidate number

        Args:
            active: Only active (True) or only inactive (False) candidates
            search: Substring of the name or the candidate number
            skip: Number of records to skip
            limit: Maximum number of records to return

        Returns:
            List of candidates
        """
        stmt = select(Candidate)

        if active is not None:
            stmt = stmt.where(Candidate.is_active == active)

        if search:
            search_pattern = f"%{search}%"
            stmt = stmt.where(
                or_(
                    Candidate.name.ilike(search_pattern),
                    cast(Candidate.candidate_number, String).ilike(search_pattern)
                )
            )

        stmt = stmt.order_by(Candidate.candidate_number).offset(skip)
        if limit is not None:
            stmt = stmt.limit(limit)

        result = await self.session.execute(stmt)
        candidates = result.scalars().all()

        logger.debug(f"Listed {len(candidates)} candidates")
        return list(candidates)

    async def list_active(self) -> List[Candidate]:
        """Active candidates in candidate-number order"""
        return await self.list_all(active=True)

    async def count_active(self) -> int:
        """
        Count active candidates

        Returns:
            Number of active candidates
        """
        result = await self.session.execute(
            select(func.count()).select_from(Candidate).where(Candidate.is_active == True)
        )
        count = result.scalar()
        return count or 0
