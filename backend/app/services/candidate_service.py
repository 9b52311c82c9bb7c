"""Candidate service for business logic operations"""

from typing import List, Optional
from uuid import UUID

from backend.app.repositories.candidate_repository import CandidateRepository
from backend.app.models.candidate import Candidate
from backend.app.core.logging import get_logger
from backend.app.core.exceptions import ValidationException, NotFoundException, ConflictException

logger = get_logger(__name__)

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 255


class CandidateService:
    """Service for candidate-related business logic"""

    def __init__(self, candidate_repository: CandidateRepository):
        """
        Initialize candidate service

        Args:
            candidate_repository: Candidate repository
        """
        self.candidate_repo = candidate_repository

    async def create_candidate(
        self,
        candidate_number: int,
        name: str,
        is_active: bool = True
    ) -> Candidate:
        """
        Register a candidate

        Args:
            candidate_number: Unique positive display number
            name: Candidate name
            is_active: Whether the candidate takes part in judging

        Returns:
            Created candidate

        Raises:
            ValidationException: If the number or name is invalid
            ConflictException: If the number is already taken
        """
        logger.info(f"Creating candidate #{candidate_number}")

        name = self._validate_name(name)
        self._validate_number(candidate_number)
        await self._ensure_number_free(candidate_number)

        return await self.candidate_repo.create({
            'candidate_number': candidate_number,
            'name': name,
            'is_active': is_active,
        })

    async def get_candidate(self, candidate_id: UUID) -> Candidate:
        """
        Get candidate by ID

        Raises:
            NotFoundException: If candidate not found
        """
        candidate = await self.candidate_repo.get_by_id(candidate_id)
        if not candidate:
            raise NotFoundException(f"Candidate not found: {candidate_id}")
        return candidate

    async def list_candidates(
        self,
        active: Optional[bool] = None,
        search: Optional[str] = None,
        skip: int = 0,
        limit: Optional[int] = None
    ) -> List[Candidate]:
        """List candidates in candidate-number order"""
        search = search.strip() if search else None
        return await self.candidate_repo.list_all(active=active, search=search, skip=skip, limit=limit)

    async def update_candidate(
        self,
        candidate_id: UUID,
        candidate_number: Optional[int] = None,
        name: Optional[str] = None,
        is_active: Optional[bool] = None
    ) -> Candidate:
        """
        Update candidate fields

        Raises:
            NotFoundException: If candidate not found
            ValidationException: If the number or name is invalid
            ConflictException: If the new number belongs to another candidate
        """
        candidate = await self.get_candidate(candidate_id)

        update_data = {}
        if name is not None:
            update_data['name'] = self._validate_name(name)
        if candidate_number is not None and candidate_number != candidate.candidate_number:
            self._validate_number(candidate_number)
            await self._ensure_number_free(candidate_number)
            update_data['candidate_number'] = candidate_number
        if is_active is not None:
            update_data['is_active'] = is_active

        if not update_data:
            return candidate

        updated = await self.candidate_repo.update(candidate_id, update_data)
        logger.info(f"Updated candidate {candidate_id}: {sorted(update_data)}")
        return updated

    async def toggle_status(self, candidate_id: UUID) -> Candidate:
        """Flip a candidate between active and inactive"""
        candidate = await self.get_candidate(candidate_id)
        return await self.candidate_repo.update(candidate_id, {'is_active': not candidate.is_active})

    async def delete_candidate(self, candidate_id: UUID) -> None:
        """
        Delete a candidate and every score it received

        Raises:
            NotFoundException: If candidate not found
        """
        deleted = await self.candidate_repo.delete(candidate_id)
        if not deleted:
            raise NotFoundException(f"Candidate not found: {candidate_id}")

    async def _ensure_number_free(self, candidate_number: int) -> None:
        if await self.candidate_repo.get_by_number(candidate_number):
            raise ConflictException(
                f"Candidate number already exists: {candidate_number}",
                details={"candidate_number": candidate_number}
            )

    def _validate_number(self, candidate_number: int) -> None:
        if isinstance(candidate_number, bool) or not isinstance(candidate_number, int) or candidate_number < 1:
            raise ValidationException("Candidate number must be a positive integer")

    def _validate_name(self, name: str) -> str:
        name = (name or "").strip()
        if len(name) < NAME_MIN_LENGTH or len(name) > NAME_MAX_LENGTH:
            raise ValidationException(
                f"Candidate name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters"
            )
        return name
