"""Judge service for business logic operations"""

from typing import List, Optional
from uuid import UUID

from backend.app.repositories.user_repository import UserRepository
from backend.app.models.user import User, UserRole
from backend.app.core.logging import get_logger
from backend.app.core.exceptions import ValidationException, NotFoundException, ConflictException

logger = get_logger(__name__)


class JudgeService:
    """Service for managing judge accounts"""

    def __init__(self, user_repository: UserRepository):
        self.user_repo = user_repository

    async def create_judge(self, name: str, email: str, is_active: bool = True) -> User:
        """
        Create a judge

        Raises:
            ValidationException: If the name is blank
            ConflictException: If the email is already registered
        """
        name = self._validate_name(name)
        email = email.strip().lower()
        await self._ensure_email_free(email)

        judge = await self.user_repo.create(name=name, email=email, role=UserRole.JUDGE, is_active=is_active)
        logger.info(f"Created judge: {judge.id}")
        return judge

    async def get_judge(self, judge_id: UUID) -> User:
        """
        Get judge by ID

        Raises:
            NotFoundException: If no user with the judge role has this ID
        """
        judge = await self.user_repo.get_judge(judge_id)
        if not judge:
            raise NotFoundException(f"Judge not found: {judge_id}")
        return judge

    async def list_judges(
        self,
        active: Optional[bool] = None,
        search: Optional[str] = None,
        skip: int = 0,
        limit: Optional[int] = None
    ) -> List[User]:
        search = search.strip() if search else None
        return await self.user_repo.list_judges(active=active, search=search, skip=skip, limit=limit)

    async def update_judge(
        self,
        judge_id: UUID,
        name: Optional[str] = None,
        email: Optional[str] = None,
        is_active: Optional[bool] = None
    ) -> User:
        """
        Update judge fields

        Raises:
            NotFoundException: If judge not found
            ConflictException: If the new email belongs to another user
        """
        judge = await self.get_judge(judge_id)

        update_data = {}
        if name is not None:
            update_data['name'] = self._validate_name(name)
        if email is not None:
            email = email.strip().lower()
            if email != judge.email:
                await self._ensure_email_free(email)
                update_data['email'] = email
        if is_active is not None:
            update_data['is_active'] = is_active

        if not update_data:
            return judge
        return await self.user_repo.update(judge, update_data)

    async def toggle_status(self, judge_id: UUID) -> User:
        """Flip a judge between active and inactive"""
        judge = await self.get_judge(judge_id)
        return await self.user_repo.update(judge, {'is_active': not judge.is_active})

    async def delete_judge(self, judge_id: UUID) -> None:
        """Delete a judge and every score the judge submitted"""
        judge = await self.get_judge(judge_id)
        await self.user_repo.delete(judge)

    async def _ensure_email_free(self, email: str) -> None:
        if await self.user_repo.get_by_email(email):
            raise ConflictException(f"Email already registered: {email}", details={"email": email})

    def _validate_name(self, name: str) -> str:
        name = (name or "").strip()
        if not name:
            raise ValidationException("Judge name must not be empty")
        return name
