"""User repository for database operations"""

from typing import Optional, List, Dict, Any
from uuid import UUID
from sqlalchemy import select, delete, or_, func
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.models.user import User, UserRole
from backend.app.models.score import Score
from backend.app.core.logging import get_logger

logger = get_logger(__name__)


class UserRepository:
    """Repository for User CRUD operations; judges are users with the judge role"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(
        self,
        name: str,
        email: str,
        role: UserRole = UserRole.JUDGE,
        is_active: bool = True
    ) -> User:
        """Create a new user"""
        user = User(
            name=name,
            email=email,
            role=role,
            is_active=is_active
        )

        self.session.add(user)
        await self.session.commit()
        await self.session.refresh(user)

        logger.info(f"Created user: {user.email} with role {user.role.value}")
        return user

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        result = await self.session.execute(
            select(User).where(User.id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_judge(self, judge_id: UUID) -> Optional[User]:
        """Get user by ID only if it has the judge role"""
        result = await self.session.execute(
            select(User).where(User.id == judge_id, User.role == UserRole.JUDGE)
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email"""
        result = await self.session.execute(
            select(User).where(User.email == email)
        )
        return result.scalar_one_or_none()

    async def list_judges(
        self,
        active: Optional[bool] = None,
        search: Optional[str] = None,
        skip: int = 0,
        limit: Optional[int] = None
    ) -> List[User]:
        """
        List judges ordered by name

        Args:
            active: Only active (True) or only inactive (False) judges
            search: Substring of the name or the email
            skip: Number of records to skip
            limit: Maximum number of records to return

        Returns:
            List of judges
        """
        stmt = select(User).where(User.role == UserRole.JUDGE)

        if active is not None:
            stmt = stmt.where(User.is_active == active)

        if search:
            search_pattern = f"%{search}%"
            stmt = stmt.where(
                or_(
                    User.name.ilike(search_pattern),
                    User.email.ilike(search_pattern)
                )
            )

        stmt = stmt.order_by(User.name).offset(skip)
        if limit is not None:
            stmt = stmt.limit(limit)

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_active_judges(self) -> int:
        """Count judges that may currently submit scores"""
        result = await self.session.execute(
            select(func.count()).select_from(User).where(
                User.role == UserRole.JUDGE,
                User.is_active == True
            )
        )
        return result.scalar() or 0

    async def update(self, user: User, update_data: Dict[str, Any]) -> User:
        """Update user"""
        for key, value in update_data.items():
            if hasattr(user, key):
                setattr(user, key, value)

        await self.session.commit()
        await self.session.refresh(user)
        logger.info(f"Updated user: {user.email}")
        return user

    async def delete(self, user: User) -> None:
        """Delete user and the scores it submitted"""
        result = await self.session.execute(
            delete(Score).where(Score.judge_id == user.id)
        )
        await self.session.delete(user)
        await self.session.commit()
        logger.info(f"Deleted user {user.email} and {result.rowcount} scores")
