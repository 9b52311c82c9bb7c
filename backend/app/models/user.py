"""User model"""

from sqlalchemy import Column, String, Boolean, Uuid, Enum as SQLEnum
from sqlalchemy.orm import relationship
from backend.app.core.database import Base
from backend.app.models.base import TimestampMixin
import uuid
import enum


class UserRole(str, enum.Enum):
    """User role enumeration"""
    ADMIN = "admin"
    JUDGE = "judge"


class User(Base, TimestampMixin):
    """User model; judges are users with the judge role"""

    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    role = Column(
        SQLEnum(UserRole, values_callable=lambda roles: [r.value for r in roles]),
        nullable=False,
        default=UserRole.JUDGE
    )
    is_active = Column(Boolean, nullable=False, default=True, index=True)

    # Scores are removed by the database (ON DELETE CASCADE) or explicitly by
    # the repository, never loaded just to be deleted
    scores = relationship("Score", back_populates="judge", passive_deletes=True)

    @property
    def is_judge(self) -> bool:
        return self.role == UserRole.JUDGE

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
