"""Score model"""

from sqlalchemy import Column, String, Numeric, ForeignKey, Uuid, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship
from backend.app.core.database import Base
from backend.app.models.base import TimestampMixin
import uuid
import enum


class ScoreCategory(str, enum.Enum):
    """Every category a score row may carry; the active weight scheme narrows this"""
    SPORTS_ATTIRE = "sports_attire"
    SWIMSUIT = "swimsuit"
    TALENT = "talent"
    GOWN = "gown"
    QA = "qa"


_CATEGORY_VALUES = ", ".join(f"'{c.value}'" for c in ScoreCategory)


class Score(Base, TimestampMixin):
    """A single judge's rating of one candidate in one category; write-once"""

    __tablename__ = "scores"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    judge_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    candidate_id = Column(Uuid, ForeignKey("candidates.id", ondelete="CASCADE"), nullable=False, index=True)
    category = Column(String(32), nullable=False, index=True)
    value = Column(Numeric(5, 2), nullable=False)  # 0.00 to 100.00

    # Relationships
    judge = relationship("User", back_populates="scores")
    candidate = relationship("Candidate", back_populates="scores")

    __table_args__ = (
        UniqueConstraint('judge_id', 'candidate_id', 'category', name='uq_judge_candidate_category'),
        CheckConstraint("value >= 0 AND value <= 100", name="ck_score_value_range"),
        CheckConstraint(f"category IN ({_CATEGORY_VALUES})", name="ck_score_category"),
    )

    def __repr__(self):
        return (
            f"<Score(id={self.id}, judge_id={self.judge_id}, candidate_id={self.candidate_id}, "
            f"category={self.category}, value={self.value})>"
        )
