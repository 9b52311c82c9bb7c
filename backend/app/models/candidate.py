"""Candidate model"""

from sqlalchemy import Column, String, Integer, Boolean, Uuid, CheckConstraint
from sqlalchemy.orm import relationship
from backend.app.core.database import Base
from backend.app.models.base import TimestampMixin
import uuid


class Candidate(Base, TimestampMixin):
    """Pageant candidate"""

    __tablename__ = "candidates"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    candidate_number = Column(Integer, unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False, index=True)
    is_active = Column(Boolean, nullable=False, default=True, index=True)

    scores = relationship("Score", back_populates="candidate", passive_deletes=True)

    __table_args__ = (
        CheckConstraint("candidate_number > 0", name="ck_candidate_number_positive"),
    )

    def __repr__(self):
        return f"<Candidate(id={self.id}, number={self.candidate_number}, name={self.name})>"
