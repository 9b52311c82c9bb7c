"""Judge and progress schemas"""

from typing import List, Optional, Dict
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

from backend.app.schemas.candidate import CandidateResponse


class JudgeCreateRequest(BaseModel):
    """Request schema for creating a judge"""
    name: str = Field(..., min_length=1, max_length=255, description="Judge name")
    email: EmailStr = Field(..., description="Unique email address")
    is_active: bool = Field(default=True, description="Whether the judge may submit scores")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError('Judge name cannot be empty')
        return v.strip()


class JudgeUpdateRequest(BaseModel):
    """Request schema for updating a judge"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    is_active: Optional[bool] = None


class ProgressResponse(BaseModel):
    """One judge's progress in one category"""
    total: int = Field(..., description="Active candidates")
    completed: int = Field(..., description="Active candidates already scored")
    remaining: int
    percentage: float = Field(..., ge=0.0, description="Completion percentage, two decimals")


class CategoryProgressResponse(BaseModel):
    """All active judges' progress in one category"""
    total_possible: int = Field(..., description="Active judges x active candidates")
    submitted: int
    percentage: float


class ProgressSummaryResponse(BaseModel):
    """Competition-wide progress"""
    total_candidates: int
    total_judges: int
    categories_progress: Dict[str, CategoryProgressResponse]


class JudgeResponse(BaseModel):
    """Response schema for judge data"""
    id: UUID
    name: str
    email: str
    role: str
    is_active: bool
    progress: Optional[Dict[str, ProgressResponse]] = Field(
        None, description="Progress per category"
    )
    created_at: datetime

    @classmethod
    def from_user(cls, user, progress: Optional[Dict[str, Dict]] = None) -> "JudgeResponse":
        """Create response from User model"""
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role.value,
            is_active=user.is_active,
            progress=progress,
            created_at=user.created_at
        )


class JudgeListResponse(BaseModel):
    judges: List[JudgeResponse]
    total: int


class NextCandidateResponse(BaseModel):
    """Next candidate a judge should score in a category"""
    category: str
    candidate: Optional[CandidateResponse] = Field(
        None, description="None once every active candidate has been scored"
    )
    progress: ProgressResponse
    completed: bool


class JudgingCandidateResponse(BaseModel):
    """Candidate entry on a judge's scoring sheet"""
    id: UUID
    candidate_number: int
    name: str
    has_voted: bool


class JudgingListResponse(BaseModel):
    """A judge's scoring sheet for one category"""
    category: str
    candidates: List[JudgingCandidateResponse]
    progress: ProgressResponse
