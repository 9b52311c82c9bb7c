"""Candidate schemas for API requests and responses"""

from typing import List, Optional, Dict
from datetime import datetime
from pydantic import BaseModel, Field, field_validator
from uuid import UUID


class CandidateCreateRequest(BaseModel):
    """Request schema for registering a candidate"""
    candidate_number: int = Field(..., ge=1, description="Unique display number")
    name: str = Field(..., min_length=2, max_length=255, description="Candidate name")
    is_active: bool = Field(default=True, description="Whether the candidate takes part in judging")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if len(v.strip()) < 2:
            raise ValueError('Candidate name must be at least 2 characters')
        return v.strip()


class CandidateUpdateRequest(BaseModel):
    """Request schema for updating a candidate"""
    candidate_number: Optional[int] = Field(None, ge=1, description="Unique display number")
    name: Optional[str] = Field(None, min_length=2, max_length=255, description="Candidate name")
    is_active: Optional[bool] = Field(None, description="Whether the candidate takes part in judging")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if v is not None and len(v.strip()) < 2:
            raise ValueError('Candidate name must be at least 2 characters')
        return v.strip() if v is not None else v


class CandidateResponse(BaseModel):
    """Response schema for candidate data"""
    id: UUID
    candidate_number: int
    name: str
    is_active: bool
    scores: Optional[Dict[str, float]] = Field(
        None, description="Category averages and weighted total"
    )
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_candidate(cls, candidate, scores: Optional[Dict[str, float]] = None) -> "CandidateResponse":
        """Create response from Candidate model"""
        return cls(
            id=candidate.id,
            candidate_number=candidate.candidate_number,
            name=candidate.name,
            is_active=candidate.is_active,
            scores=scores,
            created_at=candidate.created_at,
            updated_at=candidate.updated_at
        )


class CandidateListResponse(BaseModel):
    """Response schema for candidate listings"""
    candidates: List[CandidateResponse]
    total: int
