"""Score schemas for API requests and responses"""

from typing import List, Dict, Any
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class ScoreSubmitRequest(BaseModel):
    """Request schema for a judge submitting a score"""
    judge_id: UUID = Field(..., description="UUID of the judge submitting the score")
    candidate_id: UUID = Field(..., description="UUID of the candidate being scored")
    category: str = Field(..., description="Category of the active scoring scheme")
    value: float = Field(..., description="Score between 0 and 100; stored with two decimals")


class ScoreResponse(BaseModel):
    """Response schema for a stored score"""
    id: UUID = Field(..., description="Unique identifier for this score")
    judge_id: UUID
    candidate_id: UUID
    category: str
    value: float = Field(..., ge=0.0, le=100.0)
    created_at: datetime = Field(..., description="Timestamp when the score was submitted")

    @classmethod
    def from_score(cls, score) -> "ScoreResponse":
        """Create response from Score model"""
        return cls(
            id=score.id,
            judge_id=score.judge_id,
            candidate_id=score.candidate_id,
            category=score.category,
            value=float(score.value),
            created_at=score.created_at
        )


class ScoreDetailResponse(ScoreResponse):
    """Score with judge and candidate names; requires relationships to be loaded"""
    judge_name: str
    candidate_number: int
    candidate_name: str

    @classmethod
    def from_score(cls, score) -> "ScoreDetailResponse":
        return cls(
            id=score.id,
            judge_id=score.judge_id,
            candidate_id=score.candidate_id,
            category=score.category,
            value=float(score.value),
            created_at=score.created_at,
            judge_name=score.judge.name,
            candidate_number=score.candidate.candidate_number,
            candidate_name=score.candidate.name
        )


class ScoreListResponse(BaseModel):
    scores: List[ScoreDetailResponse]
    total: int


class CandidateScoresResponse(BaseModel):
    """Every score of a candidate plus its breakdown"""
    candidate_id: UUID
    candidate_number: int
    name: str
    breakdown: Dict[str, float] = Field(..., description="Category averages and weighted total")
    scores: Dict[str, List[ScoreDetailResponse]] = Field(..., description="Scores grouped by category")


class CategoryInfo(BaseModel):
    name: str
    label: str
    weight: float = Field(..., description="Weight in percent")


class CategoriesResponse(BaseModel):
    """Active scoring scheme"""
    scheme: str
    categories: List[CategoryInfo]


class RankingEntry(BaseModel):
    rank: int = Field(..., ge=1, description="1-based position after sorting")
    candidate_id: UUID
    candidate_number: int
    name: str
    value: float = Field(..., description="Value of the ranking metric")
    scores: Dict[str, float]


class AnalyticsResponse(BaseModel):
    """Leaderboard for a category or the weighted total"""
    metric: str
    weights: Dict[str, float]
    rankings: List[RankingEntry]


class ResultsResponse(BaseModel):
    """Export-ready result table; numeric cells are two-decimal strings"""
    title: str
    filter: str
    headings: List[str]
    results: List[Dict[str, Any]]
    generated_at: str
