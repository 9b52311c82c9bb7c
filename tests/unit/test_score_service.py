"""Unit tests for score submission"""

import pytest
from decimal import Decimal
from unittest.mock import Mock, AsyncMock
from uuid import uuid4

from backend.app.services.score_service import ScoreService, normalize_score_value
from backend.app.repositories.score_repository import ScoreRepository
from backend.app.repositories.candidate_repository import CandidateRepository
from backend.app.repositories.user_repository import UserRepository
from backend.app.models.user import User, UserRole
from backend.app.models.candidate import Candidate
from backend.app.models.score import Score
from backend.app.scoring.weights import STANDARD_WEIGHTS, TALENT_WEIGHTS
from backend.app.core.exceptions import (
    ValidationException, NotFoundException, ForbiddenException, ConflictException
)


def make_judge(is_active=True):
    return User(id=uuid4(), name="Judge", email="judge@pageant.test", role=UserRole.JUDGE, is_active=is_active)


def make_candidate(is_active=True):
    return Candidate(id=uuid4(), candidate_number=1, name="Candidate 1", is_active=is_active)


class TestNormalizeScoreValue:
    """Value validation and rounding"""

    @pytest.mark.parametrize("value, expected", [
        (0, Decimal("0.00")),
        (100, Decimal("100.00")),
        (85.5, Decimal("85.50")),
        (85.555, Decimal("85.56")),
        (85.554, Decimal("85.55")),
        ("72.125", Decimal("72.13")),
        (Decimal("99.999"), Decimal("100.00")),
    ])
    def test_rounds_half_up_to_two_places(self, value, expected):
        assert normalize_score_value(value) == expected

    @pytest.mark.parametrize("value", [-0.01, 100.01, 100.004, 1000, -5])
    def test_out_of_range(self, value):
        with pytest.raises(ValidationException):
            normalize_score_value(value)

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), "abc", True, None])
    def test_not_a_finite_number(self, value):
        with pytest.raises(ValidationException):
            normalize_score_value(value)


class TestScoreService:
    """Unit tests for ScoreService"""

    @pytest.fixture
    def judge(self):
        return make_judge()

    @pytest.fixture
    def candidate(self):
        return make_candidate()

    @pytest.fixture
    def service(self, judge, candidate):
        score_repo = Mock(spec=ScoreRepository)
        candidate_repo = Mock(spec=CandidateRepository)
        user_repo = Mock(spec=UserRepository)

        user_repo.get_judge = AsyncMock(return_value=judge)
        candidate_repo.get_by_id = AsyncMock(return_value=candidate)
        score_repo.get_by_key = AsyncMock(return_value=None)
        score_repo.create = AsyncMock(side_effect=lambda data: Score(id=uuid4(), **data))

        return ScoreService(score_repo, candidate_repo, user_repo, weights=STANDARD_WEIGHTS)

    async def test_submit_score(self, service, judge, candidate):
        score = await service.submit_score(judge.id, candidate.id, "gown", 87.456)

        assert score.value == Decimal("87.46")
        service.score_repo.create.assert_called_once_with({
            'judge_id': judge.id,
            'candidate_id': candidate.id,
            'category': "gown",
            'value': Decimal("87.46"),
        })

    async def test_invalid_category_checked_first(self, service, judge, candidate):
        """An unknown category fails before the value or any lookup is checked"""
        with pytest.raises(ValidationException) as exc_info:
            await service.submit_score(judge.id, candidate.id, "talent", 150)

        assert "category" in exc_info.value.message
        service.user_repo.get_judge.assert_not_called()

    async def test_value_checked_before_judge(self, service, judge, candidate):
        service.user_repo.get_judge = AsyncMock(return_value=None)

        with pytest.raises(ValidationException):
            await service.submit_score(judge.id, candidate.id, "qa", 101)

        service.user_repo.get_judge.assert_not_called()

    async def test_category_allowed_by_talent_scheme(self, service, judge, candidate):
        service.weights = TALENT_WEIGHTS
        score = await service.submit_score(judge.id, candidate.id, "talent", 90)
        assert score.category == "talent"

    async def test_unknown_judge(self, service, candidate):
        service.user_repo.get_judge = AsyncMock(return_value=None)

        with pytest.raises(NotFoundException):
            await service.submit_score(uuid4(), candidate.id, "qa", 80)

    async def test_inactive_judge(self, service, candidate):
        inactive = make_judge(is_active=False)
        service.user_repo.get_judge = AsyncMock(return_value=inactive)

        with pytest.raises(ForbiddenException) as exc_info:
            await service.submit_score(inactive.id, candidate.id, "qa", 80)

        assert exc_info.value.status_code == 403
        service.candidate_repo.get_by_id.assert_not_called()

    async def test_unknown_candidate(self, service, judge):
        service.candidate_repo.get_by_id = AsyncMock(return_value=None)

        with pytest.raises(NotFoundException):
            await service.submit_score(judge.id, uuid4(), "qa", 80)

    async def test_inactive_candidate(self, service, judge):
        inactive = make_candidate(is_active=False)
        service.candidate_repo.get_by_id = AsyncMock(return_value=inactive)

        with pytest.raises(ForbiddenException):
            await service.submit_score(judge.id, inactive.id, "qa", 80)

        service.score_repo.create.assert_not_called()

    async def test_duplicate_rejected(self, service, judge, candidate):
        existing = Score(id=uuid4(), judge_id=judge.id, candidate_id=candidate.id, category="qa", value=Decimal("80"))
        service.score_repo.get_by_key = AsyncMock(return_value=existing)

        with pytest.raises(ConflictException) as exc_info:
            await service.submit_score(judge.id, candidate.id, "qa", 95)

        assert exc_info.value.status_code == 409
        service.score_repo.create.assert_not_called()

    async def test_concurrent_duplicate_surfaces_as_conflict(self, service, judge, candidate):
        """The pre-check passes but the insert loses to another writer"""
        service.score_repo.create = AsyncMock(side_effect=ConflictException("Score already submitted"))

        with pytest.raises(ConflictException):
            await service.submit_score(judge.id, candidate.id, "qa", 95)

    async def test_list_scores_validates_category(self, service):
        service.score_repo.list_scores = AsyncMock(return_value=[])

        with pytest.raises(ValidationException):
            await service.list_scores(category="evening_gown")

    async def test_judge_scores_unknown_judge(self, service):
        service.user_repo.get_judge = AsyncMock(return_value=None)

        with pytest.raises(NotFoundException):
            await service.judge_scores(uuid4())
