"""Unit tests for candidate and judge management"""

import pytest
from unittest.mock import Mock, AsyncMock
from uuid import uuid4

from backend.app.services.candidate_service import CandidateService
from backend.app.services.judge_service import JudgeService
from backend.app.repositories.candidate_repository import CandidateRepository
from backend.app.repositories.user_repository import UserRepository
from backend.app.models.candidate import Candidate
from backend.app.models.user import User, UserRole
from backend.app.core.exceptions import ValidationException, NotFoundException, ConflictException


class TestCandidateService:
    """Unit tests for CandidateService"""

    @pytest.fixture
    def service(self):
        repo = Mock(spec=CandidateRepository)
        repo.get_by_number = AsyncMock(return_value=None)
        repo.create = AsyncMock(side_effect=lambda data: Candidate(id=uuid4(), **data))
        return CandidateService(repo)

    async def test_create_candidate_trims_name(self, service):
        candidate = await service.create_candidate(candidate_number=4, name="  Maria Clara  ")

        assert candidate.name == "Maria Clara"
        assert candidate.is_active is True

    async def test_duplicate_number(self, service):
        service.candidate_repo.get_by_number = AsyncMock(
            return_value=Candidate(id=uuid4(), candidate_number=4, name="Taken")
        )

        with pytest.raises(ConflictException):
            await service.create_candidate(candidate_number=4, name="Maria")

    @pytest.mark.parametrize("number", [0, -3, True])
    async def test_invalid_number(self, service, number):
        with pytest.raises(ValidationException):
            await service.create_candidate(candidate_number=number, name="Maria")

    @pytest.mark.parametrize("name", ["", " ", "A", "x" * 256])
    async def test_invalid_name(self, service, name):
        with pytest.raises(ValidationException):
            await service.create_candidate(candidate_number=1, name=name)

    async def test_get_missing_candidate(self, service):
        service.candidate_repo.get_by_id = AsyncMock(return_value=None)

        with pytest.raises(NotFoundException):
            await service.get_candidate(uuid4())

    async def test_toggle_status(self, service):
        candidate = Candidate(id=uuid4(), candidate_number=1, name="Ana", is_active=True)
        service.candidate_repo.get_by_id = AsyncMock(return_value=candidate)
        service.candidate_repo.update = AsyncMock(return_value=candidate)

        await service.toggle_status(candidate.id)

        service.candidate_repo.update.assert_called_once_with(candidate.id, {'is_active': False})

    async def test_update_to_same_number_skips_conflict_check(self, service):
        candidate = Candidate(id=uuid4(), candidate_number=1, name="Ana", is_active=True)
        service.candidate_repo.get_by_id = AsyncMock(return_value=candidate)
        service.candidate_repo.update = AsyncMock(return_value=candidate)

        await service.update_candidate(candidate.id, candidate_number=1, name="Ana Maria")

        service.candidate_repo.get_by_number.assert_not_called()
        service.candidate_repo.update.assert_called_once_with(candidate.id, {'name': "Ana Maria"})

    async def test_delete_missing_candidate(self, service):
        service.candidate_repo.delete = AsyncMock(return_value=False)

        with pytest.raises(NotFoundException):
            await service.delete_candidate(uuid4())


class TestJudgeService:
    """Unit tests for JudgeService"""

    @pytest.fixture
    def service(self):
        repo = Mock(spec=UserRepository)
        repo.get_by_email = AsyncMock(return_value=None)
        repo.create = AsyncMock(
            side_effect=lambda **kwargs: User(id=uuid4(), **kwargs)
        )
        return JudgeService(repo)

    async def test_create_judge(self, service):
        judge = await service.create_judge(name=" Judge Dredd ", email="Dredd@Pageant.com")

        assert judge.name == "Judge Dredd"
        assert judge.email == "dredd@pageant.com"
        assert judge.role == UserRole.JUDGE

    async def test_duplicate_email(self, service):
        service.user_repo.get_by_email = AsyncMock(
            return_value=User(id=uuid4(), name="Other", email="dredd@pageant.com", role=UserRole.JUDGE)
        )

        with pytest.raises(ConflictException):
            await service.create_judge(name="Judge Dredd", email="dredd@pageant.com")

    async def test_blank_name(self, service):
        with pytest.raises(ValidationException):
            await service.create_judge(name="   ", email="blank@pageant.com")

    async def test_admin_is_not_a_judge(self, service):
        service.user_repo.get_judge = AsyncMock(return_value=None)

        with pytest.raises(NotFoundException):
            await service.get_judge(uuid4())

    async def test_update_keeps_own_email(self, service):
        judge = User(id=uuid4(), name="Judge", email="judge@pageant.com", role=UserRole.JUDGE, is_active=True)
        service.user_repo.get_judge = AsyncMock(return_value=judge)
        service.user_repo.update = AsyncMock(return_value=judge)

        await service.update_judge(judge.id, email="JUDGE@pageant.com", is_active=False)

        service.user_repo.get_by_email.assert_not_called()
        service.user_repo.update.assert_called_once_with(judge, {'is_active': False})

    async def test_delete_judge(self, service):
        judge = User(id=uuid4(), name="Judge", email="judge@pageant.com", role=UserRole.JUDGE, is_active=True)
        service.user_repo.get_judge = AsyncMock(return_value=judge)
        service.user_repo.delete = AsyncMock(return_value=None)

        await service.delete_judge(judge.id)

        service.user_repo.delete.assert_called_once_with(judge)
