"""Integration tests for the SQLAlchemy profile repository."""

from datetime import date

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import DuplicateEmailError
from domain.entities.profile import Gender, Profile
from infrastructure.database.repositories.sqlalchemy_profile_repo import (
    SQLAlchemyProfileRepository,
)


def _new_profile(email: str = "ann@example.com", **overrides) -> Profile:
    values = {
        "name": "Ann Lee",
        "age": 30,
        "email": email,
        "phone_number": "1234567890",
        "date_of_birth": date(1994, 1, 1),
        "gender": Gender.FEMALE,
    }
    values.update(overrides)
    return Profile(**values)


@pytest.fixture
def repo(db_session: AsyncSession) -> SQLAlchemyProfileRepository:
    return SQLAlchemyProfileRepository(db_session)


class TestCreateAndGet:
    @pytest.mark.asyncio
    async def test_create_assigns_id(self, repo: SQLAlchemyProfileRepository):
        created = await repo.create(_new_profile())

        assert created.id is not None
        fetched = await repo.get(created.id)
        assert fetched is not None
        assert fetched.email == "ann@example.com"
        assert fetched.date_of_birth == date(1994, 1, 1)
        assert fetched.gender is Gender.FEMALE

    @pytest.mark.asyncio
    async def test_get_missing(self, repo: SQLAlchemyProfileRepository):
        assert await repo.get(999) is None

    @pytest.mark.asyncio
    async def test_duplicate_email(self, repo: SQLAlchemyProfileRepository):
        await repo.create(_new_profile())

        with pytest.raises(DuplicateEmailError) as exc_info:
            await repo.create(_new_profile(name="Ann Other"))

        assert exc_info.value.message == "Email already exists"


class TestUpdate:
    @pytest.mark.asyncio
    async def test_replaces_fields(self, repo: SQLAlchemyProfileRepository):
        created = await repo.create(_new_profile())

        updated = await repo.update(
            _new_profile(id=created.id, name="Ann Smith", gender=Gender.OTHER)
        )

        assert updated is not None
        assert updated.id == created.id
        assert updated.name == "Ann Smith"
        assert updated.gender is Gender.OTHER
        assert updated.created_at == created.created_at

    @pytest.mark.asyncio
    async def test_missing_returns_none(self, repo: SQLAlchemyProfileRepository):
        assert await repo.update(_new_profile(id=404)) is None

    @pytest.mark.asyncio
    async def test_email_collision(self, repo: SQLAlchemyProfileRepository):
        await repo.create(_new_profile())
        bob = await repo.create(_new_profile(email="bob@example.com", name="Bob"))

        with pytest.raises(DuplicateEmailError):
            await repo.update(_new_profile(id=bob.id, name="Bob"))

    @pytest.mark.asyncio
    async def test_keeping_own_email_is_not_a_collision(
        self, repo: SQLAlchemyProfileRepository
    ):
        created = await repo.create(_new_profile())

        updated = await repo.update(_new_profile(id=created.id, age=30, name="Ann B"))

        assert updated is not None
        assert updated.email == "ann@example.com"


class TestListing:
    @pytest.mark.asyncio
    async def test_latest_is_highest_id(self, repo: SQLAlchemyProfileRepository):
        assert await repo.get_latest() is None

        await repo.create(_new_profile("a@example.com"))
        second = await repo.create(_new_profile("b@example.com"))

        latest = await repo.get_latest()
        assert latest is not None
        assert latest.id == second.id

    @pytest.mark.asyncio
    async def test_pages_newest_first(self, repo: SQLAlchemyProfileRepository):
        for i in range(23):
            await repo.create(_new_profile(f"user{i}@example.com"))

        first = await repo.list_page(1, 10)
        last = await repo.list_page(3, 10)

        assert first.total == 23
        assert first.total_pages == 3
        assert first.has_next and not first.has_prev
        assert len(first.items) == 10
        ids = [p.id for p in first.items]
        assert ids == sorted(ids, reverse=True)
        assert len(last.items) == 3
        assert not last.has_next and last.has_prev

    @pytest.mark.asyncio
    async def test_page_beyond_end_is_empty(self, repo: SQLAlchemyProfileRepository):
        await repo.create(_new_profile())

        page = await repo.list_page(5, 10)

        assert page.items == []
        assert page.total == 1


class TestDelete:
    @pytest.mark.asyncio
    async def test_returns_prior_state(self, repo: SQLAlchemyProfileRepository):
        created = await repo.create(_new_profile())

        deleted = await repo.delete(created.id)

        assert deleted is not None
        assert deleted.email == "ann@example.com"
        assert await repo.get(created.id) is None
        assert await repo.delete(created.id) is None
