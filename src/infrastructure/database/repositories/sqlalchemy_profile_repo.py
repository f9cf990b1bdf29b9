"""SQLAlchemy implementation of Profile repository."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.profile import Gender, Profile, ProfilePage
from infrastructure.database.errors import storage_errors
from infrastructure.database.models import ProfileModel


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: int) -> Profile | None:
        """Get a profile by ID."""
        with storage_errors("Failed to fetch profile"):
            model = await self._get_model(id)
        return self._to_entity(model) if model else None

    async def get_latest(self) -> Profile | None:
        """Get the most recently created profile."""
        stmt = select(ProfileModel).order_by(ProfileModel.id.desc()).limit(1)
        with storage_errors("Failed to fetch recent profile"):
            result = await self._session.execute(stmt)
            model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def list_page(self, page: int, page_size: int) -> ProfilePage:
        """Get one page of profiles ordered by ID descending."""
        offset = (page - 1) * page_size
        count_stmt = select(func.count()).select_from(ProfileModel)
        stmt = (
            select(ProfileModel)
            .order_by(ProfileModel.id.desc())
            .offset(offset)
            .limit(page_size)
        )
        with storage_errors("Failed to fetch profiles"):
            total = (await self._session.execute(count_stmt)).scalar() or 0
            result = await self._session.execute(stmt)
            items = [self._to_entity(model) for model in result.scalars()]
        return ProfilePage(items=items, total=total, page=page, page_size=page_size)

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile."""
        model = self._to_model(profile)
        with storage_errors("Failed to save profile", email=profile.email):
            self._session.add(model)
            await self._session.flush()
            await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, profile: Profile) -> Profile | None:
        """Replace every mutable field of an existing profile."""
        if profile.id is None:
            return None
        with storage_errors("Failed to update profile", email=profile.email):
            model = await self._get_model(profile.id)
            if not model:
                return None

            model.name = profile.name
            model.age = profile.age
            model.email = profile.email
            model.phone_number = profile.phone_number
            model.date_of_birth = profile.date_of_birth
            model.gender = profile.gender.value

            await self._session.flush()
        return self._to_entity(model)

    async def delete(self, id: int) -> Profile | None:
        """Delete a profile, returning the row as it was."""
        with storage_errors("Failed to delete profile"):
            model = await self._get_model(id)
            if not model:
                return None

            deleted = self._to_entity(model)
            await self._session.delete(model)
            await self._session.flush()
        return deleted

    async def _get_model(self, id: int) -> ProfileModel | None:
        stmt = select(ProfileModel).where(ProfileModel.id == id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _to_entity(self, model: ProfileModel) -> Profile:
        """Convert ORM model to domain entity."""
        return Profile(
            id=model.id,
            name=model.name,
            age=model.age,
            email=model.email,
            phone_number=model.phone_number,
            date_of_birth=model.date_of_birth,
            gender=Gender(model.gender),
            created_at=model.created_at,
        )

    def _to_model(self, entity: Profile) -> ProfileModel:
        """Convert domain entity to ORM model. The store assigns the ID."""
        return ProfileModel(
            id=entity.id,
            name=entity.name,
            age=entity.age,
            email=entity.email,
            phone_number=entity.phone_number,
            date_of_birth=entity.date_of_birth,
            gender=entity.gender.value,
            created_at=entity.created_at,
        )
