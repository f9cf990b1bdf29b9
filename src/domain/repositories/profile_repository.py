"""Profile repository protocol."""

from typing import Protocol

from domain.entities.profile import Profile, ProfilePage


class IProfileRepository(Protocol):
    """Repository interface for Profile entities."""

    async def get(self, id: int) -> Profile | None:
        """Get a profile by ID."""
        ...

    async def get_latest(self) -> Profile | None:
        """Get the profile with the highest ID, if any."""
        ...

    async def list_page(self, page: int, page_size: int) -> ProfilePage:
        """Get one page of profiles, newest (highest ID) first."""
        ...

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile. Raises DuplicateEmailError on an email collision."""
        ...

    async def update(self, profile: Profile) -> Profile | None:
        """Replace the mutable fields of an existing profile, or return None."""
        ...

    async def delete(self, id: int) -> Profile | None:
        """Delete a profile and return its prior state, or None if missing."""
        ...
