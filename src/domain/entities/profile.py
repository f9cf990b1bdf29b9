"""Profile domain entity."""

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum


class Gender(StrEnum):
    """Fixed set of gender values accepted by the form."""

    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


@dataclass
class Profile:
    """Domain entity for a Profile.

    ``id`` is assigned by the store on insert and ``created_at`` never
    changes after creation.
    """

    name: str
    age: int
    email: str
    phone_number: str
    date_of_birth: date
    gender: Gender
    id: int | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Normalize gender to the enum."""
        if not isinstance(self.gender, Gender):
            self.gender = Gender(self.gender)


@dataclass(frozen=True, slots=True)
class ProfilePage:
    """Read-only value object: one page of profiles plus the overall count."""

    items: list[Profile]
    total: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.page_size) if self.page_size else 0

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1
