"""Pydantic schemas for Profile API."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from domain.entities.profile import Gender


class ProfileWrite(BaseModel):
    """Schema for creating or replacing a Profile.

    Fields are deliberately loose: the profile rules produce the
    user-facing messages, so a missing or malformed value must reach them
    instead of failing schema parsing.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Ann Lee",
                "age": 30,
                "email": "ann@example.com",
                "phone_number": "(123) 456-7890",
                "date_of_birth": "1994-01-01",
                "gender": "Female",
            }
        },
    )

    name: str | None = None
    age: int | str | None = None
    email: str | None = None
    phone_number: str | None = None
    date_of_birth: str | None = None
    gender: str | None = None


class ProfileResponse(BaseModel):
    """Schema for Profile response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    age: int
    email: str
    phone_number: str
    date_of_birth: date
    gender: Gender
    created_at: datetime


class ProfileMutationResponse(BaseModel):
    """Schema for create/update/delete results."""

    message: str
    data: ProfileResponse


class ProfileListResponse(BaseModel):
    """Schema for one page of Profiles."""

    profiles: list[ProfileResponse]
    current_page: int = Field(serialization_alias="currentPage")
    total_pages: int = Field(serialization_alias="totalPages")
    total: int
    has_next: bool = Field(serialization_alias="hasNext")
    has_prev: bool = Field(serialization_alias="hasPrev")
