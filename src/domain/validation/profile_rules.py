"""Field rules for profile input.

Every rule is a pure function returning a ``FieldResult``. Rules that depend
on the current date take ``today`` so callers (and tests) control the clock.
The age/date-of-birth agreement spans two fields and is recomputed from both
current values every time, whatever the individual field results are.
"""

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Mapping, Optional

from domain.entities.email_verification import EmailVerificationVerdict
from domain.entities.profile import Gender

MIN_NAME_LENGTH = 2
# Matches the String(255) columns in the profiles table
MAX_NAME_LENGTH = 255
MAX_EMAIL_LENGTH = 255
MIN_AGE = 1
MAX_AGE = 120
PHONE_DIGITS = 10

PROFILE_FIELDS = ("name", "age", "email", "phone_number", "date_of_birth", "gender")

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_PHONE_FORMATTING = re.compile(r"[\s\-()]")
_PHONE_PATTERN = re.compile(r"^[0-9]{%d}$" % PHONE_DIGITS)
_INTEGER_PATTERN = re.compile(r"^[+-]?[0-9]+$")
_ISO_DATE_PATTERN = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")


@dataclass(frozen=True, slots=True)
class FieldResult:
    """Outcome of one rule: validity plus a user-facing message."""

    is_valid: bool
    message: str = ""

    @classmethod
    def ok(cls) -> "FieldResult":
        return cls(True, "")

    @classmethod
    def fail(cls, message: str) -> "FieldResult":
        return cls(False, message)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_age(value: Any) -> Optional[int]:
    """Return ``value`` as an int, or None if it is not a whole number."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str) and _INTEGER_PATTERN.match(value.strip()):
        return int(value.strip())
    return None


def parse_date(value: Any) -> Optional[date]:
    """Return ``value`` as a date. Strings must be exactly ``YYYY-MM-DD``."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and _ISO_DATE_PATTERN.match(value.strip()):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            return None
    return None


def normalize_phone(value: str) -> str:
    """Strip spaces, dashes and parentheses."""
    return _PHONE_FORMATTING.sub("", value)


def whole_years_between(born: date, today: date) -> int:
    """Completed years from ``born`` to ``today``."""
    had_birthday = (today.month, today.day) >= (born.month, born.day)
    return today.year - born.year - (0 if had_birthday else 1)


def validate_name(value: Any) -> FieldResult:
    if _is_blank(value):
        return FieldResult.fail("Name is required")
    if len(str(value).strip()) < MIN_NAME_LENGTH:
        return FieldResult.fail(f"Name must be at least {MIN_NAME_LENGTH} characters")
    if len(str(value).strip()) > MAX_NAME_LENGTH:
        return FieldResult.fail(f"Name must be at most {MAX_NAME_LENGTH} characters")
    return FieldResult.ok()


def validate_age(value: Any) -> FieldResult:
    if _is_blank(value):
        return FieldResult.fail("Age is required")
    age = parse_age(value)
    if age is None:
        return FieldResult.fail("Age must be a whole number")
    if not MIN_AGE <= age <= MAX_AGE:
        return FieldResult.fail(f"Age must be between {MIN_AGE} and {MAX_AGE}")
    return FieldResult.ok()


def validate_email_format(value: Any) -> FieldResult:
    """Local syntax check only; deliverability is decided remotely."""
    if _is_blank(value):
        return FieldResult.fail("Email is required")
    if not isinstance(value, str) or not EMAIL_PATTERN.match(value.strip()):
        return FieldResult.fail("Please enter a valid email format")
    if len(value.strip()) > MAX_EMAIL_LENGTH:
        return FieldResult.fail(f"Email must be at most {MAX_EMAIL_LENGTH} characters")
    return FieldResult.ok()


def validate_phone(value: Any) -> FieldResult:
    if _is_blank(value):
        return FieldResult.fail("Phone number is required")
    if not isinstance(value, str) or not _PHONE_PATTERN.match(normalize_phone(value)):
        return FieldResult.fail(f"Please enter exactly {PHONE_DIGITS} digits")
    return FieldResult.ok()


def validate_date_of_birth(value: Any, today: Optional[date] = None) -> FieldResult:
    if _is_blank(value):
        return FieldResult.fail("Date of birth is required")
    today = today or date.today()
    born = parse_date(value)
    if born is None or born >= today:
        return FieldResult.fail("Please enter a valid birth date")
    return FieldResult.ok()


def validate_gender(value: Any) -> FieldResult:
    if _is_blank(value):
        return FieldResult.fail("Please select your gender")
    if value not in {g.value for g in Gender}:
        allowed = ", ".join(g.value for g in Gender)
        return FieldResult.fail(f"Gender must be one of {allowed}")
    return FieldResult.ok()


def validate_age_date_agreement(
    age: Any, date_of_birth: Any, today: Optional[date] = None
) -> FieldResult:
    """Entered age must equal the completed years since the date of birth."""
    parsed_age = parse_age(age) if not _is_blank(age) else None
    born = parse_date(date_of_birth) if not _is_blank(date_of_birth) else None
    if parsed_age is None or born is None:
        return FieldResult.fail("Age and date of birth are both required")
    if whole_years_between(born, today or date.today()) != parsed_age:
        return FieldResult.fail("Age and date of birth do not match")
    return FieldResult.ok()


@dataclass
class ProfileFormValidation:
    """Per-field results plus the cross-field agreement for one set of values."""

    email: str
    fields: dict[str, FieldResult] = field(default_factory=dict)
    age_date_agreement: FieldResult = field(default_factory=FieldResult.ok)

    @property
    def fields_valid(self) -> bool:
        """Every field and the agreement rule hold (ignores email verification)."""
        return all(r.is_valid for r in self.fields.values()) and self.age_date_agreement.is_valid

    @property
    def errors(self) -> dict[str, str]:
        errors = {name: r.message for name, r in self.fields.items() if not r.is_valid}
        if not self.age_date_agreement.is_valid:
            errors["age_date_agreement"] = self.age_date_agreement.message
        return errors

    def is_verdict_fresh(self, verdict: Optional[EmailVerificationVerdict]) -> bool:
        """A verdict only counts for the address currently in the form."""
        return verdict is not None and verdict.email.strip().lower() == self.email.strip().lower()

    def is_valid(self, verdict: Optional[EmailVerificationVerdict]) -> bool:
        """Overall form validity, including a fresh positive email verdict."""
        return self.fields_valid and self.is_verdict_fresh(verdict) and verdict.deliverable  # type: ignore[union-attr]


def validate_profile_fields(
    data: Mapping[str, Any], today: Optional[date] = None
) -> ProfileFormValidation:
    """Run every field rule and the agreement rule over ``data``."""
    today = today or date.today()
    email = data.get("email")
    return ProfileFormValidation(
        email=email.strip() if isinstance(email, str) else "",
        fields={
            "name": validate_name(data.get("name")),
            "age": validate_age(data.get("age")),
            "email": validate_email_format(email),
            "phone_number": validate_phone(data.get("phone_number")),
            "date_of_birth": validate_date_of_birth(data.get("date_of_birth"), today),
            "gender": validate_gender(data.get("gender")),
        },
        age_date_agreement=validate_age_date_agreement(
            data.get("age"), data.get("date_of_birth"), today
        ),
    )


def missing_fields(data: Mapping[str, Any]) -> list[str]:
    """Names of required fields that are absent or blank."""
    return [name for name in PROFILE_FIELDS if _is_blank(data.get(name))]
