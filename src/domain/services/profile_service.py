"""Profile service layer with business logic."""

from datetime import date
from enum import StrEnum
from typing import Any, Callable, Mapping, Optional

import structlog

from core.exceptions import (
    AppException,
    EmailServiceUnavailableError,
    EmailUndeliverableError,
    ProfileNotFoundError,
    ValidationError,
)
from domain.entities.email_verification import EmailVerificationVerdict
from domain.entities.profile import Gender, Profile, ProfilePage
from domain.repositories.unit_of_work import IUnitOfWork
from domain.validation.profile_rules import (
    ProfileFormValidation,
    missing_fields,
    normalize_phone,
    parse_age,
    parse_date,
    validate_profile_fields,
)
from infrastructure.email.provider import IEmailVerifier

logger = structlog.get_logger()

STALE_VERDICT_REASON = "Verification result is for a different address"


class SubmissionStage(StrEnum):
    """Stages a create/update submission passes through."""

    IDLE = "idle"
    FIELD_VALIDATING = "field_validating"
    EMAIL_VERIFYING = "email_verifying"
    SUBMITTING = "submitting"
    COMMITTED = "committed"
    REJECTED = "rejected"


class ProfileService:
    """Service layer for Profile business logic.

    Create and update share one pipeline: local field rules, then the remote
    email verdict, then the repository call. Nothing reaches the store
    unless every earlier stage passed.
    """

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        email_verifier: IEmailVerifier,
        clock: Callable[[], date] = date.today,
        verify_unchanged_email_on_update: bool = True,
    ) -> None:
        self._uow_factory = uow_factory
        self._email_verifier = email_verifier
        self._clock = clock
        self._verify_unchanged_email_on_update = verify_unchanged_email_on_update

    async def list_profiles(self, page: int = 1, page_size: int = 10) -> ProfilePage:
        """Get one page of profiles, newest first."""
        async with self._uow_factory() as uow:
            return await uow.profiles.list_page(page, page_size)  # type: ignore[no-any-return]

    async def get(self, profile_id: int) -> Profile:
        """Get a specific profile."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(profile_id)
            if not profile:
                raise ProfileNotFoundError(profile_id)
            return profile

    async def get_latest(self) -> Optional[Profile]:
        """Get the most recently created profile, or None when there are none."""
        async with self._uow_factory() as uow:
            return await uow.profiles.get_latest()  # type: ignore[no-any-return]

    async def create(self, payload: Mapping[str, Any]) -> Profile:
        """Validate, verify the email, then persist a new profile."""
        log = logger.bind(operation="create")
        profile, validation = self._validate(payload, log)
        await self._require_deliverable_email(validation, log)

        self._enter(log, SubmissionStage.SUBMITTING)
        try:
            async with self._uow_factory() as uow:
                created = await uow.profiles.create(profile)
                await uow.commit()
        except AppException as exc:
            self._reject(log, SubmissionStage.SUBMITTING, exc)
            raise

        self._enter(log, SubmissionStage.COMMITTED, profile_id=created.id)
        return created

    async def update(self, profile_id: int, payload: Mapping[str, Any]) -> Profile:
        """Validate, verify the email, then replace an existing profile."""
        log = logger.bind(operation="update", profile_id=profile_id)
        profile, validation = self._validate(payload, log)
        profile.id = profile_id

        if self._verify_unchanged_email_on_update:
            await self._require_deliverable_email(validation, log)
        else:
            current = await self.get(profile_id)
            if current.email.lower() != profile.email.lower():
                await self._require_deliverable_email(validation, log)
            else:
                log.info("email_verification_skipped", reason="email unchanged")

        self._enter(log, SubmissionStage.SUBMITTING)
        try:
            async with self._uow_factory() as uow:
                updated = await uow.profiles.update(profile)
                if not updated:
                    raise ProfileNotFoundError(profile_id)
                await uow.commit()
        except AppException as exc:
            self._reject(log, SubmissionStage.SUBMITTING, exc)
            raise

        self._enter(log, SubmissionStage.COMMITTED)
        return updated

    async def delete(self, profile_id: int) -> Profile:
        """Hard-delete a profile and return what it held."""
        async with self._uow_factory() as uow:
            deleted = await uow.profiles.delete(profile_id)
            if not deleted:
                raise ProfileNotFoundError(profile_id)
            await uow.commit()
            logger.info("profile_deleted", profile_id=profile_id)
            return deleted

    async def verify_email(self, email: Optional[str]) -> EmailVerificationVerdict:
        """Run a standalone deliverability check (no persistence)."""
        if not email or not email.strip():
            raise ValidationError("Email is required", field_errors={"email": "Email is required"})
        return await self._email_verifier.verify(email.strip())

    def _validate(
        self, payload: Mapping[str, Any], log: Any
    ) -> tuple[Profile, ProfileFormValidation]:
        """Apply every local rule and build the normalized, unsaved profile."""
        self._enter(log, SubmissionStage.IDLE)
        self._enter(log, SubmissionStage.FIELD_VALIDATING)

        missing = missing_fields(payload)
        if missing:
            exc = ValidationError(
                "All fields are required",
                field_errors={name: "This field is required" for name in missing},
                details={"missing": missing, "stage": SubmissionStage.FIELD_VALIDATING.value},
            )
            self._reject(log, SubmissionStage.FIELD_VALIDATING, exc)
            raise exc

        validation = validate_profile_fields(payload, today=self._clock())
        if not validation.fields_valid:
            errors = validation.errors
            exc = ValidationError(
                "; ".join(errors.values()),
                field_errors=errors,
                details={"fields": errors, "stage": SubmissionStage.FIELD_VALIDATING.value},
            )
            self._reject(log, SubmissionStage.FIELD_VALIDATING, exc)
            raise exc

        profile = Profile(
            name=str(payload["name"]).strip(),
            age=parse_age(payload["age"]),  # type: ignore[arg-type]
            email=validation.email,
            phone_number=normalize_phone(payload["phone_number"]),
            date_of_birth=parse_date(payload["date_of_birth"]),  # type: ignore[arg-type]
            gender=Gender(payload["gender"]),
        )
        return profile, validation

    async def _require_deliverable_email(
        self, validation: ProfileFormValidation, log: Any
    ) -> EmailVerificationVerdict:
        """Get a fresh verdict for the submitted email; the form must then be valid."""
        self._enter(log, SubmissionStage.EMAIL_VERIFYING)
        email = validation.email
        try:
            verdict = await self._email_verifier.verify(email)
        except AppException as err:
            self._reject(log, SubmissionStage.EMAIL_VERIFYING, err)
            raise

        exc: AppException
        if verdict.service_unavailable:
            exc = EmailServiceUnavailableError(internal_detail=verdict.error_detail)
            self._reject(log, SubmissionStage.EMAIL_VERIFYING, exc)
            raise exc
        if not validation.is_valid(verdict):
            reason = verdict.reason
            if not validation.is_verdict_fresh(verdict):
                reason = STALE_VERDICT_REASON
            exc = EmailUndeliverableError(email, reason, verdict.suggestion)
            self._reject(log, SubmissionStage.EMAIL_VERIFYING, exc)
            raise exc
        return verdict

    def _enter(self, log: Any, stage: SubmissionStage, **extra: Any) -> None:
        log.debug("profile_submission_stage", stage=stage.value, **extra)
        if stage is SubmissionStage.COMMITTED:
            log.info("profile_saved", **extra)

    def _reject(self, log: Any, stage: SubmissionStage, exc: AppException) -> None:
        log.info(
            "profile_submission_rejected",
            stage=stage.value,
            error_code=exc.error_code.value,
            message=exc.message,
        )
