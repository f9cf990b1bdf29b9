"""Dependency injection factories for the API."""

from functools import lru_cache
from typing import Callable

from core.config import settings
from domain.services.profile_service import ProfileService
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
from infrastructure.email.mailboxlayer_client import MailboxLayerClient


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_email_verifier() -> MailboxLayerClient:
    """Get the email verification client configured from settings."""
    return MailboxLayerClient(
        api_key=settings.mailboxlayer_api_key,
        base_url=settings.email_verification_url,
        timeout=settings.email_verification_timeout,
    )


@lru_cache
def get_profile_service() -> ProfileService:
    """Get Profile service instance."""
    return ProfileService(
        get_uow_factory(),
        email_verifier=get_email_verifier(),
        verify_unchanged_email_on_update=settings.verify_unchanged_email_on_update,
    )
