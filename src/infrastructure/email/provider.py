"""Email verification provider protocol."""

from typing import Protocol

from domain.entities.email_verification import EmailVerificationVerdict


class IEmailVerifier(Protocol):
    """Protocol for email deliverability checkers."""

    async def verify(self, email: str) -> EmailVerificationVerdict:
        """
        Check whether an address can receive mail.

        Args:
            email: The address to check

        Returns:
            A verdict. Transport or upstream failures are reported through
            ``service_unavailable`` rather than raised.

        Raises:
            EmailServiceNotConfiguredError: the service credential is missing
        """
        ...
