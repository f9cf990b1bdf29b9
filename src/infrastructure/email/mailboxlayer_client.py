"""MailboxLayer (apilayer) email verification client.

Response payload structure:
    {
        "email": "ann@example.com",
        "did_you_mean": "",
        "user": "ann",
        "domain": "example.com",
        "format_valid": true,
        "mx_found": true,
        "smtp_check": true,
        "catch_all": null,
        "role": false,
        "disposable": false,
        "free": false,
        "score": 0.8
    }

Errors come back with HTTP 200 and an ``error`` object:
    {"success": false, "error": {"code": 101, "type": "invalid_access_key", "info": "..."}}
"""

from typing import Any, Optional

import httpx
import structlog

from core.exceptions import EmailServiceNotConfiguredError
from domain.entities.email_verification import EmailVerificationVerdict
from domain.validation.profile_rules import validate_email_format

logger = structlog.get_logger()

_ADDITIONAL_INFO_KEYS = ("user", "domain", "catch_all", "role", "disposable", "free")


class MailboxLayerClient:
    """Deliverability checks against the MailboxLayer ``/check`` endpoint.

    One outbound request per call: no retries and no caching, so repeated
    calls for the same address always re-verify.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "http://apilayer.net/api/check",
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url
        self._timeout = timeout
        self._transport = transport

    async def verify(self, email: str) -> EmailVerificationVerdict:
        """Verify ``email`` with a single upstream call."""
        if not self._api_key:
            raise EmailServiceNotConfiguredError()

        email = (email or "").strip()
        if not validate_email_format(email).is_valid:
            return EmailVerificationVerdict.invalid_format(email)

        params = {
            "access_key": self._api_key,
            "email": email,
            "smtp": 1,
            "format": 1,
        }
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.get(self._base_url, params=params)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as exc:
            # str(exc) would carry the request URL and with it the access key
            detail = f"upstream returned HTTP {exc.response.status_code}"
            logger.warning("email_verification_unavailable", reason=detail)
            return EmailVerificationVerdict.unavailable(email, detail)
        except httpx.HTTPError as exc:
            detail = f"{type(exc).__name__}: upstream request failed"
            logger.warning("email_verification_unavailable", reason=detail)
            return EmailVerificationVerdict.unavailable(email, detail)
        except ValueError:
            detail = "upstream returned a malformed response"
            logger.warning("email_verification_unavailable", reason=detail)
            return EmailVerificationVerdict.unavailable(email, detail)

        if not isinstance(data, dict):
            return EmailVerificationVerdict.unavailable(
                email, "upstream returned a malformed response"
            )

        error = data.get("error")
        if error:
            info = error.get("info") if isinstance(error, dict) else str(error)
            detail = info or "API validation failed"
            logger.warning("email_verification_unavailable", reason=detail)
            return EmailVerificationVerdict.unavailable(email, detail)

        verdict = self._to_verdict(email, data)
        logger.info(
            "email_verification_completed",
            result=verdict.result,
            reason=verdict.reason,
            score=verdict.score,
        )
        return verdict

    def _to_verdict(self, email: str, data: dict[str, Any]) -> EmailVerificationVerdict:
        """Map the upstream payload onto a verdict."""
        try:
            score = float(data.get("score") or 0.0)
        except (TypeError, ValueError):
            score = 0.0
        return EmailVerificationVerdict(
            email=email,
            format_valid=bool(data.get("format_valid")),
            mx_found=bool(data.get("mx_found")),
            smtp_check=bool(data.get("smtp_check")),
            score=score,
            suggestion=data.get("did_you_mean") or None,
            additional_info={key: data.get(key) for key in _ADDITIONAL_INFO_KEYS},
        )
