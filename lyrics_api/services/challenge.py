"""Bot-challenge (Cloudflare Turnstile) token verification."""

from __future__ import annotations

from typing import Protocol

import httpx
import structlog

from ..core.config import get_settings

logger = structlog.get_logger(__name__)


class ChallengeConfigError(RuntimeError):
    """Raised when the verifier secret is missing."""


class ChallengeServiceError(RuntimeError):
    """Raised when the verification service cannot give an answer."""


class ChallengeVerifier(Protocol):
    async def verify(self, token: str, remote_ip: str | None = None) -> bool: ...


class TurnstileVerifier:
    """Forwards a client token to the Turnstile siteverify endpoint.

    Returns the service's verdict. Network failures, non-2xx answers and
    unreadable bodies raise :class:`ChallengeServiceError`; nothing is retried.
    """

    def __init__(
        self,
        secret_key: str,
        verify_url: str,
        *,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not secret_key:
            raise ChallengeConfigError("Bot verification is not configured")
        self._secret_key = secret_key
        self._verify_url = verify_url
        self._timeout = httpx.Timeout(timeout_seconds)
        self._transport = transport

    async def verify(self, token: str, remote_ip: str | None = None) -> bool:
        payload = {"secret": self._secret_key, "response": token}
        if remote_ip and remote_ip != "unknown":
            payload["remoteip"] = remote_ip

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(self._verify_url, json=payload)
        except httpx.HTTPError as exc:
            logger.warning("challenge.service_unreachable", error=str(exc))
            raise ChallengeServiceError("Verification service unavailable") from exc

        if not response.is_success:
            logger.warning("challenge.service_error", status_code=response.status_code)
            raise ChallengeServiceError("Verification service unavailable")

        try:
            data = response.json()
        except ValueError as exc:
            raise ChallengeServiceError("Verification service returned an unreadable response") from exc

        success = bool(data.get("success")) if isinstance(data, dict) else False
        if not success:
            logger.warning(
                "challenge.verify_failed",
                error_codes=data.get("error-codes") if isinstance(data, dict) else None,
            )
        return success


def build_verifier_from_settings() -> TurnstileVerifier:
    settings = get_settings()
    return TurnstileVerifier(
        settings.turnstile_secret_key,
        settings.turnstile_verify_url,
        timeout_seconds=settings.turnstile_timeout_seconds,
    )
