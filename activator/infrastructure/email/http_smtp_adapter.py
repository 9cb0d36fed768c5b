from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from activator.domain.errors import MailTransportError
from activator.domain.ports.email_port import EmailPort

logger = logging.getLogger(__name__)


class HttpSmtpEmailAdapter(EmailPort):
    """
    Hands rendered messages to a mail relay speaking JSON over HTTP.

    Transport errors and 5xx answers are retried `retries` times; the
    Idempotency-Key header lets the relay drop a duplicate. Anything else
    outside 2xx fails at once.
    """

    def __init__(
        self,
        base_url: str,
        *,
        mail_from: str | None = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 5.0,
        send_path: str = "/send",
        retries: int = 1,
    ) -> None:
        self._url = base_url.rstrip("/") + "/" + send_path.lstrip("/")
        self._mail_from = mail_from
        self._retries = max(0, retries)
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    def _message(self, to: str, subject: str, body: str, html: bool) -> dict[str, Any]:
        message: dict[str, Any] = {
            "to": to,
            "subject": subject,
            "body": body,
            "html": html,
        }
        if self._mail_from:
            message["from"] = self._mail_from
        return message

    async def send(
        self,
        *,
        to: str,
        subject: str,
        body: str,
        html: bool = True,
        idempotency_key: str | None = None,
    ) -> None:
        message = self._message(to, subject, body, html)
        headers = {"Idempotency-Key": idempotency_key} if idempotency_key else {}

        attempt = 0
        while True:
            attempt += 1
            try:
                resp = await self._client.post(self._url, json=message, headers=headers)
            except httpx.HTTPError as e:
                if attempt <= self._retries:
                    logger.warning(
                        "mail relay unreachable, retrying", extra={"attempt": attempt}
                    )
                    continue
                raise MailTransportError(f"SMTP HTTP error: {e}") from e

            if resp.is_success:
                return
            if resp.status_code >= 500 and attempt <= self._retries:
                logger.warning(
                    "mail relay failed, retrying",
                    extra={"attempt": attempt, "status": resp.status_code},
                )
                continue
            raise MailTransportError(
                f"SMTP responded {resp.status_code}: {resp.text[:200]}"
            )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
