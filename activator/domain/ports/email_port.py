from __future__ import annotations

from typing import Protocol


class EmailPort(Protocol):
    async def send(
        self,
        *,
        to: str,
        subject: str,
        body: str,
        html: bool = True,
        idempotency_key: str | None = None,
    ) -> None:
        """Deliver a rendered message. Raise MailTransportError on failure."""
