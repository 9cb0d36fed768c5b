from __future__ import annotations

import asyncio
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from activator.domain.errors import MailTransportError
from activator.domain.ports.email_port import EmailPort

logger = logging.getLogger(__name__)


class SmtpEmailAdapter(EmailPort):
    """
    Plain SMTP delivery. smtplib blocks, so each message is sent from a
    worker thread to keep the event loop free.
    """

    def __init__(
        self,
        host: str,
        port: int = 587,
        *,
        mail_from: str,
        user: str | None = None,
        password: str | None = None,
        starttls: bool = True,
        timeout: float = 10.0,
    ) -> None:
        if not mail_from:
            raise ValueError("mail_from is required")
        self._host = host
        self._port = port
        self._mail_from = mail_from
        self._user = user
        self._password = password
        self._starttls = starttls
        self._timeout = timeout

    def _build_message(self, to: str, subject: str, body: str, html: bool) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = self._mail_from
        msg["To"] = to
        msg.attach(MIMEText(body, "html" if html else "plain", "utf-8"))
        return msg

    def _deliver(self, msg: MIMEMultipart) -> None:
        with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as server:
            if self._starttls:
                server.starttls()
            if self._user and self._password:
                server.login(self._user, self._password)
            server.send_message(msg)

    async def send(
        self,
        *,
        to: str,
        subject: str,
        body: str,
        html: bool = True,
        idempotency_key: str | None = None,
    ) -> None:
        msg = self._build_message(to, subject, body, html)
        if idempotency_key:
            msg["Message-ID"] = f"<{idempotency_key}@{self._host}>"
        try:
            await asyncio.to_thread(self._deliver, msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.warning("smtp delivery failed", extra={"host": self._host})
            raise MailTransportError(f"Couldn't send email: {e}") from e
