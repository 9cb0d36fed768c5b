from __future__ import annotations

import hashlib
import logging
from datetime import datetime, timezone
from typing import Any

from jinja2 import (
    Environment,
    FileSystemLoader,
    TemplateNotFound as JinjaTemplateNotFound,
    select_autoescape,
)

from activator.domain.errors import TemplateNotFound
from activator.domain.ports.email_port import EmailPort
from activator.domain.ports.notifier import NotifierPort

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "default"


class TemplateNotifier(NotifierPort):
    """
    Renders `<templates_dir>/<language>/<type>.html` with Jinja2 and sends
    the result through an EmailPort. Languages without their own template
    fall back to the `default` directory.
    """

    def __init__(self, email: EmailPort, templates_dir: str) -> None:
        self._email = email
        self._jinja = Environment(
            loader=FileSystemLoader(templates_dir),
            autoescape=select_autoescape(["html", "xml"]),
        )

    def _get_template(self, template: str, language: str):
        names = [f"{language}/{template}.html"]
        if language != DEFAULT_LANGUAGE:
            names.append(f"{DEFAULT_LANGUAGE}/{template}.html")
        try:
            return self._jinja.select_template(names)
        except JinjaTemplateNotFound as e:
            raise TemplateNotFound(f"Template Not Found: {template}") from e

    def render(self, template: str, language: str, data: dict[str, Any]) -> str:
        if not data.get("code"):
            raise ValueError("data.code is not defined")
        return self._get_template(template, language).render(
            link=data.get("link"),
            code=data["code"],
            email=data.get("email"),
            id=data.get("id"),
            cur_year=datetime.now(timezone.utc).year,
        )

    async def send(
        self,
        template: str,
        language: str,
        data: dict[str, Any],
        to: str,
        subject: str,
    ) -> None:
        html = self.render(template, language, data)
        key = hashlib.sha256(f"{template}:{to}:{data['code']}".encode()).hexdigest()
        await self._email.send(
            to=to, subject=subject, body=html, html=True, idempotency_key=key[:32]
        )
        logger.info("notification sent", extra={"template": template, "language": language})
