from __future__ import annotations

from typing import Any, Literal, Protocol

TemplateType = Literal["activate", "passwordreset", "cafeauth"]


class NotifierPort(Protocol):
    async def send(
        self,
        template: TemplateType,
        language: str,
        data: dict[str, Any],
        to: str,
        subject: str,
    ) -> None:
        """
        Render `template` in `language` with `data`
        ({code, email, id, request, link}) and deliver it to `to`.
        """
