from __future__ import annotations

import logging
from typing import Any, Optional

from activator.application.config import ActivatorConfig
from activator.application.context import RequestContext
from activator.application.issue_code import issue_code
from activator.application.validate_code import validate_code
from activator.domain.entities import (
    ACTIVATE,
    CAFE_AUTH,
    CAFE_RESET,
    PASSWORD_RESET,
    OperationKind,
    Outcome,
    Phase,
)
from activator.domain.errors import ActivatorError

logger = logging.getLogger(__name__)


class Activator:
    """
    Entry point for the four flows. Build one per application from an
    ActivatorConfig and share it; every public method returns an Outcome.
    """

    def __init__(self, config: Optional[ActivatorConfig] = None) -> None:
        self.config = config or ActivatorConfig()

    async def issue(self, kind: OperationKind, ctx: RequestContext) -> tuple[int, Any]:
        return await issue_code(self.config, kind, ctx)

    async def validate(
        self, kind: OperationKind, ctx: RequestContext
    ) -> tuple[int, Any]:
        return await validate_code(self.config, kind, ctx)

    async def run(
        self, kind: OperationKind, phase: Phase, ctx: RequestContext
    ) -> Outcome:
        step = self.issue if phase is Phase.ISSUE else self.validate
        try:
            status_code, body = await step(kind, ctx)
        except ActivatorError as e:
            logger.info(
                "operation rejected",
                extra={
                    "kind": kind.name,
                    "phase": phase.value,
                    "status": e.status_code,
                    "reason": e.message,
                },
            )
            return Outcome.failure(e)
        except Exception as e:  # noqa: BLE001
            logger.exception(
                "operation failed", extra={"kind": kind.name, "phase": phase.value}
            )
            return Outcome.failure(e)
        return Outcome.success(status_code, body)

    async def create_activate(self, ctx: RequestContext) -> Outcome:
        return await self.run(ACTIVATE, Phase.ISSUE, ctx)

    async def complete_activate(self, ctx: RequestContext) -> Outcome:
        return await self.run(ACTIVATE, Phase.COMPLETE, ctx)

    async def create_password_reset(self, ctx: RequestContext) -> Outcome:
        return await self.run(PASSWORD_RESET, Phase.ISSUE, ctx)

    async def complete_password_reset(self, ctx: RequestContext) -> Outcome:
        return await self.run(PASSWORD_RESET, Phase.COMPLETE, ctx)

    async def create_cafe_auth(self, ctx: RequestContext) -> Outcome:
        return await self.run(CAFE_AUTH, Phase.ISSUE, ctx)

    async def complete_cafe_auth(self, ctx: RequestContext) -> Outcome:
        return await self.run(CAFE_AUTH, Phase.COMPLETE, ctx)

    async def create_cafe_reset(self, ctx: RequestContext) -> Outcome:
        return await self.run(CAFE_RESET, Phase.ISSUE, ctx)

    async def complete_cafe_reset(self, ctx: RequestContext) -> Outcome:
        return await self.run(CAFE_RESET, Phase.COMPLETE, ctx)
