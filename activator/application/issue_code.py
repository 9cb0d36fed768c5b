from __future__ import annotations

import logging
from typing import Any

import activator.domain.services as domain_services
from activator.application.config import ActivatorConfig
from activator.application.context import RequestContext
from activator.application.users import find_user, normalize_identity
from activator.domain.entities import OperationKind
from activator.domain.errors import BadRequest, Uninitialized

logger = logging.getLogger(__name__)


def _resolve_throttle(config: ActivatorConfig):
    if config.throttle is not None:
        return config.throttle
    if callable(getattr(config.store, "throttle", None)):
        return config.store
    return None


async def issue_code(
    config: ActivatorConfig, kind: OperationKind, ctx: RequestContext
) -> tuple[int, Any]:
    if not config.initialized:
        raise Uninitialized()

    identity = normalize_identity(ctx.first("id", "user", "email"))
    if identity is None:
        raise BadRequest("Missing User")

    user = await find_user(config, kind.issue_lookup, identity)

    # a record without an address must not take a throttle slot
    if not user.get(config.email_property):
        raise BadRequest("Missing Email")

    throttle = _resolve_throttle(config)
    if throttle is not None:
        user = await throttle.throttle(user) or user

    user_id = user.get(config.id_property)
    email = user.get(config.email_property)

    code = domain_services.generate_code()
    patch: dict[str, Any] = {kind.code_field: code}
    if kind.expires:
        patch[kind.expiry_field] = domain_services.compute_expiry(
            config.clock(), config.reset_expire_minutes
        )
    await config.store.save(user_id, patch)

    link = domain_services.build_link(
        config.protocol,
        config.domain,
        config.path_for(kind),
        code,
        user_id=str(user_id) if user_id is not None else None,
        email=email,
    )
    await config.notifier.send(
        kind.template,
        ctx.get("lang") or config.language,
        {
            "code": code,
            "email": email,
            "id": user_id,
            "request": ctx.as_dict(),
            "link": link,
        },
        email,
        config.subject_for(kind),
    )
    logger.info("code issued", extra={"kind": kind.name, "user_id": str(user_id)})

    body = ctx.state.get("body")
    return 201, body if body is not None else {"status": "created"}
