from __future__ import annotations

import logging
from typing import Any

import activator.domain.services as domain_services
from activator.application.config import ActivatorConfig
from activator.application.context import RequestContext
from activator.application.users import find_user, normalize_identity
from activator.domain.entities import OperationKind
from activator.domain.errors import BadRequest, Forbidden, Uninitialized

logger = logging.getLogger(__name__)


def _identity_from(ctx: RequestContext) -> Any:
    identity = normalize_identity(ctx.first("user", "id"))
    if identity is not None:
        return identity
    email = normalize_identity(ctx.get("email"))
    if email is None or "@" in str(email):
        return email
    # email segment of an emailed link
    return domain_services.decode_email_segment(str(email))


async def validate_code(
    config: ActivatorConfig, kind: OperationKind, ctx: RequestContext
) -> tuple[int, Any]:
    if not config.initialized:
        raise Uninitialized()

    identity = _identity_from(ctx)
    if identity is None:
        raise BadRequest("Missing User")
    code = ctx.get("code")
    if not code:
        raise BadRequest("Missing Code")
    password = None
    if kind.sets_password:
        password = ctx.get("password")
        if not password:
            raise BadRequest("Missing Password")
        if not isinstance(password, str):
            raise BadRequest("Invalid Password")

    user = await find_user(config, kind.complete_lookup, identity)

    stored = user.get(kind.code_field)
    if not stored or not domain_services.secure_compare(str(stored), str(code)):
        logger.info("code mismatch", extra={"kind": kind.name})
        if kind.expires:
            raise BadRequest("Invalid Reset Code")
        raise Forbidden("Invalid Activation Code")

    if kind.expires and domain_services.is_expired(
        user.get(kind.expiry_field), config.clock()
    ):
        # the pending code stays in place until a new one is issued
        raise BadRequest("Expired Reset Code")

    patch: dict[str, Any] = {kind.code_field: None}
    if kind.expires:
        patch[kind.expiry_field] = None
    if kind.sets_password:
        hasher = config.password_hasher
        patch[config.password_property] = hasher(password) if hasher else password

    user_id = user.get(config.id_property)
    await config.store.save(user_id, patch)
    logger.info("code consumed", extra={"kind": kind.name, "user_id": str(user_id)})
    return 200, {"status": "ok"}
