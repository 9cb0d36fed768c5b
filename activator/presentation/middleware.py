from __future__ import annotations

import json
import logging
from typing import Any, Callable

from fastapi import Request
from fastapi.responses import JSONResponse

from activator.application.activator import Activator
from activator.application.context import RequestContext
from activator.domain.entities import OperationKind, Outcome, Phase
from activator.domain.errors import ActivatorError, BadRequest, Uninitialized

logger = logging.getLogger(__name__)

STATE_KEY = "activator"

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def get_activator(request: Request) -> Activator | None:
    # set by activator.main.install_activator()
    return getattr(request.app.state, "activator", None)


def _upstream_state(request: Request) -> dict[str, Any]:
    state = dict(getattr(request.state, STATE_KEY, None) or {})
    user = getattr(request.state, "user", None)
    if user is not None and "id" not in state:
        user_id = user.get("id") if isinstance(user, dict) else getattr(user, "id", None)
        if user_id is not None:
            state["id"] = user_id
    return state


async def _request_params(request: Request) -> dict[str, Any]:
    params: dict[str, Any] = dict(request.query_params)
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        params.update((k, v) for k, v in form.items() if isinstance(v, str))
        params.update(request.path_params)
        return params

    raw = await request.body()
    if raw:
        try:
            body = json.loads(raw)
        except ValueError as e:
            raise BadRequest("Malformed JSON body") from e
        if isinstance(body, dict):
            params.update(body)
    params.update(request.path_params)
    return params


async def request_context(request: Request) -> RequestContext:
    return RequestContext(
        state=_upstream_state(request), params=await _request_params(request)
    )


async def run_operation(request: Request, kind: OperationKind, phase: Phase) -> Outcome:
    activator = get_activator(request)
    # before reading the request: no input gets past an uninitialized activator
    if activator is None or not activator.config.initialized:
        return Outcome.failure(Uninitialized())
    try:
        ctx = await request_context(request)
    except ActivatorError as e:
        return Outcome.failure(e)
    return await activator.run(kind, phase, ctx)


def error_payload(error: BaseException) -> tuple[int, dict[str, Any]]:
    if isinstance(error, ActivatorError):
        return error.status_code, error.to_dict()
    status_code = getattr(error, "status_code", None) or getattr(error, "code", None)
    if not isinstance(status_code, int):
        status_code = 500
    return status_code, {"error": str(error) or type(error).__name__}


def create_response(outcome: Outcome) -> JSONResponse:
    """Write the outcome straight to an HTTP response."""
    if outcome.error is not None:
        status_code, content = error_payload(outcome.error)
        return JSONResponse(status_code=status_code, content=content)
    return JSONResponse(status_code=outcome.status_code, content=outcome.body)


def create_next_handler(request: Request) -> Callable[[Outcome], None]:
    """
    Attach the outcome to request.state.activator so a downstream stage
    decides how to answer. Errors are forwarded unchanged under "error".
    """

    def handle(outcome: Outcome) -> None:
        state = dict(getattr(request.state, STATE_KEY, None) or {})
        if outcome.error is not None:
            status_code, content = error_payload(outcome.error)
            state.update(code=status_code, message=content, error=outcome.error)
        else:
            state.update(code=outcome.status_code, message=outcome.body, error=None)
        setattr(request.state, STATE_KEY, state)

    return handle


async def respond(request: Request, kind: OperationKind, phase: Phase) -> Any:
    outcome = await run_operation(request, kind, phase)
    activator = get_activator(request)
    factory = (activator and activator.config.response_factory) or create_response
    return factory(outcome)


def activator_next(kind: OperationKind, phase: Phase):
    """
    FastAPI dependency running one operation and handing its outcome to the
    route that depends on it, via request.state.activator.
    """

    async def dependency(request: Request) -> Outcome:
        outcome = await run_operation(request, kind, phase)
        activator = get_activator(request)
        factory = (
            activator and activator.config.next_handler_factory
        ) or create_next_handler
        factory(request)(outcome)
        return outcome

    return dependency
