import pytest

from activator.application.context import RequestContext
from activator.domain.errors import BadRequest, Forbidden, NotFound


@pytest.mark.asyncio
async def test_cafe_auth_looks_up_by_email_only(activator, store, notifier):
    outcome = await activator.create_cafe_auth(RequestContext(params={"email": "you@x.com"}))

    assert outcome.status_code == 201
    assert store.find_calls == [{"email": "you@x.com"}]
    call = notifier.calls[0]
    assert call["template"] == "cafeauth"
    assert call["subject"] == "Your Sign-In Link"
    assert "/v1/cafe/auth/2/" in call["data"]["link"]

    by_id = await activator.create_cafe_auth(RequestContext(params={"user": "2"}))
    assert isinstance(by_id.error, NotFound)


@pytest.mark.asyncio
async def test_cafe_auth_complete_and_replay(activator, store, notifier):
    await activator.create_cafe_auth(RequestContext(params={"email": "you@x.com"}))
    params = {"user": "2", "code": notifier.last_code}

    done = await activator.complete_cafe_auth(RequestContext(params=params))
    assert done.status_code == 200
    assert "activation_code" not in store.users["2"]

    again = await activator.complete_cafe_auth(RequestContext(params=params))
    assert isinstance(again.error, Forbidden)


@pytest.mark.asyncio
async def test_cafe_reset_round_trip(activator, store, notifier):
    issued = await activator.create_cafe_reset(
        RequestContext(params={"email": "example@hotmail.com"})
    )
    assert issued.status_code == 201
    assert notifier.calls[0]["template"] == "passwordreset"
    assert "/v1/cafe/passwordreset/1/" in notifier.calls[0]["data"]["link"]

    bad = await activator.complete_cafe_reset(
        RequestContext(params={"user": "1", "code": "wrong", "password": "pw"})
    )
    assert isinstance(bad.error, BadRequest)

    done = await activator.complete_cafe_reset(
        RequestContext(params={"user": "1", "code": notifier.last_code, "password": "pw"})
    )
    assert done.status_code == 200
    assert store.users["1"]["password"] == "pw"
