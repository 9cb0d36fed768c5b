from datetime import timedelta

import pytest

from activator.application.activator import Activator
from activator.application.config import ActivatorConfig
from activator.application.context import RequestContext
from activator.domain.errors import NotFound
from activator.infrastructure.db.users_store import PgUserStore
from tests.conftest import NOW
from tests.fakes import FakeNotifier
from tests.integration.conftest import UUID_USER


@pytest.mark.asyncio
async def test_find_by_any_column(pool, users_table):
    store = PgUserStore(pool, table=users_table)

    by_id = await store.find({"id": "2"})
    assert by_id["email"] == "you@x.com"

    by_email = await store.find({"email": "example@hotmail.com"})
    assert by_email["id"] == "1"

    assert await store.find({"email": "nobody@x.com"}) is None


@pytest.mark.asyncio
async def test_save_sets_and_clears_fields(pool, users_table):
    store = PgUserStore(pool, table=users_table)
    expiry = NOW + timedelta(minutes=60)

    saved = await store.save(
        "1", {"password_reset_code": "abc", "password_reset_time": expiry}
    )
    assert saved["password_reset_code"] == "abc"
    assert saved["password_reset_time"] == expiry

    cleared = await store.save(
        "1", {"password_reset_code": None, "password_reset_time": None}
    )
    assert cleared["password_reset_code"] is None
    assert cleared["password_reset_time"] is None


@pytest.mark.asyncio
async def test_save_unknown_user_raises(pool, users_table):
    store = PgUserStore(pool, table=users_table)
    with pytest.raises(NotFound):
        await store.save("42", {"activation_code": "x"})


@pytest.mark.asyncio
async def test_password_reset_round_trip_against_postgres(pool, users_table):
    store = PgUserStore(pool, table=users_table)
    notifier = FakeNotifier()
    activator = Activator(
        ActivatorConfig(store=store, notifier=notifier, clock=lambda: NOW)
    )

    issued = await activator.create_password_reset(
        RequestContext(params={"user": "you@x.com"})
    )
    assert issued.status_code == 201

    done = await activator.complete_password_reset(
        RequestContext(
            params={"user": "2", "code": notifier.last_code, "password": "new-pass"}
        )
    )
    assert done.status_code == 200

    row = await store.find({"id": "2"})
    assert row["password"] == "new-pass"
    assert row["password_reset_code"] is None


@pytest.mark.asyncio
async def test_lookups_on_uuid_id_column_fall_through(pool, uuid_users_table):
    store = PgUserStore(pool, table=uuid_users_table)

    # an email tried against the uuid column is simply no match
    assert await store.find({"id": "nobody@x.com"}) is None
    row = await store.find({"id": UUID_USER})
    assert row["email"] == "uuid@x.com"

    notifier = FakeNotifier()
    activator = Activator(
        ActivatorConfig(store=store, notifier=notifier, clock=lambda: NOW)
    )

    missing = await activator.create_password_reset(
        RequestContext(params={"user": "nobody@x.com"})
    )
    assert isinstance(missing.error, NotFound)

    issued = await activator.create_password_reset(
        RequestContext(params={"user": "uuid@x.com"})
    )
    assert issued.status_code == 201

    done = await activator.complete_password_reset(
        RequestContext(
            params={"user": UUID_USER, "code": notifier.last_code, "password": "pw"}
        )
    )
    assert done.status_code == 200
