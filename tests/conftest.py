from datetime import datetime, timezone

import pytest

from activator.application.activator import Activator
from activator.application.config import ActivatorConfig
from tests.fakes import FakeNotifier, FakeUserStore

NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)

USERS = {
    "1": {"id": "1", "email": "example@hotmail.com", "password": "1234"},
    "2": {"id": "2", "email": "you@x.com", "password": "5678"},
}


class Clock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture()
def clock():
    return Clock(NOW)


@pytest.fixture()
def store():
    return FakeUserStore(USERS)


@pytest.fixture()
def notifier():
    return FakeNotifier()


@pytest.fixture()
def config(store, notifier, clock):
    return ActivatorConfig(store=store, notifier=notifier, clock=clock)


@pytest.fixture()
def activator(config):
    return Activator(config)


@pytest.fixture(autouse=True)
def patch_code(monkeypatch):
    """
    Make generated codes deterministic and distinct in all tests.
    You can override in a specific test by re-monkeypatching.
    """
    from activator.domain import services as domain_services

    counter = iter(range(1, 10_000))
    monkeypatch.setattr(
        domain_services, "generate_code", lambda: f"code-{next(counter)}"
    )
    yield
