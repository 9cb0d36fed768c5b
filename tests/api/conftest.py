import pytest
from fastapi.testclient import TestClient

from activator.application.activator import Activator
from activator.application.config import ActivatorConfig
from activator.main import create_app
from tests.conftest import USERS
from tests.fakes import FakeNotifier, FakeUserStore

API_USERS = {**USERS, "3": {"id": "3", "email": "a@x.com", "password": "0000"}}


@pytest.fixture()
def app_and_deps(clock):
    store = FakeUserStore(API_USERS)
    notifier = FakeNotifier()
    activator = Activator(ActivatorConfig(store=store, notifier=notifier, clock=clock))
    app = create_app(activator)
    yield app, store, notifier


@pytest.fixture()
def client(app_and_deps):
    app, _, _ = app_and_deps
    return TestClient(app, raise_server_exceptions=False)


def link_path(link: str) -> str:
    """Strip scheme and host from an emailed link."""
    return "/" + link.split("://", 1)[1].split("/", 1)[1]
