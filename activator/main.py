from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from activator.application.activator import Activator
from activator.infrastructure.db.pool import close_pool, open_pool
from activator.infrastructure.redis_cache.pool import close_redis
from activator.logging import setup_logging
from activator.presentation.api import api
from activator.presentation.dependencies import (
    build_activator,
    get_email_adapter,
    get_notifier,
    get_throttle,
    get_user_store,
)
from activator.settings import get_settings

settings = get_settings()


def install_activator(app: FastAPI, activator: Activator) -> None:
    """Attach the one Activator the routes use. Only allowed once per app."""
    if getattr(app.state, "activator", None) is not None:
        raise RuntimeError("activator already installed on this app")
    app.state.activator = activator


@asynccontextmanager
async def lifespan(app: FastAPI):
    if getattr(app.state, "activator", None) is not None:
        # wired by the caller (tests, embedding apps)
        yield
        return

    # startup
    await open_pool(settings)

    email_adapter = get_email_adapter(settings)
    install_activator(
        app,
        build_activator(
            settings,
            store=get_user_store(settings),
            notifier=get_notifier(settings, email_adapter),
            throttle=get_throttle(settings),
        ),
    )

    try:
        yield
    finally:
        # shutdown
        aclose = getattr(email_adapter, "aclose", None)
        if aclose is not None:
            await aclose()
        await close_redis()
        await close_pool()
        app.state.activator = None


def create_app(activator: Optional[Activator] = None) -> FastAPI:
    setup_logging(settings.log_level, env=settings.app_env)
    app = FastAPI(title="Activator", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.activator = None
    if activator is not None:
        install_activator(app, activator)
    app.include_router(api)
    return app


app = create_app()
