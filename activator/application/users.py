from __future__ import annotations

from typing import Any, Iterable

from activator.application.config import ActivatorConfig
from activator.domain.errors import NotFound
from activator.domain.ports.user_store import UserRecord


def normalize_identity(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip() or None
    return value


async def find_user(
    config: ActivatorConfig, lookup: Iterable[str], identity: Any
) -> UserRecord:
    """
    Try each logical lookup field in order; first record found wins.
    """
    for logical in lookup:
        record = await config.store.find({config.field_for(logical): identity})
        if record:
            return record
    raise NotFound()
