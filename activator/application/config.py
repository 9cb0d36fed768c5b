from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from activator.domain.entities import OperationKind
from activator.domain.ports.notifier import NotifierPort
from activator.domain.ports.user_store import ThrottlePort, UserStorePort


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


DEFAULT_PATHS: dict[str, str] = {
    "activate": "/v1/users/activate",
    "password_reset": "/v1/users/passwordreset",
    "cafe_auth": "/v1/cafe/auth",
    "cafe_reset": "/v1/cafe/passwordreset",
}

DEFAULT_SUBJECTS: dict[str, str] = {
    "activate": "Activate Your Account",
    "password_reset": "Reset Password",
    "cafe_auth": "Your Sign-In Link",
    "cafe_reset": "Reset Password",
}


@dataclass
class ActivatorConfig:
    """
    Everything an Activator needs, built once at startup.

    `store` and `notifier` are required; an Activator built without them
    answers every operation with Uninitialized.
    """

    store: Optional[UserStorePort] = None
    notifier: Optional[NotifierPort] = None
    throttle: Optional[ThrottlePort] = None

    reset_expire_minutes: int = 60
    id_property: str = "id"
    email_property: str = "email"
    password_property: str = "password"

    protocol: str = "http://"
    domain: str = "localhost"
    paths: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_PATHS))
    subjects: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_SUBJECTS))
    language: str = "en_US"

    password_hasher: Optional[Callable[[str], str]] = None
    clock: Callable[[], datetime] = utcnow

    # Response adapters, see activator.presentation.middleware
    response_factory: Optional[Callable[..., Any]] = None
    next_handler_factory: Optional[Callable[..., Any]] = None

    @property
    def initialized(self) -> bool:
        return self.store is not None and self.notifier is not None

    def field_for(self, logical: str) -> str:
        if logical == "id":
            return self.id_property
        if logical == "email":
            return self.email_property
        raise ValueError(f"unknown lookup field: {logical}")

    def path_for(self, kind: OperationKind) -> str:
        return self.paths.get(kind.name) or DEFAULT_PATHS[kind.name]

    def subject_for(self, kind: OperationKind) -> str:
        return self.subjects.get(kind.name) or DEFAULT_SUBJECTS[kind.name]
