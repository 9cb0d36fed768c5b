from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal

LookupField = Literal["id", "email"]

ACTIVATION_CODE = "activation_code"
PASSWORD_RESET_CODE = "password_reset_code"
PASSWORD_RESET_TIME = "password_reset_time"


class Phase(str, Enum):
    ISSUE = "issue"
    COMPLETE = "complete"


@dataclass(frozen=True)
class OperationKind:
    """
    Describes one flow sharing the issue/validate state machine.

    `issue_lookup` and `complete_lookup` are logical field names ("id" or
    "email") tried in order; they are mapped to the store's real field
    names through the configured properties.
    """

    name: str
    template: str
    code_field: str
    expiry_field: str | None
    issue_lookup: tuple[LookupField, ...]
    complete_lookup: tuple[LookupField, ...]
    sets_password: bool = False

    @property
    def expires(self) -> bool:
        return self.expiry_field is not None


ACTIVATE = OperationKind(
    name="activate",
    template="activate",
    code_field=ACTIVATION_CODE,
    expiry_field=None,
    issue_lookup=("id",),
    complete_lookup=("id",),
)

PASSWORD_RESET = OperationKind(
    name="password_reset",
    template="passwordreset",
    code_field=PASSWORD_RESET_CODE,
    expiry_field=PASSWORD_RESET_TIME,
    issue_lookup=("email", "id"),
    complete_lookup=("id", "email"),
    sets_password=True,
)

CAFE_AUTH = OperationKind(
    name="cafe_auth",
    template="cafeauth",
    code_field=ACTIVATION_CODE,
    expiry_field=None,
    issue_lookup=("email",),
    complete_lookup=("id", "email"),
)

CAFE_RESET = OperationKind(
    name="cafe_reset",
    template="passwordreset",
    code_field=PASSWORD_RESET_CODE,
    expiry_field=PASSWORD_RESET_TIME,
    issue_lookup=("email",),
    complete_lookup=("id", "email"),
    sets_password=True,
)

OPERATION_KINDS: dict[str, OperationKind] = {
    kind.name: kind for kind in (ACTIVATE, PASSWORD_RESET, CAFE_AUTH, CAFE_RESET)
}


@dataclass
class Outcome:
    """Result of a public operation: either an error or a (status, body) pair."""

    error: BaseException | None = None
    status_code: int | None = None
    body: Any = None

    def __post_init__(self):
        if (self.error is None) == (self.status_code is None):
            raise ValueError("outcome needs exactly one of error or status_code")

    @classmethod
    def success(cls, status_code: int, body: Any = None) -> "Outcome":
        return cls(status_code=status_code, body=body)

    @classmethod
    def failure(cls, error: BaseException) -> "Outcome":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None
