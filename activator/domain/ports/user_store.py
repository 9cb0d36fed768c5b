from __future__ import annotations

from typing import Any, Optional, Protocol

UserRecord = dict[str, Any]


class UserStorePort(Protocol):
    async def find(self, query: dict[str, Any]) -> Optional[UserRecord]:
        """
        Return the first record whose fields equal every value in `query`,
        or None if nothing matches.
        """

    async def save(self, user_id: Any, patch: dict[str, Any]) -> UserRecord:
        """
        Apply a partial update to the record identified by `user_id`.
        A None value unsets the field; fields absent from `patch` are untouched.
        Return the updated record; raise if the record does not exist.
        """


class ThrottlePort(Protocol):
    async def throttle(self, record: UserRecord) -> Optional[UserRecord]:
        """
        Called before a code is issued for `record`.
        Raise to deny issuance; may return a replacement record.
        """
