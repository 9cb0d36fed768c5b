from __future__ import annotations

from typing import Callable

from passlib.context import CryptContext

_pwd = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(plain: str, *, rounds: int | None = None) -> str:
    """
    bcrypt hash of a password set through a reset link. Without `rounds`
    passlib's default cost applies.
    """
    if not plain:
        raise ValueError("refusing to hash an empty password")
    if rounds is None:
        return _pwd.hash(plain)
    return _pwd.handler("bcrypt").using(rounds=rounds).hash(plain)


def password_hasher(rounds: int) -> Callable[[str], str]:
    """Bind a cost factor, giving the one-argument hasher ActivatorConfig takes."""

    def _hash(plain: str) -> str:
        return hash_password(plain, rounds=rounds)

    return _hash
