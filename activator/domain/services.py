# activator/domain/services.py
from __future__ import annotations

import base64
import binascii
import hmac
import uuid
from datetime import datetime, timedelta, timezone
from urllib.parse import quote


def generate_code() -> str:
    """Random single-use token, canonical UUID4 string."""
    return str(uuid.uuid4())


def secure_compare(a: str, b: str) -> bool:
    """
    Constant-time comparison for codes.
    Accepts strings; falls back to bytes if needed.
    """
    try:
        return hmac.compare_digest(a, b)
    except TypeError:
        return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))


def compute_expiry(now: datetime, window_minutes: int) -> datetime:
    return now + timedelta(minutes=window_minutes)


def as_datetime(value: datetime | int | float | str | None) -> datetime | None:
    """
    Normalize a stored expiry into an aware UTC datetime.

    Stores may hand back datetimes (naive ones are taken as UTC), ISO strings
    or epoch milliseconds.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    return as_datetime(datetime.fromisoformat(value))


def is_expired(expiry: datetime | int | float | str | None, now: datetime) -> bool:
    """True when the expiry instant is missing or strictly before `now`."""
    when = as_datetime(expiry)
    if when is None:
        return True
    return when < now


def encode_email_segment(email: str) -> str:
    raw = base64.urlsafe_b64encode(email.encode("utf-8")).decode("ascii")
    return raw.rstrip("=")


def decode_email_segment(segment: str) -> str | None:
    padded = segment + "=" * (-len(segment) % 4)
    try:
        raw = base64.b64decode(padded.encode("ascii"), altchars=b"-_", validate=True)
        return raw.decode("utf-8") or None
    except (binascii.Error, UnicodeError, ValueError):
        return None


def build_link_querystring(
    code: str, *, user_id: str | None = None, email: str | None = None
) -> str:
    """
    "/<id>/<code>/<email>" with id and email optional.
    """
    querystring = "/" + quote(str(code), safe="")
    if user_id:
        querystring = "/" + quote(str(user_id), safe="") + querystring
    if email:
        querystring = querystring + "/" + encode_email_segment(email)
    return querystring


def build_link(
    protocol: str,
    domain: str,
    path: str,
    code: str,
    *,
    user_id: str | None = None,
    email: str | None = None,
) -> str:
    base = f"{protocol}{domain}".rstrip("/")
    path = path if path.startswith("/") else f"/{path}"
    return base + path.rstrip("/") + build_link_querystring(
        code, user_id=user_id, email=email
    )
