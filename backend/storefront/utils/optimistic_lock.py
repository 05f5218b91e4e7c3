from datetime import datetime, timezone
from typing import Optional
from flask import request
from dateutil.parser import parse, ParserError
from storefront.domain.exceptions import ConflictError, ValidationError


def normalize_ts(ts):
    """
    Ensure datetime is timezone-aware.
    Defaults to UTC if naive.
    """
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


def read_unmodified_since() -> Optional[datetime]:
    client_ts = request.headers.get("If-Unmodified-Since")
    if not client_ts:
        return None  # No optimistic lock requested

    try:
        return normalize_ts(parse(client_ts))
    except (ParserError, OverflowError) as exc:
        raise ValidationError("Invalid If-Unmodified-Since header") from exc


def enforce_optimistic_lock(updated_at: Optional[datetime]) -> None:
    """
    Enforces optimistic locking using the If-Unmodified-Since header.
    Raises ConflictError if the store has been modified since.
    """
    client_ts = read_unmodified_since()
    if client_ts is None or updated_at is None:
        return

    if normalize_ts(updated_at) > client_ts:
        raise ConflictError("Conflict detected. Storefront has been modified.")
