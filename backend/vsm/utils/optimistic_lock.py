from datetime import timezone
from flask import request, abort
from dateutil.parser import parse, ParserError
from werkzeug.http import parse_date


def normalize_ts(ts):
    """
    Ensure datetime is timezone-aware.
    Defaults to UTC if naive.
    """
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


def parse_precondition(value):
    """
    Parse an If-Unmodified-Since value.

    Browsers send an HTTP-date (second precision); our client sends the
    section's ISO `updatedAt` verbatim. Returns (timestamp, has_fraction)
    or None when the value is not a date.
    """
    http_date = parse_date(value)
    if http_date is not None:
        return normalize_ts(http_date), False

    try:
        ts = normalize_ts(parse(value))
    except (ParserError, OverflowError, ValueError):
        return None
    return ts, bool(ts.microsecond)


def is_modified_since(updated_at, client_ts, has_fraction=True):
    server_ts = normalize_ts(updated_at)
    if not has_fraction:
        server_ts = server_ts.replace(microsecond=0)
    return server_ts > client_ts


def enforce_optimistic_lock(entity):
    """
    Abort with 409 if the entity changed after the If-Unmodified-Since
    header. Without the header the write goes through (last write wins).
    """
    header = request.headers.get("If-Unmodified-Since")
    if not header:
        return

    parsed = parse_precondition(header)
    if parsed is None:
        abort(400, description="Invalid If-Unmodified-Since header")

    client_ts, has_fraction = parsed
    if entity.updated_at is not None and is_modified_since(entity.updated_at, client_ts, has_fraction):
        abort(
            409,
            description="Conflict detected. Section has been modified by someone else."
        )
