import math
from vsm.extensions import db
from vsm.utils.optimistic_lock import normalize_ts


def rank_value(order):
    """Numeric rank for sorting; missing or unreadable ranks sort last."""
    if order is None or isinstance(order, bool):
        return math.inf
    try:
        rank = float(order)
    except (TypeError, ValueError):
        return math.inf
    return rank if not math.isnan(rank) else math.inf


def section_sort_key(order, created_at, row_id):
    """
    Total ordering for sections of one homepage.

    Rank first, then insertion time, then id so equal ranks still sort
    the same way on every call.
    """
    ts = normalize_ts(created_at).timestamp() if created_at is not None else 0.0
    return (rank_value(order), ts, str(row_id or ""))


def compact_order(items, order_field="order"):
    """
    Re-assigns sequential order values (1..N) to already sorted items.
    """
    for index, item in enumerate(items, start=1):
        setattr(item, order_field, index)

    db.session.flush()
