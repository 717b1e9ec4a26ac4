from typing import Any, Dict, List, Optional
from vsm.models.homepage_section import HomepageSection
from vsm.domain.invariants.exceptions import InvariantViolation
from vsm.domain.invariants.section import assert_reorder_items, assert_section_orders
from vsm.utils.audit import log_action
from vsm.utils.order import compact_order
from vsm.utils.transaction import transactional
from ._common import ordered_sections


def reorder_sections(
    *,
    actor_id: Optional[str],
    items: List[Dict[str, Any]],
) -> List[HomepageSection]:
    """
    Apply a new ordering to a homepage's sections in one transaction.

    All-or-nothing: the payload is fully validated (known ids, one homepage,
    numeric orders, no duplicates) before anything is written. Sections not
    listed keep their current rank. The result is compacted to 1..N.
    """
    assert_reorder_items(items)

    if not items:
        return []

    ids = [item["id"] for item in items]
    found = {
        s.id: s
        for s in HomepageSection.query.filter(HomepageSection.id.in_(ids)).all()
    }

    missing = [section_id for section_id in ids if section_id not in found]
    if missing:
        raise InvariantViolation(f"Unknown section ids: {', '.join(missing)}")

    homepage_ids = {s.homepage_id for s in found.values()}
    if len(homepage_ids) != 1:
        raise InvariantViolation("Sections to reorder must belong to one homepage")
    homepage_id = homepage_ids.pop()

    with transactional():
        for item in items:
            found[item["id"]].order = item["order"]

        sections = ordered_sections(homepage_id)
        compact_order(sections)
        assert_section_orders(sections)

        log_action(
            action="section.reorder",
            entity_type="homepage",
            entity_id=homepage_id,
            actor_id=actor_id,
            payload={"order": [s.id for s in sections]},
        )

    return sections
