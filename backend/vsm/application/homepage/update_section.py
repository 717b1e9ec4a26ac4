from typing import Any, Dict, Optional
from vsm.models.homepage_section import HomepageSection
from vsm.models.base import utc_now
from vsm.domain.invariants.exceptions import FieldValidationError
from vsm.domain.invariants.section import assert_section_fields
from vsm.sections.registry import resolve
from vsm.utils.audit import log_action
from vsm.utils.optimistic_lock import enforce_optimistic_lock
from vsm.utils.transaction import transactional


ALLOWED_UPDATE_FIELDS = {
    "name": "name",
    "component": "component",
    "enabled": "enabled",
    "order": "order",
    "type": "type",
    "sectionData": "section_data",
}


def update_section(
    *,
    section: HomepageSection,
    actor_id: Optional[str],
    data: Dict[str, Any],
) -> HomepageSection:
    """
    Partially update a section.

    Design rules:
    - Only whitelisted fields are mutable, omitted fields are untouched
    - sectionData replaces the whole payload (no deep merge)
    - Re-sending identical values is a no-op apart from updatedAt
    - If-Unmodified-Since, when sent, turns a stale write into a 409
    """
    if not isinstance(data, dict):
        raise FieldValidationError({"body": "must be a JSON object"})

    fields = {key: data[key] for key in ALLOWED_UPDATE_FIELDS if key in data}
    if not fields:
        raise FieldValidationError(
            {"body": f"expected at least one of {', '.join(ALLOWED_UPDATE_FIELDS)}"}
        )

    enforce_optimistic_lock(section)
    assert_section_fields(fields)

    # Validate the payload that will be stored against the component that
    # will be stored, whichever of the two changes
    component = resolve(fields.get("component", section.component))
    if "sectionData" in fields or "component" in fields:
        fields["sectionData"] = fields.get("sectionData", section.section_data) or {}
        component.validate(fields["sectionData"])

    changed_fields: list[str] = []

    with transactional():
        for key, attr in ALLOWED_UPDATE_FIELDS.items():
            if key in fields and getattr(section, attr) != fields[key]:
                setattr(section, attr, fields[key])
                changed_fields.append(key)

        section.updated_at = utc_now()

        if changed_fields:
            log_action(
                action="section.update",
                entity_type="section",
                entity_id=section.id,
                actor_id=actor_id,
                payload={"fields": changed_fields},
            )

    return section
