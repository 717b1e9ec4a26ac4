from typing import Any, Dict, Optional
from vsm.extensions import db
from vsm.models.homepage import Homepage
from vsm.models.homepage_section import HomepageSection
from vsm.domain.invariants.exceptions import FieldValidationError
from vsm.domain.invariants.section import assert_section_fields
from vsm.sections.registry import resolve
from vsm.utils.audit import log_action
from vsm.utils.transaction import transactional
from ._common import get_homepage_or_404


def create_section(
    *,
    actor_id: Optional[str],
    data: Dict[str, Any],
) -> HomepageSection:
    """
    Append a new section to a homepage.

    Rules:
    - id and order are always server-assigned (order = max + 1)
    - enabled defaults to true
    - homepage defaults to the default homepage
    - sectionData must match the component schema when the component is known
    """
    component_name = data.get("component")
    section_type = data.get("type")

    if not component_name and not section_type:
        raise FieldValidationError({"component": "component or type is required"})

    assert_section_fields(data)

    component = resolve(component_name)
    section_data = data.get("sectionData") or {}
    component.validate(section_data)

    with transactional():
        if data.get("homepageId"):
            homepage = get_homepage_or_404(data["homepageId"])
        else:
            homepage = Homepage.get_or_create_default()

        max_order = db.session.query(db.func.max(HomepageSection.order))\
            .filter_by(homepage_id=homepage.id)\
            .scalar() or 0

        section = HomepageSection()
        section.homepage_id = homepage.id
        section.component = component_name
        section.name = data.get("name") or (component.label if component.found else component_name)
        section.type = section_type or component.default_type
        section.enabled = data.get("enabled", True)
        section.order = int(max_order) + 1 if float(max_order).is_integer() else max_order + 1
        section.section_data = section_data
        section.author_id = actor_id

        db.session.add(section)
        db.session.flush()  # ensures section.id is available

        log_action(
            action="section.create",
            entity_type="section",
            entity_id=section.id,
            actor_id=actor_id,
            payload={
                "homepage_id": homepage.id,
                "component": section.component,
                "order": section.order,
            },
        )

    return section
