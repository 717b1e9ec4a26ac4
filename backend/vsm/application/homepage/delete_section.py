from typing import Optional
from vsm.extensions import db
from vsm.models.homepage_section import HomepageSection
from vsm.utils.audit import log_action
from vsm.utils.media import delete_file
from vsm.utils.order import compact_order
from vsm.utils.transaction import transactional
from ._common import ordered_sections

IMAGE_KEYS = ("backgroundImage", "image")


def delete_section(
    *,
    section: HomepageSection,
    actor_id: Optional[str],
) -> None:
    """
    Hard-delete a section and re-compact the remaining order.

    Uploaded images referenced by the section are removed after commit.
    """
    homepage_id = section.homepage_id
    section_id = section.id
    data = section.section_data or {}
    media_to_cleanup = [data[key] for key in IMAGE_KEYS if isinstance(data.get(key), str)]

    with transactional():
        db.session.delete(section)
        db.session.flush()

        compact_order(ordered_sections(homepage_id))

        log_action(
            action="section.delete",
            entity_type="section",
            entity_id=section_id,
            actor_id=actor_id,
            payload={"homepage_id": homepage_id},
        )

    # Cleanup media outside transaction
    for media_url in media_to_cleanup:
        delete_file(media_url)
