from typing import Optional
from werkzeug.datastructures import FileStorage
from vsm.models.homepage_section import HomepageSection
from vsm.models.base import utc_now
from vsm.utils.audit import log_action
from vsm.utils.media import save_file, delete_file
from vsm.utils.transaction import transactional

# Upload slot -> sectionData key holding the asset URL
IMAGE_SLOTS = {
    "hero": "backgroundImage",
    "story": "image",
}


def upload_section_image(
    *,
    section: HomepageSection,
    slot: str,
    file: Optional[FileStorage],
    actor_id: Optional[str],
) -> HomepageSection:
    """
    Store an uploaded image and point the section's payload at it.

    Variant of update scoped to one asset field: the rest of sectionData
    is left as is. The previous upload, if any, is deleted after commit.
    """
    if slot not in IMAGE_SLOTS:
        raise ValueError(f"Unknown image slot: {slot}")

    if file is None:
        raise ValueError("Multipart field 'file' is required")

    key = IMAGE_SLOTS[slot]
    url = save_file(file)
    previous = (section.section_data or {}).get(key)

    try:
        with transactional():
            data = dict(section.section_data or {})
            data[key] = url
            # Reassign so SQLAlchemy sees the JSON column change
            section.section_data = data
            section.updated_at = utc_now()

            log_action(
                action=f"section.upload_{slot}_image",
                entity_type="section",
                entity_id=section.id,
                actor_id=actor_id,
                payload={"url": url},
            )
    except Exception:
        # Nothing references the new file once the write is rolled back
        delete_file(url)
        raise

    if previous and previous != url:
        delete_file(previous)

    return section
