def _iso(ts):
    return ts.isoformat() if ts is not None else None


def normalize_order(value):
    # Keep integral ranks as ints on the wire: 2 rather than 2.0
    if value is not None and float(value).is_integer():
        return int(value)
    return value


def normalize_section(section):
    return {
        "id": section.id,
        "name": section.name,
        "component": section.component,
        "enabled": bool(section.enabled),
        "order": normalize_order(section.order),
        "type": section.type,
        "sectionData": section.section_data or {},
        "homepageId": section.homepage_id,
        "authorId": section.author_id,
        "createdAt": _iso(section.created_at),
        "updatedAt": _iso(section.updated_at),
    }


def normalize_sections(sections):
    return [
        normalize_section(s)
        for s in sorted(sections, key=lambda s: s.sort_key)
    ]
