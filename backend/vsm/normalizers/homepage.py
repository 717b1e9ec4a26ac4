from .section import normalize_sections


def normalize_homepage(homepage, include_sections=False):
    data = {
        "id": homepage.id,
        "name": homepage.name,
        "isDefault": bool(homepage.is_default),
        "createdAt": homepage.created_at.isoformat() if homepage.created_at else None,
        "updatedAt": homepage.updated_at.isoformat() if homepage.updated_at else None,
    }

    if include_sections:
        data["sections"] = normalize_sections(homepage.sections)

    return data
