from vsm.extensions import db
from vsm.models.homepage import Homepage
from vsm.models.homepage_section import HomepageSection


def get_section_or_404(section_id: str) -> HomepageSection:
    return db.get_or_404(
        HomepageSection,
        section_id,
        description=f"Section {section_id} not found",
    )


def get_homepage_or_404(homepage_id: str) -> Homepage:
    return db.get_or_404(
        Homepage,
        homepage_id,
        description=f"Homepage {homepage_id} not found",
    )


def ordered_sections(homepage_id: str) -> list[HomepageSection]:
    sections = HomepageSection.query.filter_by(homepage_id=homepage_id).all()
    return sorted(sections, key=lambda s: s.sort_key)


def find_hero_section(homepage_id: str) -> HomepageSection | None:
    heroes = [s for s in ordered_sections(homepage_id) if s.type == "hero"]
    return heroes[0] if heroes else None
