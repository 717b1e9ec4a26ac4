# vsm/sections/registry.py
"""
Section Registry.

Closed table of the homepage components the site knows how to render.
Built once at import time and exposed read-only; there is no runtime
registration. Looking up a name that is not in the table is a normal
outcome, not an error: callers get NOT_FOUND and render a placeholder.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Type

from . import schemas
from .schemas import SectionData


class SectionKind(str, Enum):
    HERO = "HeroSection"
    COUNTDOWN = "CountdownTimer"
    ABOUT = "AboutSection"
    ABOUT_FEATURES = "AboutFeatures"
    STATS = "Stats"
    STORY = "SportsCommunityStory"
    EVENTS = "EventsSection"
    NEWS = "NewsSection"
    TEAM = "TeamSection"
    GALLERY = "GallerySection"
    CTA = "CTASection"
    UNKNOWN = "__unknown__"

    @classmethod
    def from_name(cls, name: Optional[str]) -> "SectionKind":
        if not name:
            return cls.UNKNOWN
        try:
            kind = cls(name)
        except ValueError:
            return cls.UNKNOWN
        return kind


@dataclass(frozen=True)
class SectionComponent:
    kind: SectionKind
    slug: str
    label: str
    template: str
    schema: Optional[Type[SectionData]]
    default_type: str = "content"

    @property
    def found(self) -> bool:
        return self.kind is not SectionKind.UNKNOWN

    def validate(self, data: Any) -> Optional[SectionData]:
        return schemas.validate_payload(self.schema, self.kind.value, data)

    def defaults(self) -> Dict[str, Any]:
        """Schema defaults, camelCase, for seeding a new section's payload."""
        if self.schema is None:
            return {}
        return self.schema().model_dump(by_alias=True)


NOT_FOUND = SectionComponent(
    kind=SectionKind.UNKNOWN,
    slug="unknown",
    label="Component not found",
    template="sections/not_found.html",
    schema=None,
)


def _build(*components: SectionComponent) -> Mapping[SectionKind, SectionComponent]:
    return MappingProxyType({c.kind: c for c in components})


# Catalog order is the order the "add section" menu shows
REGISTRY: Mapping[SectionKind, SectionComponent] = _build(
    SectionComponent(SectionKind.HERO, "hero", "Phần đầu trang",
                     "sections/hero.html", schemas.HeroSectionData, "hero"),
    SectionComponent(SectionKind.COUNTDOWN, "countdown", "Đếm ngược sự kiện",
                     "sections/countdown.html", schemas.CountdownTimerData),
    SectionComponent(SectionKind.ABOUT, "about", "Phần giới thiệu",
                     "sections/about.html", schemas.AboutSectionData),
    SectionComponent(SectionKind.ABOUT_FEATURES, "aboutfeatures", "Tính năng nổi bật",
                     "sections/about_features.html", schemas.AboutFeaturesData),
    SectionComponent(SectionKind.STATS, "stats", "Thống kê VSM",
                     "sections/stats.html", schemas.StatsData),
    SectionComponent(SectionKind.STORY, "story", "Câu chuyện cộng đồng",
                     "sections/story.html", schemas.SportsCommunityStoryData),
    SectionComponent(SectionKind.EVENTS, "events", "Hiển thị các sự kiện sắp tới",
                     "sections/events.html", schemas.EventsSectionData),
    SectionComponent(SectionKind.NEWS, "news", "Tin tức mới nhất",
                     "sections/news.html", schemas.NewsSectionData),
    SectionComponent(SectionKind.TEAM, "team", "Phần giới thiệu đội ngũ",
                     "sections/team.html", schemas.TeamSectionData),
    SectionComponent(SectionKind.GALLERY, "gallery", "Phần hiển thị bộ sưu tập",
                     "sections/gallery.html", schemas.GallerySectionData),
    SectionComponent(SectionKind.CTA, "cta", "Phần kêu gọi",
                     "sections/cta.html", schemas.CTASectionData),
)


# Sections a fresh homepage starts with, top to bottom
DEFAULT_LAYOUT = (
    "hero",
    "countdown",
    "about",
    "stats",
    "story",
    "events",
    "news",
    "team",
    "gallery",
    "cta",
)


def resolve(name: Optional[str]) -> SectionComponent:
    """Return the component registered under `name`, or NOT_FOUND."""
    kind = SectionKind.from_name(name)
    return REGISTRY.get(kind, NOT_FOUND)


def resolve_slug(slug: str) -> SectionComponent:
    for component in REGISTRY.values():
        if component.slug == slug:
            return component
    return NOT_FOUND


def available_sections() -> List[SectionComponent]:
    return list(REGISTRY.values())


def validate_section_data(component: Optional[str], data: Any) -> Optional[SectionData]:
    """
    Check a payload against the schema of its component.

    Unresolved components accept any JSON object.
    """
    return resolve(component).validate(data)
