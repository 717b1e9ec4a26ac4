# vsm/sections/schemas.py
"""
Per-component sectionData schemas.

Every known component gets its own payload model. Field names are
snake_case in Python and camelCase on the wire (`backgroundImage`,
`postsPerRow`, ...). Unknown keys are kept so admins can stash extra
settings without a schema change.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Type

from dateutil.parser import parse, ParserError
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from vsm.domain.invariants.exceptions import SectionDataInvalid

DEFAULT_EVENT_DATE = "2025-12-28T04:30:00"


class SectionData(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


class HeroSectionData(SectionData):
    title: str = "CHUNG KẾT"
    subtitle: str = "VIETNAM STUDENT MARATHON"
    subtitle1: str = ""
    background_image: str = "/img/image1.jpg"
    date: str = ""
    location: str = ""
    logo: str = "/img/logo-vsm.png"
    primary_button_text: str = "Tham gia sự kiện"
    show_animations: bool = True


class CountdownTimerData(SectionData):
    event_date: str = DEFAULT_EVENT_DATE
    custom_classes: str = ""

    @field_validator("event_date")
    @classmethod
    def validate_event_date(cls, v: str) -> str:
        # Empty means "use the default", anything else must be a date
        if v:
            try:
                parse(v)
            except (ParserError, OverflowError, ValueError):
                raise ValueError("must be an ISO date, e.g. 2025-12-28T04:30:00")
        return v


class AboutSectionData(SectionData):
    title: str = "Giới thiệu về"
    title1: str = "VSM"
    description: str = ""
    background_color: str = "bg-gradient-to-b from-background to-muted/20"


class Feature(SectionData):
    icon: str = "Target"
    title: str
    description: str = ""


class AboutFeaturesData(SectionData):
    features: List[Feature] = Field(default_factory=list)
    custom_classes: str = ""


class Stat(SectionData):
    label: str
    value: str
    icon: str = "Users"


class StatsData(SectionData):
    stats: List[Stat] = Field(default_factory=list)
    custom_classes: str = ""


class SportsCommunityStoryData(SectionData):
    subtitle: str = "Hành trình của chúng tôi"
    title: str = "CÂU CHUYỆN VSM"
    paragraph1: str = ""
    paragraph2: str = ""
    paragraph3: str = ""
    paragraph4: str = ""
    image: str = "/img/image1.jpg"
    stats_value: str = "5000+"
    stats_label: str = "Members"
    custom_classes: str = ""

    @property
    def paragraphs(self) -> List[str]:
        return [p for p in (self.paragraph1, self.paragraph2, self.paragraph3, self.paragraph4) if p]


class EventsSectionData(SectionData):
    title: str = "Sự kiện"
    title1: str = "sắp tới"
    description: str = ""
    background_color: str = "bg-muted/20"
    show_view_all_button: bool = True


class NewsSectionData(SectionData):
    title: str = "Tin tức mới nhất"
    title1: str = ""
    description: str = ""
    posts_per_row: int = Field(3, ge=1, le=4)
    show_view_all_button: bool = True


class TeamSectionData(SectionData):
    title: str = "Đội ngũ VSM"
    description: str = ""
    background_color: str = "bg-muted/20"
    members_per_row: int = Field(4, ge=2, le=6)


class GallerySectionData(SectionData):
    title: str = "Khoảnh khắc đáng nhớ"
    auto_play: bool = False
    show_controls: bool = True


class CTASectionData(SectionData):
    title: str = "Sẵn sàng bứt phá?"
    description: str = ""
    button_text: str = "Đăng ký ngay"
    background_color: str = "bg-gradient-to-r from-primary/20 to-purple-500/20"


def _field_errors(exc: ValidationError) -> Dict[str, str]:
    fields: Dict[str, str] = {}
    for error in exc.errors():
        key = ".".join(str(part) for part in error["loc"]) or "sectionData"
        fields.setdefault(key, error["msg"])
    return fields


def validate_payload(
    schema: Optional[Type[SectionData]],
    component: Optional[str],
    data: Any,
) -> Optional[SectionData]:
    """
    Validate `data` against `schema`.

    Returns the parsed model, or None when there is no schema (unknown
    component: any JSON object is accepted). Raises SectionDataInvalid
    with per-field messages otherwise.
    """
    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise SectionDataInvalid(component, {"sectionData": "must be an object"})

    if schema is None:
        return None

    try:
        # Wire payloads are camelCase, so validate by alias
        return schema.model_validate(data)
    except ValidationError as exc:
        raise SectionDataInvalid(component, _field_errors(exc)) from exc
