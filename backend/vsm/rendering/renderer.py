# vsm/rendering/renderer.py
"""
Homepage Renderer.

Turns a homepage's sections into HTML between the fixed navbar and
footer. The same code path serves the public homepage and the admin
live preview:

- public:  sort by order, then drop disabled sections
- preview: sort by order, keep everything, mark disabled sections

Data problems never raise here. An unknown component or a payload that
no longer matches its schema becomes a visible placeholder for that one
section and the rest of the page renders normally.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from jinja2 import Environment, PackageLoader, select_autoescape
from markupsafe import Markup

from vsm.domain.invariants.exceptions import SectionDataInvalid
from vsm.sections.registry import SectionComponent, SectionKind, resolve
from vsm.sections.schemas import DEFAULT_EVENT_DATE, SectionData
from vsm.sections.section import Section
from vsm.utils.order import section_sort_key

logger = logging.getLogger(__name__)

STATUS_OK = "ok"
STATUS_NOT_FOUND = "not_found"
STATUS_INVALID = "invalid"

_env = Environment(
    loader=PackageLoader("vsm", "templates"),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


@dataclass(frozen=True)
class RenderedSection:
    section: Section
    component: SectionComponent
    props: Dict[str, Any]
    disabled: bool
    status: str = STATUS_OK
    data: Optional[SectionData] = None
    error: Optional[str] = None

    @property
    def id(self) -> str:
        return self.section.id


@dataclass(frozen=True)
class RenderedPage:
    sections: List[RenderedSection]
    total: int
    enabled: int
    html: str

    @property
    def section_ids(self) -> List[str]:
        return [s.id for s in self.sections]


def _as_section(value: Union[Section, Mapping[str, Any]]) -> Section:
    if isinstance(value, Section):
        return value
    return Section.from_dict(dict(value))


def sort_sections(sections: Iterable[Union[Section, Mapping[str, Any]]]) -> List[Section]:
    items = [_as_section(s) for s in sections]
    return sorted(items, key=lambda s: section_sort_key(s.order, s.created_at, s.id))


def build_props(
    section: Section,
    component: SectionComponent,
    countdown_default: str = DEFAULT_EVENT_DATE,
) -> Dict[str, Any]:
    """sectionData is the only configuration input; countdowns need a date."""
    data = section.section_data
    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        # Left as is so validation reports it as an invalid payload
        return data

    props = dict(data)
    if component.kind is SectionKind.COUNTDOWN and not props.get("eventDate"):
        props["eventDate"] = countdown_default

    return props


def plan_sections(
    sections: Iterable[Union[Section, Mapping[str, Any]]],
    *,
    preview: bool = False,
    countdown_default: str = DEFAULT_EVENT_DATE,
) -> List[RenderedSection]:
    """
    Resolve and configure each section in render order.

    Sorting happens before the enabled filter so disabled sections never
    shift the position of the ones that remain.
    """
    planned: List[RenderedSection] = []

    for section in sort_sections(sections):
        if not section.enabled and not preview:
            continue

        component = resolve(section.component)
        props = build_props(section, component, countdown_default)
        disabled = not section.enabled

        if not component.found:
            logger.warning(
                "Section %s uses unknown component %r", section.id, section.component
            )
            planned.append(RenderedSection(
                section, component, props, disabled, status=STATUS_NOT_FOUND,
                error=f"Component {section.component} not found",
            ))
            continue

        try:
            data = component.validate(props)
        except SectionDataInvalid as exc:
            logger.warning("Section %s has invalid configuration: %s", section.id, exc)
            planned.append(RenderedSection(
                section, component, props, disabled, status=STATUS_INVALID,
                error=str(exc),
            ))
            continue

        planned.append(RenderedSection(section, component, props, disabled, data=data))

    return planned


def render_section(rendered: RenderedSection) -> Markup:
    if rendered.status == STATUS_NOT_FOUND:
        template = _env.get_template("sections/not_found.html")
    elif rendered.status == STATUS_INVALID:
        template = _env.get_template("sections/invalid.html")
    else:
        template = _env.get_template(rendered.component.template)

    return Markup(template.render(
        section=rendered.section,
        data=rendered.data,
        props=rendered.props,
        error=rendered.error,
    ))


def render_homepage(
    sections: Iterable[Union[Section, Mapping[str, Any]]],
    *,
    preview: bool = False,
    countdown_default: str = DEFAULT_EVENT_DATE,
    title: str = "Vietnam Student Marathon",
) -> RenderedPage:
    """
    Render the full page: navbar, sections in order, footer.

    Identical input always produces identical output.
    """
    all_sections = sort_sections(sections)
    planned = plan_sections(all_sections, preview=preview, countdown_default=countdown_default)
    enabled = sum(1 for s in all_sections if s.enabled)

    html = _env.get_template("homepage.html").render(
        title=title,
        preview=preview,
        blocks=[(rendered, render_section(rendered)) for rendered in planned],
        total=len(all_sections),
        enabled=enabled,
        enabled_sections=[r for r in planned if not r.disabled],
    )

    return RenderedPage(sections=planned, total=len(all_sections), enabled=enabled, html=html)
