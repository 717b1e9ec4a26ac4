from .registry import (
    DEFAULT_LAYOUT,
    NOT_FOUND,
    REGISTRY,
    SectionComponent,
    SectionKind,
    available_sections,
    resolve,
    resolve_slug,
    validate_section_data,
)
from .schemas import DEFAULT_EVENT_DATE
from .section import Section

__all__ = [
    "DEFAULT_EVENT_DATE",
    "DEFAULT_LAYOUT",
    "NOT_FOUND",
    "REGISTRY",
    "Section",
    "SectionComponent",
    "SectionKind",
    "available_sections",
    "resolve",
    "resolve_slug",
    "validate_section_data",
]
