# vsm/sections/section.py
from __future__ import annotations

import copy
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, Optional

from dateutil.parser import ParserError, parse


def _parse_ts(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    try:
        return parse(value)
    except (ParserError, OverflowError, TypeError, ValueError):
        # Unreadable timestamps only lose their tie-break position
        return None


@dataclass(frozen=True)
class Section:
    """
    One homepage section as seen by API consumers.

    Mirrors the JSON shape of /homepage-sections. Instances are immutable;
    use `with_changes` to derive an edited copy.
    """
    id: str
    component: Optional[str] = None
    name: Optional[str] = None
    enabled: bool = True
    order: float = 0
    type: str = "content"
    section_data: Dict[str, Any] = field(default_factory=dict)
    homepage_id: Optional[str] = None
    author_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Section":
        return cls(
            id=data.get("id") or "",
            component=data.get("component"),
            name=data.get("name"),
            enabled=bool(data.get("enabled", True)),
            order=data.get("order", 0),
            type=data.get("type") or "content",
            section_data=copy.deepcopy(data.get("sectionData") or {}),
            homepage_id=data.get("homepageId"),
            author_id=data.get("authorId"),
            created_at=_parse_ts(data.get("createdAt")),
            updated_at=_parse_ts(data.get("updatedAt")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "component": self.component,
            "enabled": self.enabled,
            "order": self.order,
            "type": self.type,
            "sectionData": copy.deepcopy(self.section_data),
            "homepageId": self.homepage_id,
            "authorId": self.author_id,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }

    def with_changes(self, **changes: Any) -> "Section":
        return replace(self, **changes)
