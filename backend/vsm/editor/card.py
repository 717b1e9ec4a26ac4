# vsm/editor/card.py
"""
Per-section editor state.

Two independent axes are tracked for every card:

- `state`: what the admin is doing with it
    viewing -> editing -> saving -> viewing   (save succeeded)
                          saving -> editing   (save failed, draft kept)
- `status`: how the local copy relates to the server
    clean | pending | error

`confirmed` is the last snapshot the server acknowledged. Optimistic
changes go to `current`; a failed call restores `current` from
`confirmed`.
"""
from __future__ import annotations

import copy
from enum import Enum
from typing import Any, Dict, Optional

from vsm.sections.section import Section


class CardState(str, Enum):
    VIEWING = "viewing"
    EDITING = "editing"
    SAVING = "saving"


class SyncStatus(str, Enum):
    CLEAN = "clean"
    PENDING = "pending"
    ERROR = "error"


class IllegalTransition(Exception):
    pass


# Allowed state transitions
TRANSITIONS = {
    CardState.VIEWING: {CardState.EDITING},
    CardState.EDITING: {CardState.VIEWING, CardState.SAVING},
    CardState.SAVING: {CardState.VIEWING, CardState.EDITING},
}


class SectionCard:
    def __init__(self, section: Section):
        self.confirmed = section
        self.current = section
        self.state = CardState.VIEWING
        self.status = SyncStatus.CLEAN
        self.draft: Optional[Dict[str, Any]] = None
        self.error: Optional[str] = None
        self.field_errors: Dict[str, str] = {}

    def __repr__(self):
        return f"<SectionCard {self.id} {self.state.value}/{self.status.value}>"

    @property
    def id(self) -> str:
        return self.current.id

    @property
    def busy(self) -> bool:
        return self.status is SyncStatus.PENDING

    def _transition(self, to_state: CardState) -> None:
        if to_state not in TRANSITIONS[self.state]:
            raise IllegalTransition(
                f"Section {self.id}: cannot go from {self.state.value} to {to_state.value}"
            )
        self.state = to_state

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def begin_edit(self) -> None:
        self._transition(CardState.EDITING)
        self.draft = {
            "name": self.current.name,
            "sectionData": copy.deepcopy(self.current.section_data),
        }
        self.field_errors = {}

    def set_field(self, key: str, value: Any) -> None:
        """Buffer a sectionData change; nothing is sent until save."""
        if self.state is not CardState.EDITING:
            raise IllegalTransition(f"Section {self.id} is not being edited")
        self.draft["sectionData"][key] = value
        self.field_errors.pop(key, None)

    def rename(self, name: str) -> None:
        if self.state is not CardState.EDITING:
            raise IllegalTransition(f"Section {self.id} is not being edited")
        self.draft["name"] = name

    def cancel_edit(self) -> None:
        self._transition(CardState.VIEWING)
        self.draft = None
        self.field_errors = {}

    def changes(self) -> Dict[str, Any]:
        """Update body for the buffered draft: full sectionData, never a diff."""
        if self.draft is None:
            return {}
        body = {"sectionData": copy.deepcopy(self.draft["sectionData"])}
        if self.draft["name"] != self.current.name:
            body["name"] = self.draft["name"]
        return body

    def begin_save(self) -> None:
        self._transition(CardState.SAVING)
        self.status = SyncStatus.PENDING
        self.error = None

    def save_succeeded(self, section: Section) -> None:
        self._transition(CardState.VIEWING)
        self.confirm(section)
        self.draft = None
        self.field_errors = {}

    def save_failed(self, message: str, field_errors: Optional[Dict[str, str]] = None) -> None:
        self._transition(CardState.EDITING)
        self.status = SyncStatus.ERROR
        self.error = message
        self.field_errors = dict(field_errors or {})

    # ------------------------------------------------------------------
    # Optimistic updates
    # ------------------------------------------------------------------

    def apply(self, section: Section) -> None:
        if self.state is CardState.SAVING:
            raise IllegalTransition(f"Section {self.id} is saving")
        self.current = section
        self.status = SyncStatus.PENDING
        self.error = None

    def confirm(self, section: Section) -> None:
        self.confirmed = section
        self.current = section
        self.status = SyncStatus.CLEAN
        self.error = None

    def rollback(self, message: str) -> None:
        self.current = self.confirmed
        self.status = SyncStatus.ERROR
        self.error = message
