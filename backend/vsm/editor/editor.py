# vsm/editor/editor.py
"""
Section Editor.

Admin-side model of the homepage's section list. Every mutation is
applied locally first and then sent through the Section Store; when the
store call fails the local change is undone, a notification is recorded
and the store error is re-raised to the caller.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from vsm.client.errors import AuthorizationError, StoreError, ValidationFailure
from vsm.client.store import SectionStore
from vsm.rendering.renderer import RenderedPage, render_homepage, sort_sections
from vsm.sections.registry import DEFAULT_LAYOUT, SectionComponent, available_sections, resolve, resolve_slug
from vsm.sections.section import Section
from .card import CardState, IllegalTransition, SectionCard, SyncStatus

logger = logging.getLogger(__name__)


@dataclass
class Notification:
    level: str
    message: str
    section_id: Optional[str] = None
    dismissed: bool = False


class SectionEditor:
    def __init__(self, store: SectionStore, *, conflict_checks: bool = False):
        self.store = store
        self.conflict_checks = conflict_checks
        self.homepage_id: Optional[str] = None
        self.cards: List[SectionCard] = []
        self.notifications: List[Notification] = []

    # ------------------------------------------------------------------
    # Loading and lookups
    # ------------------------------------------------------------------

    def load(self, homepage_id: Optional[str] = None) -> List[Section]:
        self.homepage_id = homepage_id
        sections = self.store.list_sections(homepage_id)
        self.cards = [SectionCard(s) for s in sort_sections(sections)]
        return self.sections

    @property
    def sections(self) -> List[Section]:
        """Local view, in display order, including pending changes."""
        return [card.current for card in self.cards]

    @property
    def active_notifications(self) -> List[Notification]:
        return [n for n in self.notifications if not n.dismissed]

    def card(self, section_id: str) -> Optional[SectionCard]:
        for card in self.cards:
            if card.id == section_id:
                return card
        logger.info("Section %s is not loaded in the editor", section_id)
        return None

    def dismiss(self, notification: Notification) -> None:
        notification.dismissed = True

    def _notify(self, exc: StoreError, action: str, section_id: Optional[str] = None) -> None:
        level = "auth" if isinstance(exc, AuthorizationError) else "error"
        logger.warning("%s failed for section %s: %s", action, section_id, exc.message)
        self.notifications.append(Notification(level, f"{action} failed: {exc.message}", section_id))

    # ------------------------------------------------------------------
    # Field editing
    # ------------------------------------------------------------------

    def begin_edit(self, section_id: str) -> Optional[SectionCard]:
        card = self.card(section_id)
        if card is not None:
            card.begin_edit()
        return card

    def set_field(self, section_id: str, key: str, value) -> None:
        card = self.card(section_id)
        if card is not None:
            card.set_field(key, value)

    def rename(self, section_id: str, name: str) -> None:
        card = self.card(section_id)
        if card is not None:
            card.rename(name)

    def cancel_edit(self, section_id: str) -> None:
        card = self.card(section_id)
        if card is not None:
            card.cancel_edit()

    def save(self, section_id: str) -> Optional[Section]:
        """
        Send the buffered draft. On failure the card goes back to editing
        with the draft intact and field errors attached.
        """
        card = self.card(section_id)
        if card is None:
            return None

        card.begin_save()
        since = card.confirmed.updated_at if self.conflict_checks else None

        try:
            section = self.store.update_section(section_id, card.changes(), if_unmodified_since=since)
        except ValidationFailure as exc:
            card.save_failed(exc.message, exc.fields)
            self._notify(exc, "Save", section_id)
            raise
        except StoreError as exc:
            card.save_failed(exc.message)
            self._notify(exc, "Save", section_id)
            raise

        card.save_succeeded(section)
        return section

    # ------------------------------------------------------------------
    # Optimistic operations
    # ------------------------------------------------------------------

    def toggle(self, section_id: str) -> Optional[Section]:
        card = self.card(section_id)
        if card is None:
            return None

        enabled = not card.current.enabled
        card.apply(card.current.with_changes(enabled=enabled))

        try:
            section = self.store.update_section(section_id, {"enabled": enabled})
        except StoreError as exc:
            card.rollback(exc.message)
            self._notify(exc, "Toggle", section_id)
            raise

        card.confirm(section)
        return section

    def move(self, section_id: str, new_index: int) -> List[Section]:
        """
        Move a section to `new_index` (0-based) and renumber all sections
        1..N in a single reorder call.
        """
        card = self.card(section_id)
        if card is None:
            return self.sections

        if any(c.state is CardState.SAVING for c in self.cards):
            raise IllegalTransition("Cannot reorder while a section is saving")

        previous = list(self.cards)
        new_index = max(0, min(new_index, len(previous) - 1))

        cards = [c for c in previous if c is not card]
        cards.insert(new_index, card)

        for order, c in enumerate(cards, start=1):
            c.apply(c.current.with_changes(order=order))
        self.cards = cards

        try:
            self.store.reorder_sections({"id": c.id, "order": c.current.order} for c in cards)
        except StoreError as exc:
            self.cards = previous
            for c in previous:
                c.current = c.confirmed
                c.status = SyncStatus.CLEAN
            card.rollback(exc.message)
            self._notify(exc, "Reorder", section_id)
            raise

        for c in cards:
            c.confirm(c.current)

        # Reorder bumps updatedAt on the server
        if self.conflict_checks:
            self._refresh_confirmed()

        return self.sections

    def add_section(self, kind_or_slug: str, name: Optional[str] = None) -> Section:
        """Create a section from the catalog, with its schema defaults."""
        component = resolve(kind_or_slug)
        if not component.found:
            component = resolve_slug(kind_or_slug)
        if not component.found:
            raise ValueError(f"Unknown section kind: {kind_or_slug}")

        try:
            section = self.store.create_section(self._new_section(component, name))
        except StoreError as exc:
            self._notify(exc, "Add section")
            raise

        self.cards.append(SectionCard(section))
        return section

    def remove_section(self, section_id: str) -> None:
        card = self.card(section_id)
        if card is None:
            return
        if card.state is CardState.SAVING:
            raise IllegalTransition(f"Section {section_id} is saving")

        position = self.cards.index(card)
        self.cards.remove(card)

        try:
            self.store.delete_section(section_id)
        except StoreError as exc:
            self.cards.insert(position, card)
            card.rollback(exc.message)
            self._notify(exc, "Remove", section_id)
            raise

        # The server compacts the remaining orders the same way
        for order, c in enumerate(self.cards, start=1):
            if c.current.order != order:
                c.confirm(c.current.with_changes(order=order))

        # Compaction bumps updatedAt on every section that shifted
        if self.conflict_checks:
            self._refresh_confirmed()

    def reset_to_default(self) -> List[Section]:
        """
        Replace the homepage's sections with the default layout, each
        with its schema defaults.

        Not atomic: if a call fails midway the editor reloads whatever
        the server now holds before re-raising.
        """
        busy = [c.id for c in self.cards if c.state is not CardState.VIEWING]
        if busy:
            raise IllegalTransition(f"Finish editing sections first: {', '.join(busy)}")

        try:
            for c in list(self.cards):
                self.store.delete_section(c.id)
                self.cards.remove(c)

            for slug in DEFAULT_LAYOUT:
                section = self.store.create_section(self._new_section(resolve_slug(slug)))
                self.cards.append(SectionCard(section))
        except StoreError as exc:
            self._notify(exc, "Reset")
            self.load(self.homepage_id)
            raise

        logger.info("Homepage %s reset to the default layout", self.homepage_id or "default")
        return self.sections

    def _new_section(self, component: SectionComponent, name: Optional[str] = None) -> dict:
        data = {
            "component": component.kind.value,
            "name": name or component.label,
            "type": component.default_type,
            "enabled": True,
            "sectionData": component.defaults(),
        }
        if self.homepage_id:
            data["homepageId"] = self.homepage_id
        return data

    def _refresh_confirmed(self) -> None:
        fresh = {s.id: s for s in self.store.list_sections(self.homepage_id)}
        for c in self.cards:
            if c.id in fresh and c.state is CardState.VIEWING:
                c.confirm(fresh[c.id])

    # ------------------------------------------------------------------
    # Preview
    # ------------------------------------------------------------------

    def preview(self) -> RenderedPage:
        """Render the local list, disabled sections included and marked."""
        return render_homepage(self.sections, preview=True)

    def catalog(self) -> List[SectionComponent]:
        return available_sections()
