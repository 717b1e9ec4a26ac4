import httpx
import pytest

from vsm.client import AuthorizationError, NetworkError, SectionStore, StaticTokenStore, ValidationFailure
from vsm.editor import CardState, IllegalTransition, SectionEditor, SyncStatus
from vsm.sections.registry import DEFAULT_LAYOUT, resolve_slug
from vsm.sections.section import Section


class FakeStore:
    """In-memory stand-in for SectionStore that records calls."""

    def __init__(self, sections):
        self.sections = {s.id: s for s in sections}
        self.calls = []
        self.fail_with = None
        self.fail_on = None
        self._next_id = 1

    def _call(self, name, *args):
        self.calls.append((name,) + args)
        if self.fail_with is not None and self.fail_on in (None, name):
            raise self.fail_with

    def list_sections(self, homepage_id=None):
        self._call("list_sections", homepage_id)
        return list(self.sections.values())

    def update_section(self, section_id, changes, *, if_unmodified_since=None):
        self._call("update_section", section_id, changes)
        current = self.sections[section_id]
        fields = {
            "name": changes.get("name", current.name),
            "enabled": changes.get("enabled", current.enabled),
            "section_data": changes.get("sectionData", current.section_data),
        }
        self.sections[section_id] = current.with_changes(**fields)
        return self.sections[section_id]

    def reorder_sections(self, items):
        items = list(items)
        self._call("reorder_sections", items)
        for item in items:
            self.sections[item["id"]] = self.sections[item["id"]].with_changes(order=item["order"])

    def create_section(self, data):
        self._call("create_section", data)
        section = Section(
            id=f"new-{self._next_id}",
            component=data["component"],
            name=data["name"],
            type=data["type"],
            order=len(self.sections) + 1,
            section_data=data["sectionData"],
        )
        self._next_id += 1
        self.sections[section.id] = section
        return section

    def delete_section(self, section_id):
        self._call("delete_section", section_id)
        del self.sections[section_id]


def _sections():
    return [
        Section(id="b", component="Stats", name="b", order=2),
        Section(id="c", component="CTASection", name="c", order=3),
        Section(id="a", component="HeroSection", name="a", order=1, type="hero"),
    ]


@pytest.fixture
def store():
    return FakeStore(_sections())


@pytest.fixture
def editor(store):
    editor = SectionEditor(store)
    editor.load()
    return editor


def _ids(editor):
    return [s.id for s in editor.sections]


def test_load_sorts_by_order(editor):
    assert _ids(editor) == ["a", "b", "c"]
    assert all(card.state is CardState.VIEWING for card in editor.cards)


# ------------------------------------------------------------------
# State machine
# ------------------------------------------------------------------

def test_edit_save_cycle(editor, store):
    editor.begin_edit("a")
    editor.set_field("a", "title", "MARATHON")
    editor.rename("a", "Hero")

    # buffered, nothing sent yet
    assert not [c for c in store.calls if c[0] == "update_section"]
    assert editor.card("a").current.section_data == {}

    saved = editor.save("a")

    card = editor.card("a")
    assert card.state is CardState.VIEWING
    assert card.status is SyncStatus.CLEAN
    assert saved.section_data == {"title": "MARATHON"}
    assert saved.name == "Hero"
    assert store.calls[-1] == ("update_section", "a", {"sectionData": {"title": "MARATHON"}, "name": "Hero"})


def test_save_sends_full_section_data(store):
    store.sections["a"] = store.sections["a"].with_changes(section_data={"title": "A", "subtitle": "B"})
    editor = SectionEditor(store)
    editor.load()

    editor.begin_edit("a")
    editor.set_field("a", "title", "C")
    editor.save("a")

    assert store.calls[-1][2]["sectionData"] == {"title": "C", "subtitle": "B"}


def test_cancel_discards_draft(editor):
    editor.begin_edit("b")
    editor.set_field("b", "customClasses", "x")
    editor.cancel_edit("b")

    card = editor.card("b")
    assert card.state is CardState.VIEWING
    assert card.draft is None
    assert card.current.section_data == {}


def test_illegal_transitions(editor):
    card = editor.card("a")

    with pytest.raises(IllegalTransition):
        card.set_field("title", "x")
    with pytest.raises(IllegalTransition):
        card.begin_save()
    with pytest.raises(IllegalTransition):
        card.cancel_edit()

    card.begin_edit()
    with pytest.raises(IllegalTransition):
        card.begin_edit()


def test_save_failure_keeps_draft(editor, store):
    store.fail_with = ValidationFailure("Invalid", 400, fields={"postsPerRow": "too big"})

    editor.begin_edit("b")
    editor.set_field("b", "postsPerRow", 9)

    with pytest.raises(ValidationFailure):
        editor.save("b")

    card = editor.card("b")
    assert card.state is CardState.EDITING
    assert card.status is SyncStatus.ERROR
    assert card.draft["sectionData"] == {"postsPerRow": 9}
    assert card.field_errors == {"postsPerRow": "too big"}
    assert editor.active_notifications[0].section_id == "b"

    # fix and retry from the same draft
    store.fail_with = None
    editor.set_field("b", "postsPerRow", 3)
    assert card.field_errors == {}
    editor.save("b")
    assert card.state is CardState.VIEWING
    assert card.status is SyncStatus.CLEAN


def test_unknown_section_is_ignored(editor, store):
    calls = len(store.calls)
    assert editor.toggle("missing") is None
    assert editor.save("missing") is None
    assert len(store.calls) == calls


# ------------------------------------------------------------------
# Toggle
# ------------------------------------------------------------------

def test_toggle_success(editor, store):
    editor.toggle("b")

    card = editor.card("b")
    assert card.current.enabled is False
    assert card.confirmed.enabled is False
    assert card.status is SyncStatus.CLEAN
    assert store.calls[-1] == ("update_section", "b", {"enabled": False})


def test_toggle_rolls_back_on_failure(editor, store):
    store.fail_with = NetworkError("offline")

    with pytest.raises(NetworkError):
        editor.toggle("b")

    card = editor.card("b")
    assert card.current.enabled is True
    assert card.status is SyncStatus.ERROR
    assert card.error == "offline"


def test_toggle_not_allowed_while_saving(editor):
    card = editor.card("b")
    card.begin_edit()
    card.begin_save()

    with pytest.raises(IllegalTransition):
        editor.toggle("b")


# ------------------------------------------------------------------
# Move
# ------------------------------------------------------------------

def test_move_issues_single_reorder(editor, store):
    editor.move("c", 0)

    assert _ids(editor) == ["c", "a", "b"]
    assert [s.order for s in editor.sections] == [1, 2, 3]

    reorders = [c for c in store.calls if c[0] == "reorder_sections"]
    assert reorders == [("reorder_sections", [
        {"id": "c", "order": 1},
        {"id": "a", "order": 2},
        {"id": "b", "order": 3},
    ])]
    assert all(card.status is SyncStatus.CLEAN for card in editor.cards)


def test_move_restores_previous_order_on_failure(editor, store):
    store.fail_with = NetworkError("offline")

    with pytest.raises(NetworkError):
        editor.move("a", 2)

    assert _ids(editor) == ["a", "b", "c"]
    assert [s.order for s in editor.sections] == [1, 2, 3]
    assert editor.card("a").status is SyncStatus.ERROR
    assert editor.card("b").status is SyncStatus.CLEAN


def test_move_index_is_clamped(editor):
    editor.move("a", 10)
    assert _ids(editor) == ["b", "c", "a"]


# ------------------------------------------------------------------
# Add / remove
# ------------------------------------------------------------------

def test_add_section_uses_catalog_defaults(editor, store):
    section = editor.add_section("news")

    assert section.component == "NewsSection"
    assert section.name == "Tin tức mới nhất"
    assert section.section_data["postsPerRow"] == 3
    assert _ids(editor)[-1] == section.id


def test_add_unknown_kind(editor):
    with pytest.raises(ValueError):
        editor.add_section("marquee")


def test_remove_section(editor, store):
    editor.remove_section("b")

    assert _ids(editor) == ["a", "c"]
    assert [s.order for s in editor.sections] == [1, 2]


def test_remove_failure_reinserts(editor, store):
    store.fail_with = AuthorizationError("Token has expired", 401)

    with pytest.raises(AuthorizationError):
        editor.remove_section("b")

    assert _ids(editor) == ["a", "b", "c"]
    notification = editor.active_notifications[-1]
    assert notification.level == "auth"

    editor.dismiss(notification)
    assert editor.active_notifications == []


def test_reset_to_default_recreates_layout(editor, store):
    sections = editor.reset_to_default()

    assert [s.component for s in sections] == [resolve_slug(slug).kind.value for slug in DEFAULT_LAYOUT]
    assert not {"a", "b", "c"} & set(store.sections)
    assert sections[0].section_data["title"] == "CHUNG KẾT"


def test_reset_refuses_while_editing(editor, store):
    editor.begin_edit("b")

    with pytest.raises(IllegalTransition):
        editor.reset_to_default()
    assert not [c for c in store.calls if c[0] == "delete_section"]


def test_reset_failure_reloads_server_state(editor, store):
    store.fail_with = NetworkError("offline")
    store.fail_on = "create_section"

    with pytest.raises(NetworkError):
        editor.reset_to_default()

    # deletes went through, creates did not
    assert editor.sections == []
    assert editor.active_notifications[-1].message == "Reset failed: offline"


# ------------------------------------------------------------------
# Preview
# ------------------------------------------------------------------

def test_preview_reflects_local_state(editor, store):
    store.fail_with = None
    editor.toggle("c")

    page = editor.preview()
    assert page.section_ids == ["a", "b", "c"]
    assert page.sections[2].disabled
    assert page.enabled == 2


# ------------------------------------------------------------------
# Against the real app
# ------------------------------------------------------------------

def test_move_persists_through_api(app, admin_token):
    store = SectionStore(
        "http://testserver/api/v1",
        token_store=StaticTokenStore(admin_token),
        transport=httpx.WSGITransport(app=app),
    )
    for name in "abc":
        store.create_section({"component": "AboutSection", "name": name})

    reorders = []
    original = store.reorder_sections

    def spy(items):
        items = list(items)
        reorders.append(items)
        return original(items)

    store.reorder_sections = spy

    editor = SectionEditor(store, conflict_checks=True)
    editor.load()
    c = editor.sections[2]
    editor.move(c.id, 0)

    persisted = store.list_sections()
    assert [(s.name, s.order) for s in persisted] == [("c", 1), ("a", 2), ("b", 3)]
    assert len(reorders) == 1

    # confirmed snapshots were refreshed, so a guarded save still succeeds
    editor.begin_edit(c.id)
    editor.set_field(c.id, "title", "VSM")
    assert editor.save(c.id).section_data["title"] == "VSM"


def test_remove_then_guarded_save_through_api(app, admin_token):
    store = SectionStore(
        "http://testserver/api/v1",
        token_store=StaticTokenStore(admin_token),
        transport=httpx.WSGITransport(app=app),
    )
    for name in "abc":
        store.create_section({"component": "AboutSection", "name": name})

    editor = SectionEditor(store, conflict_checks=True)
    editor.load()
    a, b = editor.sections[0], editor.sections[1]

    editor.remove_section(a.id)
    assert [s.order for s in editor.sections] == [1, 2]

    # b was renumbered by the server, so its snapshot must be current
    editor.begin_edit(b.id)
    editor.set_field(b.id, "title", "VSM")
    saved = editor.save(b.id)
    assert saved.section_data["title"] == "VSM"
    assert saved.order == 1
