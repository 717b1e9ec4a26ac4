import io

import httpx
import pytest
from flask_jwt_extended import create_access_token

from vsm.client import (
    AuthorizationError,
    ConflictError,
    NetworkError,
    NotFoundError,
    SectionStore,
    ServerError,
    StaticTokenStore,
    TokenStore,
    ValidationFailure,
)

BASE_URL = "http://testserver/api/v1"


@pytest.fixture
def store(app, admin_token):
    with SectionStore(
        BASE_URL,
        token_store=StaticTokenStore(admin_token),
        transport=httpx.WSGITransport(app=app),
    ) as store:
        yield store


def _mock_store(handler, token="t"):
    return SectionStore(
        BASE_URL,
        token_store=StaticTokenStore(token),
        transport=httpx.MockTransport(handler),
    )


# ------------------------------------------------------------------
# Against the real app
# ------------------------------------------------------------------

def test_create_and_list(store):
    hero = store.create_section({"component": "HeroSection", "sectionData": {"title": "A"}})
    about = store.create_section({"component": "AboutSection", "id": "ignored", "order": 42})

    assert about.id != "ignored"
    assert about.order == 2
    assert [s.id for s in store.list_sections()] == [hero.id, about.id]
    assert store.get_section(hero.id).section_data == {"title": "A"}
    assert store.get_hero_section().id == hero.id


def test_reorder_round_trip(store):
    a, b, c = (store.create_section({"component": "Stats", "name": n}) for n in "abc")

    store.reorder_sections([
        {"id": b.id, "order": 1},
        {"id": c.id, "order": 2},
        {"id": a.id, "order": 3},
    ])

    assert [s.name for s in store.list_sections()] == ["b", "c", "a"]


def test_update_and_conflict(store):
    section = store.create_section({"component": "AboutSection"})

    updated = store.update_section(section.id, {"enabled": False}, if_unmodified_since=section.updated_at)
    assert updated.enabled is False

    with pytest.raises(ConflictError):
        store.update_section(section.id, {"enabled": True}, if_unmodified_since=section.created_at.replace(year=2000))


def test_validation_errors_carry_fields(store):
    with pytest.raises(ValidationFailure) as exc_info:
        store.create_section({"component": "TeamSection", "sectionData": {"membersPerRow": 10}})
    assert "membersPerRow" in exc_info.value.fields
    assert exc_info.value.status_code == 400


def test_missing_section(store):
    with pytest.raises(NotFoundError):
        store.get_section("nope")
    with pytest.raises(NotFoundError):
        store.delete_section("nope")
    assert store.get_hero_section() is None


def test_upload_image(store):
    story = store.create_section({"component": "SportsCommunityStory"})

    updated = store.upload_section_image(story.id, io.BytesIO(b"img"), filename="story.webp", slot="story")
    assert updated.section_data["image"].endswith(".webp")

    with pytest.raises(ValueError):
        store.upload_section_image(story.id, b"img", filename="x.png", slot="footer")


def test_list_by_type_and_catalog(store):
    store.create_section({"component": "HeroSection"})
    store.create_section({"component": "Stats"})

    assert [s.component for s in store.list_sections_by_type("hero")] == ["HeroSection"]
    assert len(store.catalog()) == 11


def test_wrong_role_is_authorization_error(app):
    with app.app_context():
        token = create_access_token(identity="viewer", additional_claims={"role": "viewer"})

    store = SectionStore(BASE_URL, token_store=StaticTokenStore(token), transport=httpx.WSGITransport(app=app))
    with pytest.raises(AuthorizationError) as exc_info:
        store.create_section({"component": "HeroSection"})
    assert exc_info.value.status_code == 403


# ------------------------------------------------------------------
# Error mapping and retries
# ------------------------------------------------------------------

def test_writes_without_token_fail_locally():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(201, json={})

    store = _mock_store(handler, token=None)
    with pytest.raises(AuthorizationError):
        store.delete_section("a")
    assert calls == []


@pytest.mark.parametrize("status, error", [
    (401, AuthorizationError),
    (403, AuthorizationError),
    (404, NotFoundError),
    (409, ConflictError),
    (422, ValidationFailure),
    (500, ServerError),
    (502, ServerError),
])
def test_status_mapping(status, error):
    store = _mock_store(lambda request: httpx.Response(status, json={"message": "boom"}))
    with pytest.raises(error) as exc_info:
        store.delete_section("a")
    assert exc_info.value.message == "boom"


def test_jwt_error_message_is_used():
    store = _mock_store(lambda request: httpx.Response(401, json={"msg": "Token has expired"}))
    with pytest.raises(AuthorizationError, match="Token has expired"):
        store.list_sections()


def test_get_retries_once_on_transport_error():
    attempts = []

    def handler(request):
        attempts.append(request)
        if len(attempts) == 1:
            raise httpx.ConnectError("refused", request=request)
        return httpx.Response(200, json=[])

    assert _mock_store(handler).list_sections() == []
    assert len(attempts) == 2


def test_get_gives_up_after_retry():
    def handler(request):
        raise httpx.ReadTimeout("slow", request=request)

    with pytest.raises(NetworkError):
        _mock_store(handler).list_sections()


def test_writes_are_not_retried():
    attempts = []

    def handler(request):
        attempts.append(request)
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(NetworkError):
        _mock_store(handler).reorder_sections([{"id": "a", "order": 1}])
    assert len(attempts) == 1


def test_bearer_header_and_reorder_body():
    seen = {}

    def handler(request):
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = request.content
        return httpx.Response(204)

    _mock_store(handler, token="abc").reorder_sections([{"id": "a", "order": 1, "name": "x"}])
    assert seen["auth"] == "Bearer abc"
    assert b'"sections"' in seen["body"]
    assert b'"name"' not in seen["body"]


# ------------------------------------------------------------------
# Token store
# ------------------------------------------------------------------

def test_token_store_file(tmp_path):
    tokens = TokenStore(tmp_path / "creds" / "credentials.json")
    assert tokens.load() is None

    tokens.save("abc")
    assert tokens.load() == "abc"
    assert (tmp_path / "creds" / "credentials.json").stat().st_mode & 0o777 == 0o600

    tokens.clear()
    assert tokens.load() is None


def test_token_store_ignores_corrupt_file(tmp_path):
    path = tmp_path / "credentials.json"
    path.write_text("{not json")
    assert TokenStore(path).load() is None
