import pytest
from flask_jwt_extended import create_access_token

from vsm import create_app
from vsm.extensions import db


@pytest.fixture
def app(tmp_path):
    app = create_app("testing")
    app.config["UPLOAD_FOLDER"] = str(tmp_path / "uploads")

    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def _token(app, identity, role):
    with app.app_context():
        return create_access_token(identity=identity, additional_claims={"role": role})


@pytest.fixture
def admin_token(app):
    return _token(app, "admin-1", "admin")


@pytest.fixture
def admin_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def editor_headers(app):
    return {"Authorization": f"Bearer {_token(app, 'editor-1', 'editor')}"}


@pytest.fixture
def make_section(client, admin_headers):
    """Create a section through the API and return its JSON."""
    def _make(component="HeroSection", **fields):
        body = {"component": component, **fields}
        response = client.post("/api/v1/homepage-sections", json=body, headers=admin_headers)
        assert response.status_code == 201, response.get_json()
        return response.get_json()
    return _make
