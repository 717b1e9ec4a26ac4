from flask_jwt_extended import decode_token

from vsm.sections.registry import DEFAULT_LAYOUT


def test_seed_creates_default_layout(app, client):
    runner = app.test_cli_runner()

    result = runner.invoke(args=["homepage", "seed"])
    assert result.exit_code == 0, result.output
    assert f"Seeded {len(DEFAULT_LAYOUT)} sections" in result.output

    sections = client.get("/api/v1/homepage-sections").get_json()
    assert [s["order"] for s in sections] == list(range(1, len(DEFAULT_LAYOUT) + 1))
    assert sections[0]["component"] == "HeroSection"
    assert sections[1]["sectionData"]["eventDate"] == "2025-12-28T04:30:00"


def test_seed_keeps_existing_sections_without_force(app, make_section):
    make_section("HeroSection")
    runner = app.test_cli_runner()

    result = runner.invoke(args=["homepage", "seed"])
    assert "already has 1 sections" in result.output

    result = runner.invoke(args=["homepage", "seed", "--force"])
    assert f"Seeded {len(DEFAULT_LAYOUT)} sections" in result.output


def test_issue_token(app):
    result = app.test_cli_runner().invoke(args=["homepage", "issue-token", "ops@vsm", "--role", "admin"])
    assert result.exit_code == 0

    with app.app_context():
        claims = decode_token(result.output.strip())
    assert claims["sub"] == "ops@vsm"
    assert claims["role"] == "admin"
