# vsm/cli.py
import click
from flask.cli import AppGroup
from flask_jwt_extended import create_access_token
from vsm.extensions import db
from vsm.models.homepage import Homepage
from vsm.models.homepage_section import HomepageSection
from vsm.sections.registry import DEFAULT_LAYOUT, resolve_slug
from vsm.utils.transaction import transactional

homepage_cli = AppGroup("homepage", help="Homepage section maintenance.")


@homepage_cli.command("seed")
@click.option("--force", is_flag=True, help="Replace the sections of an existing default homepage.")
def seed(force):
    """Create the default homepage with the standard section layout."""
    db.create_all()

    with transactional():
        homepage = Homepage.get_or_create_default()

        existing = HomepageSection.query.filter_by(homepage_id=homepage.id).count()
        if existing and not force:
            click.echo(f"Default homepage already has {existing} sections, use --force to reset.")
            return

        HomepageSection.query.filter_by(homepage_id=homepage.id).delete()

        for order, slug in enumerate(DEFAULT_LAYOUT, start=1):
            component = resolve_slug(slug)

            section = HomepageSection()
            section.homepage_id = homepage.id
            section.name = component.label
            section.component = component.kind.value
            section.type = component.default_type
            section.enabled = True
            section.order = order
            section.section_data = component.defaults()
            db.session.add(section)

    click.echo(f"Seeded {len(DEFAULT_LAYOUT)} sections on homepage {homepage.id}.")


@homepage_cli.command("issue-token")
@click.argument("identity")
@click.option("--role", default="admin", show_default=True)
def issue_token(identity, role):
    """Print a bearer token for IDENTITY, for use with the section client."""
    click.echo(create_access_token(identity=identity, additional_claims={"role": role}))
