# vsm/api/site.py
from flask import Blueprint, Response, current_app, request, send_from_directory
from vsm.utils.decorators import admin_required
from vsm.utils.media import upload_folder
from vsm.models.homepage import Homepage
from vsm.normalizers.section import normalize_section
from vsm.sections.section import Section
from vsm.application.homepage._common import get_homepage_or_404, ordered_sections
from vsm.rendering.renderer import render_homepage

site_bp = Blueprint("site", __name__)


def _homepage_sections(homepage_id=None):
    if homepage_id:
        homepage = get_homepage_or_404(homepage_id)
    else:
        homepage = Homepage.query.filter_by(is_default=True).first()

    if homepage is None:
        return []

    return [Section.from_dict(normalize_section(s)) for s in ordered_sections(homepage.id)]


def _html(page):
    return Response(page.html, mimetype="text/html")


@site_bp.route("/", methods=["GET"])
def homepage():
    page = render_homepage(
        _homepage_sections(),
        countdown_default=current_app.config["COUNTDOWN_DEFAULT_DATE"],
    )
    return _html(page)


@site_bp.route("/admin/homepage/preview", methods=["GET"])
@admin_required
def homepage_preview():
    page = render_homepage(
        _homepage_sections(request.args.get("homepageId")),
        preview=True,
        countdown_default=current_app.config["COUNTDOWN_DEFAULT_DATE"],
    )
    return _html(page)


@site_bp.route("/uploads/<path:filename>", methods=["GET"])
def uploaded_file(filename):
    return send_from_directory(upload_folder(), filename)
