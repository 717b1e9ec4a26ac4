# vsm/api/v1/homepage_sections.py
from flask import request, jsonify, abort
from vsm.utils.decorators import admin_required, current_actor_id
from vsm.utils.optimistic_lock import enforce_optimistic_lock
from vsm.models.homepage import Homepage
from vsm.normalizers.section import normalize_section, normalize_sections
from vsm.sections.registry import available_sections
from vsm.application.homepage._common import (
    find_hero_section,
    get_homepage_or_404,
    get_section_or_404,
    ordered_sections,
)
from vsm.application.homepage.create_section import create_section
from vsm.application.homepage.update_section import update_section
from vsm.application.homepage.reorder_sections import reorder_sections
from vsm.application.homepage.delete_section import delete_section
from vsm.application.homepage.upload_section_image import upload_section_image
from . import v1_bp


def _target_homepage_id():
    """homepageId query arg, else the default homepage (None if none exists)."""
    homepage_id = request.args.get("homepageId")
    if homepage_id:
        return get_homepage_or_404(homepage_id).id

    homepage = Homepage.query.filter_by(is_default=True).first()
    return homepage.id if homepage else None


# ------------------------
# Reads (public)
# ------------------------

@v1_bp.route("/homepage-sections", methods=["GET"])
def list_sections():
    homepage_id = _target_homepage_id()
    if homepage_id is None:
        return jsonify([])

    return jsonify(normalize_sections(ordered_sections(homepage_id)))


@v1_bp.route("/homepage-sections/types/<section_type>", methods=["GET"])
def list_sections_by_type(section_type):
    homepage_id = _target_homepage_id()
    if homepage_id is None:
        return jsonify([])

    sections = [s for s in ordered_sections(homepage_id) if s.type == section_type]
    return jsonify(normalize_sections(sections))


@v1_bp.route("/homepage-sections/hero", methods=["GET"])
def get_hero_section():
    homepage_id = _target_homepage_id()
    hero = find_hero_section(homepage_id) if homepage_id else None
    if hero is None:
        abort(404, description="Hero section not found")

    return jsonify(normalize_section(hero))


@v1_bp.route("/homepage-sections/catalog", methods=["GET"])
def section_catalog():
    """Components an admin can add, with their default sectionData."""
    return jsonify([
        {
            "slug": c.slug,
            "component": c.kind.value,
            "name": c.label,
            "type": c.default_type,
            "sectionData": c.defaults(),
        }
        for c in available_sections()
    ])


@v1_bp.route("/homepage-sections/<section_id>", methods=["GET"])
def get_section(section_id):
    return jsonify(normalize_section(get_section_or_404(section_id)))


# ------------------------
# Writes (admin)
# ------------------------

@v1_bp.route("/homepage-sections", methods=["POST"])
@admin_required
def create_section_route():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "BadRequest", "message": "Invalid request body"}), 400

    section = create_section(actor_id=current_actor_id(), data=data)
    return jsonify(normalize_section(section)), 201


@v1_bp.route("/homepage-sections/hero", methods=["PUT"])
@admin_required
def update_hero_section():
    homepage_id = _target_homepage_id()
    hero = find_hero_section(homepage_id) if homepage_id else None
    if hero is None:
        abort(404, description="Hero section not found")

    section = update_section(
        section=hero,
        actor_id=current_actor_id(),
        data=request.get_json(silent=True),
    )
    return jsonify(normalize_section(section))


@v1_bp.route("/homepage-sections/reorder", methods=["POST"])
@admin_required
def reorder_sections_route():
    data = request.get_json(silent=True)

    # {"sections": [{id, order}, ...]} or a bare list
    items = data.get("sections") if isinstance(data, dict) else data

    reorder_sections(actor_id=current_actor_id(), items=items)
    return "", 204


@v1_bp.route("/homepage-sections/<section_id>", methods=["PUT", "PATCH"])
@admin_required
def update_section_route(section_id):
    section = update_section(
        section=get_section_or_404(section_id),
        actor_id=current_actor_id(),
        data=request.get_json(silent=True),
    )
    return jsonify(normalize_section(section))


@v1_bp.route("/homepage-sections/<section_id>", methods=["DELETE"])
@admin_required
def delete_section_route(section_id):
    section = get_section_or_404(section_id)
    enforce_optimistic_lock(section)

    delete_section(section=section, actor_id=current_actor_id())
    return "", 204


@v1_bp.route("/homepage-sections/<section_id>/upload-hero-image", methods=["POST"])
@admin_required
def upload_hero_image(section_id):
    section = upload_section_image(
        section=get_section_or_404(section_id),
        slot="hero",
        file=request.files.get("file"),
        actor_id=current_actor_id(),
    )
    return jsonify(normalize_section(section))


@v1_bp.route("/homepage-sections/<section_id>/upload-story-image", methods=["POST"])
@admin_required
def upload_story_image(section_id):
    section = upload_section_image(
        section=get_section_or_404(section_id),
        slot="story",
        file=request.files.get("file"),
        actor_id=current_actor_id(),
    )
    return jsonify(normalize_section(section))
