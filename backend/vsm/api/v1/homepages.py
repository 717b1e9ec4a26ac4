# vsm/api/v1/homepages.py
from flask import request, jsonify, abort
from vsm.extensions import db
from vsm.utils.decorators import admin_required, current_actor_id
from vsm.utils.audit import log_action
from vsm.utils.transaction import transactional
from vsm.models.homepage import Homepage
from vsm.normalizers.homepage import normalize_homepage
from vsm.application.homepage._common import get_homepage_or_404
from . import v1_bp


@v1_bp.route("/homepages", methods=["GET"])
def list_homepages():
    homepages = Homepage.query.order_by(Homepage.created_at.asc()).all()
    return jsonify([normalize_homepage(h) for h in homepages])


@v1_bp.route("/homepages/default", methods=["GET"])
def get_default_homepage():
    homepage = Homepage.query.filter_by(is_default=True).first()
    if homepage is None:
        abort(404, description="No default homepage configured")

    return jsonify(normalize_homepage(homepage, include_sections=True))


@v1_bp.route("/homepages/<homepage_id>", methods=["GET"])
def get_homepage(homepage_id):
    return jsonify(normalize_homepage(get_homepage_or_404(homepage_id), include_sections=True))


@v1_bp.route("/homepages", methods=["POST"])
@admin_required
def create_homepage():
    data = request.get_json(silent=True) or {}

    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        return jsonify({
            "error": "ValidationError",
            "message": "Name is required",
            "fields": {"name": "is required"},
        }), 400

    homepage = Homepage()
    homepage.name = name.strip()
    # The first homepage becomes the default one
    homepage.is_default = Homepage.query.filter_by(is_default=True).first() is None

    with transactional():
        db.session.add(homepage)
        db.session.flush()

        log_action(
            action="homepage.create",
            entity_type="homepage",
            entity_id=homepage.id,
            actor_id=current_actor_id(),
            payload={"name": homepage.name},
        )

    return jsonify(normalize_homepage(homepage)), 201


@v1_bp.route("/homepages/<homepage_id>", methods=["PATCH"])
@admin_required
def update_homepage(homepage_id):
    homepage = get_homepage_or_404(homepage_id)
    data = request.get_json(silent=True) or {}

    name = data.get("name")
    if "name" in data and (not isinstance(name, str) or not name.strip()):
        return jsonify({
            "error": "ValidationError",
            "message": "Name must be a non-empty string",
            "fields": {"name": "must be a non-empty string"},
        }), 400

    with transactional():
        if name and name.strip() != homepage.name:
            homepage.name = name.strip()

            log_action(
                action="homepage.update",
                entity_type="homepage",
                entity_id=homepage.id,
                actor_id=current_actor_id(),
                payload={"fields": ["name"]},
            )

    return jsonify(normalize_homepage(homepage))


@v1_bp.route("/homepages/<homepage_id>", methods=["DELETE"])
@admin_required
def delete_homepage(homepage_id):
    homepage = get_homepage_or_404(homepage_id)

    if homepage.is_default:
        abort(409, description="The default homepage cannot be deleted")

    with transactional():
        # Sections go with it (delete-orphan cascade)
        db.session.delete(homepage)

        log_action(
            action="homepage.delete",
            entity_type="homepage",
            entity_id=homepage_id,
            actor_id=current_actor_id(),
        )

    return "", 204
