from flask import current_app, jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from vsm.extensions import db
from . import v1_bp

@v1_bp.route('/health', methods=['GET'])
def health_check():
    try:
        db.session.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError as e:
        db.session.rollback()
        database = "unavailable"
        current_app.logger.error("Health check database probe failed: %s", e)

    status = 200 if database == "ok" else 503
    return jsonify({
        "status": "ok" if status == 200 else "degraded",
        "service": "vsm-homepage",
        "database": database,
    }), status
