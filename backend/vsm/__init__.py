import os
from flask import Flask, send_file, current_app
from flask_swagger_ui import get_swaggerui_blueprint
from .config import config_by_name
from .extensions import db, migrate, jwt
from .api.v1 import v1_bp
from .api.site import site_bp
from .errors import register_error_handlers
from .cli import homepage_cli

# Register models with SQLAlchemy metadata
from .models import audit_log, homepage, homepage_section  # noqa: F401

SWAGGER_URL = "/swagger"
OPENAPI_URL = "/openapi/homepage.yaml"


def create_app(config_name: str = "development") -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    app.logger.setLevel(app.config["LOG_LEVEL"])

    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    app.register_blueprint(v1_bp, url_prefix="/api/v1")
    app.register_blueprint(site_bp)
    register_error_handlers(app)
    register_docs(app)

    app.cli.add_command(homepage_cli)

    app.logger.debug("App created with %s config", config_name)
    return app


def register_docs(app):
    """OpenAPI document and Swagger UI, both public."""

    @app.route(OPENAPI_URL, methods=["GET"], endpoint="openapi_homepage")
    def serve_openapi():
        spec_path = os.path.join(current_app.root_path, "api", "v1", "homepage_openapi.yaml")
        if not os.path.exists(spec_path):
            raise FileNotFoundError("homepage_openapi.yaml not found")

        return send_file(spec_path, mimetype="application/yaml")

    swaggerui_blueprint = get_swaggerui_blueprint(
        SWAGGER_URL,
        OPENAPI_URL,
        config={
            "app_name": "VSM Homepage API",
            "deepLinking": True,
            "persistAuthorization": True,
        },
    )
    app.register_blueprint(swaggerui_blueprint, url_prefix=SWAGGER_URL)
