from flask import current_app, jsonify
from werkzeug.exceptions import HTTPException
from vsm.domain.invariants.exceptions import (
    FieldValidationError,
    InvariantViolation,
    SectionDataInvalid,
)

def register_error_handlers(app):
    @app.errorhandler(FieldValidationError)
    def handle_field_validation(error):
        response = jsonify({
            "error": "SectionDataInvalid" if isinstance(error, SectionDataInvalid) else "ValidationError",
            "message": str(error),
            "fields": error.fields,
        })
        response.status_code = 400
        return response

    @app.errorhandler(InvariantViolation)
    def handle_invariant_violation(error):
        response = jsonify({
            "error": "InvariantViolation",
            "message": str(error)
        })
        response.status_code = 400
        return response

    @app.errorhandler(ValueError)
    def handle_value_error(error):
        response = jsonify({
            "error": "BadRequest",
            "message": str(error)
        })
        response.status_code = 400
        return response

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        if error.code and error.code >= 500:
            current_app.logger.error("HTTP %s: %s", error.code, error.description)

        response = jsonify({
            "error": error.name.replace(" ", ""),
            "message": error.description,
        })
        response.status_code = error.code or 500
        return response
