from functools import wraps
from flask import jsonify
from flask_jwt_extended import get_jwt, get_jwt_identity, jwt_required

def roles_required(*allowed_roles):
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            claims = get_jwt()

            if claims.get("role") not in allowed_roles:
                return jsonify({
                    "error": "Forbidden",
                    "message": "Insufficient permissions"
                }), 403

            return fn(*args, **kwargs)
        return wrapper
    return decorator

def admin_required(fn):
    """Bearer token with the admin role; used on every mutating route."""
    @wraps(fn)
    @jwt_required()
    @roles_required("admin")
    def wrapper(*args, **kwargs):
        return fn(*args, **kwargs)
    return wrapper

def current_actor_id():
    identity = get_jwt_identity()
    return str(identity) if identity is not None else None
