from functools import wraps
from flask import request, g, current_app
from qc_tool.services.store import get_store
from qc_tool.utils.responses import error_response


def has_valid_token():
    auth_header = request.headers.get('Authorization', '')
    token = auth_header.replace('Bearer ', '') if auth_header.startswith('Bearer ') else ''
    return bool(token) and token == current_app.config.get('API_SECRET_TOKEN')


def token_required(f):
    """Validate Bearer token and inject the stored user into Flask g."""
    @wraps(f)
    def decorated(*args, **kwargs):
        store = get_store()
        user_id = request.headers.get('X-User-Id')

        # Bypass token check if AUTH_ENABLED is false; fall back to the session user
        if not current_app.config.get('AUTH_ENABLED', True):
            if not user_id:
                session_user = store.get_current_user()
                user_id = session_user.get('id') if session_user else None
        else:
            if not has_valid_token():
                return error_response('Unauthorized - Invalid or missing token', 401)

        if not user_id:
            return error_response('Unauthorized - X-User-Id header required', 401)

        # Role comes from the stored user list, never from the request
        user = store.get_user(user_id)
        if not user:
            return error_response('Unauthorized - Unknown user', 401)

        g.current_user = user
        g.store = store
        return f(*args, **kwargs)
    return decorated


def role_required(*allowed_roles):
    """Check if current user has one of the allowed roles."""
    def decorator(f):
        @wraps(f)
        def decorated(*args, **kwargs):
            user_role = g.current_user.get('role', '')
            if user_role not in allowed_roles:
                return error_response(
                    f'Forbidden - Role "{user_role}" does not have access. Required: {", ".join(allowed_roles)}',
                    403
                )
            return f(*args, **kwargs)
        return decorated
    return decorator
