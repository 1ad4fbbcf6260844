from flask import Blueprint, request, g, current_app
from marshmallow import ValidationError
from qc_tool.extensions import db, limiter
from qc_tool.schemas.user_schema import LoginSchema
from qc_tool.services.permissions import allowed_views
from qc_tool.services.store import get_store
from qc_tool.middleware.auth_middleware import token_required, has_valid_token
from qc_tool.utils.responses import success_response, error_response, validation_error

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/auth/login', methods=['POST'])
@limiter.limit(lambda: current_app.config['LOGIN_RATE_LIMIT'])
def login():
    if current_app.config.get('AUTH_ENABLED', True) and not has_valid_token():
        return error_response('Unauthorized - Invalid or missing token', 401)
    try:
        data = LoginSchema().load(request.get_json(silent=True) or {})
    except ValidationError as e:
        return validation_error(e.messages)
    store = get_store()
    user = store.get_user(data['user_id'])
    if not user:
        return error_response('Unknown user', 404)
    store.set_current_user(user)
    db.session.commit()
    current_app.logger.info(f'{user["name"]} ({user["role"]}) logged in')
    return success_response(data={**user, 'views': allowed_views(user)}, message='Logged in')


@auth_bp.route('/auth/logout', methods=['POST'])
@token_required
def logout():
    g.store.set_current_user(None)
    db.session.commit()
    return success_response(message='Logged out')


@auth_bp.route('/auth/me', methods=['GET'])
@token_required
def me():
    user = g.current_user
    return success_response(data={**user, 'views': allowed_views(user)})
