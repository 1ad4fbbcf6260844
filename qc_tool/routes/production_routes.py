from flask import Blueprint, request, g
from marshmallow import ValidationError
from qc_tool.extensions import db
from qc_tool.constants import KEY_PRODUCTION
from qc_tool.models.audit import AuditLog
from qc_tool.schemas.production_schema import ProductionRecordSchema
from qc_tool.services import permissions
from qc_tool.services.production_service import (save_production_record, delete_production_record,
                                                 daily_summary, day_breakdown)
from qc_tool.middleware.auth_middleware import token_required
from qc_tool.utils.responses import success_response, error_response, validation_error

production_bp = Blueprint('production', __name__)
production_schema = ProductionRecordSchema()


def _selected_user_id():
    """Power users may look at anyone; everyone else only sees themselves."""
    user = g.current_user
    requested = request.args.get('user_id') or user['id']
    if not permissions.can_log_production_for(user, requested):
        return None
    return requested


@production_bp.route('/production-records', methods=['GET'])
@token_required
def get_production_records():
    user_id = _selected_user_id()
    if user_id is None:
        return error_response('You can only view your own production entries', 403)
    records = [r for r in g.store.get_production_records() if r['user_id'] == user_id]
    if request.args.get('date'):
        records = [r for r in records if r['date'] == request.args['date']]
    records.sort(key=lambda r: (r['date'], r['created_at']), reverse=True)
    for r in records:
        r['can_modify'] = permissions.can_modify_production(g.current_user, r)
    return success_response(data=records)


@production_bp.route('/production-records/summary', methods=['GET'])
@token_required
def get_production_summary():
    user_id = _selected_user_id()
    if user_id is None:
        return error_response('You can only view your own production entries', 403)
    return success_response(data=daily_summary(g.store.get_production_records(), user_id))


@production_bp.route('/production-records/breakdown', methods=['GET'])
@token_required
def get_production_breakdown():
    user_id = _selected_user_id()
    if user_id is None:
        return error_response('You can only view your own production entries', 403)
    day = request.args.get('date')
    if not day:
        return error_response('date is required', 400)
    return success_response(data=day_breakdown(g.store.get_production_records(), user_id, day))


@production_bp.route('/production-records', methods=['POST'])
@token_required
def create_production_record():
    try:
        data = production_schema.load(request.get_json(silent=True) or {})
    except ValidationError as e:
        return validation_error(e.messages)
    record, _ = save_production_record(g.store, data, g.current_user)
    AuditLog.log(KEY_PRODUCTION, record['id'], 'INSERT', new_data=record)
    db.session.commit()
    return success_response(data=record, message='Production entry logged', status_code=201)


@production_bp.route('/production-records/<record_id>', methods=['PUT'])
@token_required
def update_production_record(record_id):
    try:
        data = production_schema.load(request.get_json(silent=True) or {})
    except ValidationError as e:
        return validation_error(e.messages)
    record, existing = save_production_record(g.store, data, g.current_user, editing_id=record_id)
    AuditLog.log(KEY_PRODUCTION, record_id, 'UPDATE', old_data=existing, new_data=record)
    db.session.commit()
    return success_response(data=record, message='Production entry updated')


@production_bp.route('/production-records/<record_id>', methods=['DELETE'])
@token_required
def delete_production_record_route(record_id):
    record = delete_production_record(g.store, record_id, g.current_user)
    AuditLog.log(KEY_PRODUCTION, record_id, 'DELETE', old_data=record)
    db.session.commit()
    return success_response(message='Production entry deleted')
