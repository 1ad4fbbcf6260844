from datetime import datetime
from flask import Blueprint, request, g, current_app
from marshmallow import ValidationError
from qc_tool.extensions import db
from qc_tool.constants import ROLE_ADMIN, ROLE_MANAGER, ROLE_QC_AGENT, ROLE_AGENT, KEY_RECORDS
from qc_tool.models.audit import AuditLog
from qc_tool.schemas.qc_record_schema import QCRecordSchema, QCReviewSchema
from qc_tool.services import permissions
from qc_tool.services.qc_record_service import (save_qc_record, delete_qc_record, review_qc_record,
                                                get_visible_record, filter_records)
from qc_tool.services.export_service import records_to_csv
from qc_tool.middleware.auth_middleware import token_required, role_required
from qc_tool.utils.responses import success_response, validation_error, csv_response
from qc_tool.utils.pagination import get_pagination_params, paginate_list

qc_record_bp = Blueprint('qc_records', __name__)
record_schema = QCRecordSchema()


def _filtered_records():
    return filter_records(
        g.store.get_records(), g.current_user,
        search=request.args.get('search'),
        project=request.args.get('project'),
        agent=request.args.get('agent'),
    )


@qc_record_bp.route('/qc-records', methods=['GET'])
@token_required
def get_qc_records():
    page, per_page = get_pagination_params()
    items, meta = paginate_list(_filtered_records(), page, per_page)
    user = g.current_user
    for r in items:
        r['can_edit'] = permissions.can_edit_record(user, r)
        r['can_delete'] = permissions.can_delete_record(user, r)
    return success_response(data=items, meta=meta)


@qc_record_bp.route('/qc-records/export', methods=['GET'])
@token_required
@role_required(ROLE_ADMIN, ROLE_MANAGER)
def export_qc_records():
    records = _filtered_records()
    prefix = current_app.config.get('EXPORT_FILENAME_PREFIX', 'QC_Report')
    filename = f'{prefix}_{datetime.now().strftime("%Y%m%d%H%M%S")}.csv'
    current_app.logger.info(f'{g.current_user["name"]} exported {len(records)} QC records')
    return csv_response(records_to_csv(records), filename)


@qc_record_bp.route('/qc-records/<record_id>', methods=['GET'])
@token_required
def get_qc_record(record_id):
    return success_response(data=get_visible_record(g.store, record_id, g.current_user))


@qc_record_bp.route('/qc-records', methods=['POST'])
@token_required
@role_required(ROLE_ADMIN, ROLE_MANAGER, ROLE_QC_AGENT)
def create_qc_record():
    try:
        data = record_schema.load(request.get_json(silent=True) or {})
    except ValidationError as e:
        return validation_error(e.messages)
    record, _ = save_qc_record(g.store, data, g.current_user)
    AuditLog.log(KEY_RECORDS, record['id'], 'INSERT', new_data=record)
    db.session.commit()
    return success_response(data=record, message='QC record created', status_code=201)


@qc_record_bp.route('/qc-records/<record_id>', methods=['PUT'])
@token_required
@role_required(ROLE_ADMIN, ROLE_MANAGER, ROLE_QC_AGENT)
def update_qc_record(record_id):
    try:
        data = record_schema.load(request.get_json(silent=True) or {})
    except ValidationError as e:
        return validation_error(e.messages)
    record, existing = save_qc_record(g.store, data, g.current_user, editing_id=record_id)
    AuditLog.log(KEY_RECORDS, record_id, 'UPDATE', old_data=existing, new_data=record)
    db.session.commit()
    return success_response(data=record, message='QC record updated')


@qc_record_bp.route('/qc-records/<record_id>', methods=['DELETE'])
@token_required
def delete_qc_record_route(record_id):
    record = delete_qc_record(g.store, record_id, g.current_user)
    AuditLog.log(KEY_RECORDS, record_id, 'DELETE', old_data=record)
    db.session.commit()
    return success_response(message='QC record deleted')


@qc_record_bp.route('/qc-records/<record_id>/review', methods=['PUT'])
@token_required
@role_required(ROLE_AGENT)
def review_qc_record_route(record_id):
    try:
        data = QCReviewSchema().load(request.get_json(silent=True) or {})
    except ValidationError as e:
        return validation_error(e.messages)
    record, old = review_qc_record(g.store, record_id, g.current_user,
                                   data['agent_review_status'], data.get('agent_review_note'))
    AuditLog.log(KEY_RECORDS, record_id, 'REVIEW',
                 old_data={'agent_review_status': old.get('agent_review_status')},
                 new_data={'agent_review_status': record['agent_review_status']})
    db.session.commit()
    return success_response(data=record, message=f'Audit {record["agent_review_status"].lower()}')
