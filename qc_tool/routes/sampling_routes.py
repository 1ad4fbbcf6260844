from flask import Blueprint, request
from marshmallow import ValidationError
from qc_tool.constants import ROLE_ADMIN, ROLE_MANAGER, ROLE_QC_AGENT
from qc_tool.schemas.qc_record_schema import SampleGenerateSchema, SampleToggleSchema, ScorePreviewSchema, SubSampleSchema
from qc_tool.services.sampling import generate_samples
from qc_tool.services.scoring import (toggle_error, mark_no_error, rescore_sample,
                                      calculate_average_score, resolve_manual_score)
from qc_tool.middleware.auth_middleware import token_required, role_required
from qc_tool.utils.responses import success_response, validation_error

sampling_bp = Blueprint('sampling', __name__)

QC_FORM_ROLES = (ROLE_ADMIN, ROLE_MANAGER, ROLE_QC_AGENT)


@sampling_bp.route('/qc/samples/generate', methods=['POST'])
@token_required
@role_required(*QC_FORM_ROLES)
def generate():
    try:
        data = SampleGenerateSchema().load(request.get_json(silent=True) or {})
    except ValidationError as e:
        return validation_error(e.messages)
    samples = generate_samples(data['qc_code_range_start'], data['qc_code_range_end'])
    return success_response(data={
        'qc_code_range_start': data['qc_code_range_start'],
        'qc_code_range_end': data['qc_code_range_end'],
        'sample_count': len(samples),
        'sub_samples': samples,
        'avg_score': calculate_average_score(samples),
    }, message=f'{len(samples)} samples generated')


@sampling_bp.route('/qc/samples/toggle-error', methods=['POST'])
@token_required
@role_required(*QC_FORM_ROLES)
def toggle_sample_error():
    try:
        data = SampleToggleSchema().load(request.get_json(silent=True) or {})
    except ValidationError as e:
        return validation_error(e.messages)
    return success_response(data=toggle_error(data['sample'], data['error_id']))


@sampling_bp.route('/qc/samples/no-error', methods=['POST'])
@token_required
@role_required(*QC_FORM_ROLES)
def clear_sample_errors():
    try:
        sample = SubSampleSchema().load(request.get_json(silent=True) or {})
    except ValidationError as e:
        return validation_error(e.messages)
    return success_response(data=mark_no_error(sample))


@sampling_bp.route('/qc/score-preview', methods=['POST'])
@token_required
@role_required(*QC_FORM_ROLES)
def score_preview():
    try:
        data = ScorePreviewSchema().load(request.get_json(silent=True) or {})
    except ValidationError as e:
        return validation_error(e.messages)
    samples = [rescore_sample(s) for s in data['sub_samples']]
    manual_score = resolve_manual_score(data['manual_enabled'], data['manual_score'], data['manual_errors'])
    return success_response(data={
        'sub_samples': samples,
        'manual_score': manual_score,
        'avg_score': calculate_average_score(samples, manual_score, data['manual_enabled']),
    })
