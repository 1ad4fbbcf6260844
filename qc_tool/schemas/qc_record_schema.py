from marshmallow import Schema, fields, validate, validates_schema, ValidationError, pre_load, post_load, EXCLUDE
from qc_tool.constants import PROJECTS, TIME_SLOTS, QC_ERROR_WEIGHTS, REVIEW_ACKNOWLEDGED, REVIEW_DISPUTED
from qc_tool.utils.validators import sanitize_string, sanitize_dict, validate_qc_code


def _error_id(**kwargs):
    return fields.Str(validate=validate.OneOf(list(QC_ERROR_WEIGHTS)), **kwargs)


class SubSampleSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    qc_code = fields.Str(required=True, validate=validate.Length(min=1, max=100))
    errors = fields.List(_error_id(), load_default=[])
    no_error = fields.Bool(load_default=True)
    score = fields.Int(load_default=100)


class QCRecordSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    id = fields.Str(dump_only=True)
    date = fields.Date(required=True)
    time_slot = fields.Str(required=True, validate=validate.OneOf(TIME_SLOTS))
    agent_id = fields.Str(load_default=None, allow_none=True)
    agent_name = fields.Str(load_default=None, allow_none=True, validate=validate.Length(max=200))
    tl_name = fields.Str(load_default='', validate=validate.Length(max=200))
    manager_name = fields.Str(load_default='', validate=validate.Length(max=200))
    qc_checker_name = fields.Str(load_default='', validate=validate.Length(max=200))
    project_name = fields.Str(required=True, validate=validate.OneOf(PROJECTS))
    task_name = fields.Str(load_default='', validate=validate.Length(max=500))
    rework_status = fields.Bool(load_default=False)
    no_work = fields.Bool(load_default=False)
    no_attachment = fields.Bool(load_default=False)
    notes = fields.Str(load_default='', validate=validate.Length(max=5000))
    qc_code_range_start = fields.Str(load_default='', validate=validate.Length(max=100))
    qc_code_range_end = fields.Str(load_default='', validate=validate.Length(max=100))
    sub_samples = fields.List(fields.Nested(SubSampleSchema), load_default=[])
    manual_enabled = fields.Bool(load_default=False)
    manual_score = fields.Int(load_default=None, allow_none=True, validate=validate.Range(min=0, max=100))
    manual_errors = fields.List(_error_id(), load_default=[])
    manual_notes = fields.Str(load_default='', validate=validate.Length(max=2000))

    # Response-only
    avg_score = fields.Float(dump_only=True)
    original_score = fields.Float(dump_only=True)
    agent_review_status = fields.Str(dump_only=True)
    agent_review_note = fields.Str(dump_only=True)
    created_at = fields.Str(dump_only=True)
    updated_at = fields.Str(dump_only=True)

    @pre_load
    def sanitize(self, data, **kwargs):
        return sanitize_dict(data)

    @validates_schema
    def validate_agent(self, data, **kwargs):
        if not data.get('agent_id') and not data.get('agent_name'):
            raise ValidationError('agent_id or agent_name is required', 'agent_id')
        for key in ('qc_code_range_start', 'qc_code_range_end'):
            msg = validate_qc_code(data.get(key))
            if msg:
                raise ValidationError(msg, key)

    @post_load
    def date_to_string(self, data, **kwargs):
        data['date'] = data['date'].isoformat()
        return data


class QCReviewSchema(Schema):
    agent_review_status = fields.Str(required=True, validate=validate.OneOf([
        REVIEW_ACKNOWLEDGED, REVIEW_DISPUTED
    ]))
    agent_review_note = fields.Str(load_default=None, allow_none=True, validate=validate.Length(max=2000))

    @pre_load
    def sanitize(self, data, **kwargs):
        if isinstance(data, dict) and data.get('agent_review_note'):
            data['agent_review_note'] = sanitize_string(data['agent_review_note'])
        return data


class SampleGenerateSchema(Schema):
    qc_code_range_start = fields.Str(load_default='')
    qc_code_range_end = fields.Str(load_default='')

    @pre_load
    def sanitize(self, data, **kwargs):
        return sanitize_dict(data)


class SampleToggleSchema(Schema):
    sample = fields.Nested(SubSampleSchema, required=True)
    error_id = _error_id(required=True)


class ScorePreviewSchema(Schema):
    sub_samples = fields.List(fields.Nested(SubSampleSchema), load_default=[])
    manual_enabled = fields.Bool(load_default=False)
    manual_score = fields.Int(load_default=None, allow_none=True, validate=validate.Range(min=0, max=100))
    manual_errors = fields.List(_error_id(), load_default=[])
