from marshmallow import Schema, fields, validate, pre_load, post_load, EXCLUDE
from qc_tool.constants import TRACKER_PROJECTS
from qc_tool.utils.validators import sanitize_dict


class ProductionRecordSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    id = fields.Str(dump_only=True)
    user_id = fields.Str(load_default=None, allow_none=True)
    user_name = fields.Str(dump_only=True)
    date = fields.Date(required=True)
    project_name = fields.Str(required=True, validate=validate.OneOf([p['name'] for p in TRACKER_PROJECTS]))
    target = fields.Int(load_default=None, allow_none=True, validate=validate.Range(min=0))
    # range checks live in the service so the error names the target
    actual_count = fields.Int(required=True)
    created_at = fields.Str(dump_only=True)

    @pre_load
    def sanitize(self, data, **kwargs):
        return sanitize_dict(data)

    @post_load
    def date_to_string(self, data, **kwargs):
        data['date'] = data['date'].isoformat()
        return data
