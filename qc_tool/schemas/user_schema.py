from marshmallow import Schema, fields, validate, pre_load
from qc_tool.constants import ROLES, ROLE_AGENT
from qc_tool.utils.validators import sanitize_string


class UserSchema(Schema):
    id = fields.Str(dump_only=True)
    name = fields.Str(required=True, validate=validate.Length(min=1, max=200))
    role = fields.Str(load_default=ROLE_AGENT, validate=validate.OneOf(ROLES))

    @pre_load
    def sanitize(self, data, **kwargs):
        if isinstance(data, dict) and data.get('name'):
            data['name'] = sanitize_string(data['name'])
        return data


class RoleChangeSchema(Schema):
    role = fields.Str(required=True, validate=validate.OneOf(ROLES))


class LoginSchema(Schema):
    user_id = fields.Str(required=True, validate=validate.Length(min=1, max=100))
