from flask import request
from flask_sqlalchemy import SQLAlchemy
from flask_marshmallow import Marshmallow
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address


def rate_limit_key():
    """Throttle per acting user when the client names one, else per address."""
    user_id = request.headers.get('X-User-Id')
    return f'user:{user_id}' if user_id else get_remote_address()


db = SQLAlchemy()
ma = Marshmallow()
cors = CORS()
limiter = Limiter(key_func=rate_limit_key)
