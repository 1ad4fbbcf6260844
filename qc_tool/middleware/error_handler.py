import traceback
from flask import jsonify, current_app
from marshmallow import ValidationError
from sqlalchemy.exc import SQLAlchemyError, OperationalError
from werkzeug.exceptions import HTTPException
from qc_tool.extensions import db
from qc_tool.utils.exceptions import ServiceError
from qc_tool.utils.responses import flatten_errors

# Client-facing text for HTTP errors raised by Flask/werkzeug itself
HTTP_MESSAGES = {
    401: 'Unauthorized',
    403: 'Forbidden',
    404: 'Resource not found',
    405: 'Method not allowed',
    413: 'Request body too large',
    429: 'Rate limit exceeded. Please slow down.',
}


def _envelope(message, status_code, errors=None, **extra):
    body = {'success': False, 'message': message, 'errors': errors or []}
    body.update(extra)
    return jsonify(body), status_code


def register_error_handlers(app):

    @app.errorhandler(HTTPException)
    def http_error(e):
        message = HTTP_MESSAGES.get(e.code) or e.description or e.name
        return _envelope(message, e.code)

    @app.errorhandler(ServiceError)
    def service_error(e):
        # Nothing a failed business rule touched may reach the store
        db.session.rollback()
        current_app.logger.info(f'{type(e).__name__} ({e.status_code}): {e.message}')
        return _envelope(e.message, e.status_code, e.errors)

    @app.errorhandler(ValidationError)
    def marshmallow_validation_error(e):
        return _envelope('Validation failed', 400, flatten_errors(e.messages))

    @app.errorhandler(OperationalError)
    def db_operational_error(e):
        db.session.rollback()
        current_app.logger.error(f'OperationalError: {str(e)}')
        return _envelope('Database connection error' if not current_app.debug else str(e), 500)

    @app.errorhandler(SQLAlchemyError)
    def db_error(e):
        db.session.rollback()
        current_app.logger.error(f'{type(e).__name__}: {str(e)}\n{traceback.format_exc()}')
        return _envelope('Could not save changes to the QC store' if not current_app.debug else str(e),
                         500, error_code='ERR_DB')

    @app.errorhandler(Exception)
    def unhandled_exception(e):
        db.session.rollback()
        current_app.logger.error(f'Unhandled Exception: {str(e)}\n{traceback.format_exc()}')
        return _envelope(
            'Something went wrong' if not current_app.debug else f'{type(e).__name__}: {str(e)}',
            500, error_code='ERR_500',
        )
