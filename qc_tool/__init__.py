import os
import logging
from logging.handlers import RotatingFileHandler
from flask import Flask, jsonify
from dotenv import load_dotenv

from qc_tool.config import config
from qc_tool.extensions import db, ma, cors, limiter

API_PREFIX = '/api/v1'
VERSION = '1.0.0'


def create_app(config_name=None):
    load_dotenv()

    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config.get(config_name, config['default']))

    db.init_app(app)
    ma.init_app(app)
    cors.init_app(app, origins=app.config.get('CORS_ORIGINS', ['*']),
                  allow_headers=['Content-Type', 'Authorization', 'X-User-Id'],
                  expose_headers=['Content-Disposition'],
                  methods=['GET', 'POST', 'PUT', 'DELETE', 'OPTIONS'])
    limiter.init_app(app)

    _setup_logging(app)

    from qc_tool.middleware.error_handler import register_error_handlers
    register_error_handlers(app)

    _register_security_headers(app)
    _register_health_check(app, config_name)
    _register_blueprints(app)

    app.logger.info(f'QC tool API started ({config_name}, auth {"on" if app.config["AUTH_ENABLED"] else "off"})')
    return app


def _register_security_headers(app):
    @app.after_request
    def add_security_headers(response):
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['Strict-Transport-Security'] = 'max-age=31536000'
        # Records and exports are per-user; never let a proxy reuse them
        response.headers['Cache-Control'] = 'no-store'
        return response


def _register_health_check(app, config_name):
    # No auth: used by load balancers and the seed script
    @app.route(f'{API_PREFIX}/health', methods=['GET'])
    @limiter.exempt
    def health_check():
        db_status = 'connected'
        try:
            db.session.execute(db.text('SELECT 1'))
        except Exception:
            db_status = 'disconnected'
        return jsonify({
            'status': 'ok',
            'database': db_status,
            'version': VERSION,
            'environment': config_name,
            'auth_enabled': app.config['AUTH_ENABLED'],
        })


def _register_blueprints(app):
    from qc_tool.routes.auth_routes import auth_bp
    from qc_tool.routes.user_routes import user_bp
    from qc_tool.routes.sampling_routes import sampling_bp
    from qc_tool.routes.qc_record_routes import qc_record_bp
    from qc_tool.routes.production_routes import production_bp
    from qc_tool.routes.dashboard_routes import dashboard_bp
    from qc_tool.routes.lookup_routes import lookup_bp

    for blueprint in (auth_bp, user_bp, sampling_bp, qc_record_bp, production_bp,
                      dashboard_bp, lookup_bp):
        app.register_blueprint(blueprint, url_prefix=API_PREFIX)


def _setup_logging(app):
    log_level = getattr(logging, app.config.get('LOG_LEVEL', 'DEBUG').upper(), logging.DEBUG)
    log_file = app.config.get('LOG_FILE', './logs/qc_tool.log')

    os.makedirs(os.path.dirname(log_file) or '.', exist_ok=True)

    handler = RotatingFileHandler(log_file, maxBytes=10_000_000, backupCount=5)
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter('[%(asctime)s] %(levelname)s in %(module)s: %(message)s'))

    # app.logger is the "qc_tool" logger, so service module loggers propagate into this file
    app.logger.addHandler(handler)
    app.logger.setLevel(log_level)
