import os


def _env_flag(name, default):
    return os.environ.get(name, default).lower() in ('true', '1', 'yes')


def _build_database_url():
    """DATABASE_URL wins; otherwise assemble a PostgreSQL URL from the DB_* parts."""
    full_url = os.environ.get('DATABASE_URL')
    if full_url:
        return full_url

    host = os.environ.get('DB_HOST', 'localhost')
    port = os.environ.get('DB_PORT', '5432')
    name = os.environ.get('DB_NAME', 'qc_tool')
    user = os.environ.get('DB_USER', 'postgres')
    password = os.environ.get('DB_PASSWORD', 'postgres')
    return f'postgresql://{user}:{password}@{host}:{port}/{name}'


def _get_engine_options(database_url, pool_size=None, max_overflow=None):
    """Engine options for PostgreSQL. Other backends get the SQLAlchemy defaults."""
    if not database_url.startswith('postgresql'):
        return {}
    schema = os.environ.get('DB_SCHEMA', 'public')
    options = {
        'pool_pre_ping': True,
        'pool_recycle': 300,
        'connect_args': {
            'connect_timeout': 10,
            'options': f'-csearch_path={schema},public',
        },
    }
    if pool_size:
        options['pool_size'] = pool_size
    if max_overflow:
        options['max_overflow'] = max_overflow
    return options


class BaseConfig:
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-secret')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # JSON request bodies only
    MAX_CONTENT_LENGTH = 2 * 1024 * 1024

    # Auth: shared bearer token plus X-User-Id resolved against the stored users
    API_SECRET_TOKEN = os.environ.get('API_SECRET_TOKEN', 'local-dev-token-2026')
    AUTH_ENABLED = _env_flag('AUTH_ENABLED', 'true')

    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', 'http://localhost:5173,http://localhost:3000').split(',')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')
    LOG_FILE = os.environ.get('LOG_FILE', './logs/qc_tool.log')

    # Report table pagination
    DEFAULT_PAGE = 1
    DEFAULT_PER_PAGE = 20
    MAX_PER_PAGE = 100

    # Rate limiting
    RATELIMIT_DEFAULT = os.environ.get('RATELIMIT_DEFAULT', '100/minute')
    RATELIMIT_STORAGE_URI = 'memory://'
    LOGIN_RATE_LIMIT = os.environ.get('LOGIN_RATE_LIMIT', '20/minute')

    # CSV export file name prefix, e.g. QC_Report_20240101120000.csv
    EXPORT_FILENAME_PREFIX = os.environ.get('EXPORT_FILENAME_PREFIX', 'QC_Report')


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = _build_database_url()
    SQLALCHEMY_ENGINE_OPTIONS = _get_engine_options(SQLALCHEMY_DATABASE_URI)


class StagingConfig(BaseConfig):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = _build_database_url()
    SQLALCHEMY_ENGINE_OPTIONS = _get_engine_options(SQLALCHEMY_DATABASE_URI, pool_size=5, max_overflow=10)


class ProductionConfig(BaseConfig):
    """Shared rate-limit storage, INFO logging."""
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = _build_database_url()
    SQLALCHEMY_ENGINE_OPTIONS = _get_engine_options(SQLALCHEMY_DATABASE_URI, pool_size=10, max_overflow=20)
    RATELIMIT_STORAGE_URI = os.environ.get('REDIS_URL', 'memory://')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')


class TestingConfig(BaseConfig):
    """In-memory SQLite unless TEST_DATABASE_URL points elsewhere."""
    TESTING = True
    AUTH_ENABLED = True
    SQLALCHEMY_DATABASE_URI = os.environ.get('TEST_DATABASE_URL', 'sqlite://')
    SQLALCHEMY_ENGINE_OPTIONS = _get_engine_options(SQLALCHEMY_DATABASE_URI)
    RATELIMIT_ENABLED = False
    LOG_FILE = os.environ.get('TEST_LOG_FILE', './logs/test.log')


config = {
    'development': DevelopmentConfig,
    'staging': StagingConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig,
}
