import os
from datetime import timedelta


def _env_bool(name, default=False):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name, default):
    try:
        return int(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


class Config:
    # Database
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL', 'postgresql://localhost:5432/leqet_fit_coacha')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # JWT session (bearer header or httpOnly cookie)
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY', 'dev-jwt-secret-change-me')
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(days=7)
    JWT_TOKEN_LOCATION = ['headers', 'cookies']
    JWT_HEADER_NAME = 'Authorization'
    JWT_HEADER_TYPE = 'Bearer'
    JWT_ACCESS_COOKIE_NAME = 'leqet_session'
    JWT_ACCESS_COOKIE_PATH = '/'
    JWT_COOKIE_SECURE = _env_bool('JWT_COOKIE_SECURE', True)
    JWT_COOKIE_SAMESITE = 'Lax'
    JWT_SESSION_COOKIE = False

    # Double-submit CSRF cookie, checked only for cookie-authenticated writes
    JWT_COOKIE_CSRF_PROTECT = True
    JWT_ACCESS_CSRF_COOKIE_NAME = 'leqet_csrf'
    JWT_ACCESS_CSRF_COOKIE_PATH = '/'
    JWT_ACCESS_CSRF_HEADER_NAME = 'X-CSRF-TOKEN'
    JWT_CSRF_CHECK_FORM = False

    CORS_ORIGINS = [o.strip() for o in os.getenv('CORS_ORIGINS', 'http://localhost:5173,http://localhost:3000').split(',') if o.strip()]

    # SMTP
    MAIL_SERVER = os.getenv('SMTP_HOST')
    MAIL_PORT = _env_int('SMTP_PORT', 587)
    MAIL_USE_SSL = _env_bool('SMTP_SECURE', False) or MAIL_PORT == 465
    MAIL_USE_TLS = not MAIL_USE_SSL
    MAIL_USERNAME = os.getenv('SMTP_USER')
    MAIL_PASSWORD = os.getenv('SMTP_PASS')
    MAIL_DEFAULT_SENDER = ('Leqet Gym', os.getenv('FROM_EMAIL') or os.getenv('SMTP_USER') or 'no-reply@leqetgym.com')
    MAIL_SEND_TIMEOUT = _env_int('SMTP_SEND_TIMEOUT_MS', 12000) / 1000.0

    # Third-party lookups
    EDAMAM_APP_ID = (os.getenv('EDAMAM_APP_ID') or '').strip('"') or None
    EDAMAM_APP_KEY = (os.getenv('EDAMAM_APP_KEY') or '').strip('"') or None
    API_NINJAS_KEY = os.getenv('API_NINJAS_KEY')
    EXTERNAL_API_TIMEOUT = 10

    # Backups
    PG_DUMP_PATH = os.getenv('PG_DUMP_PATH', 'pg_dump')
    BACKUP_DIR = os.getenv('BACKUP_DIR', os.path.join(os.getcwd(), 'backups'))
    DB_HOST = os.getenv('DB_HOST') or os.getenv('PGHOST') or 'localhost'
    DB_PORT = _env_int('DB_PORT', 5432)
    DB_NAME = os.getenv('DB_NAME') or os.getenv('PGDATABASE') or 'leqet_fit_coacha'
    DB_USER = os.getenv('DB_USER') or os.getenv('PGUSER')
    DB_PASSWORD = os.getenv('DB_PASSWORD') or os.getenv('PGPASSWORD')
    PCLOUD_ACCESS_TOKEN = os.getenv('PCLOUD_ACCESS_TOKEN')
    PCLOUD_FOLDER = 'leqet_backups'

    # System monitor
    DB_STORAGE_LIMIT_BYTES = _env_int('DB_STORAGE_LIMIT_BYTES', 100 * 1024 ** 3)
    BANDWIDTH_LIMIT_BYTES_24H = _env_int('BANDWIDTH_LIMIT_BYTES_24H', 200 * 1024 ** 3)
    PERF_WINDOW_SECONDS = 24 * 60 * 60
    SYSTEM_LOG_RETENTION_DAYS = 30

    # Seed account
    ADMIN_EMAIL = os.getenv('ADMIN_EMAIL', 'admin@leqetgym.com')
    ADMIN_PASSWORD = os.getenv('ADMIN_PASSWORD', 'password123')

    # Rate limiting
    RATELIMIT_STORAGE_URI = os.getenv('RATELIMIT_STORAGE_URI', 'memory://')
    RATELIMIT_HEADERS_ENABLED = True
    LOGIN_RATE_LIMIT = '10 per 15 minutes'
    OTP_RATE_LIMIT = '5 per 15 minutes'

    # Background jobs / realtime
    SCHEDULER_ENABLED = _env_bool('SCHEDULER_ENABLED', True)
    SCHEDULER_API_ENABLED = False
    SOCKETIO_ASYNC_MODE = None

    # Logging
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_FILE = os.getenv('LOG_FILE')


class DevelopmentConfig(Config):
    DEBUG = True
    JWT_COOKIE_SECURE = False
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL', 'sqlite:///fitcoach-dev.db')


class ProductionConfig(Config):
    DEBUG = False
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY')
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL')
    PREFERRED_URL_SCHEME = 'https'


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    JWT_SECRET_KEY = 'test-secret-key-with-enough-length-for-hs256'
    JWT_COOKIE_SECURE = False
    MAIL_SERVER = 'smtp.test.local'
    MAIL_USERNAME = 'mailer@test.local'
    MAIL_PASSWORD = 'secret'
    MAIL_SUPPRESS_SEND = True
    EDAMAM_APP_ID = None
    EDAMAM_APP_KEY = None
    API_NINJAS_KEY = None
    PCLOUD_ACCESS_TOKEN = None
    RATELIMIT_ENABLED = False
    SCHEDULER_ENABLED = False
    SOCKETIO_ASYNC_MODE = 'threading'
    LOG_FILE = None


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
