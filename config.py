import os
from datetime import timedelta


def _env_bool(name, default=False):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev_secret_key')
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URI', 'sqlite:///fullsco.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    UPLOAD_FOLDER = os.getenv('UPLOAD_FOLDER', os.path.join('static', 'uploads'))
    MAX_CONTENT_LENGTH = int(os.getenv('MAX_UPLOAD_MB', '5')) * 1024 * 1024

    APP_ENV = os.getenv('APP_ENV', 'development')
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    # server-side sessions
    SESSION_COOKIE_NAME = os.getenv('SESSION_COOKIE_NAME', 'fullsco_session')
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    SESSION_COOKIE_SECURE = _env_bool('SESSION_COOKIE_SECURE', APP_ENV == 'production')
    PERMANENT_SESSION_LIFETIME = timedelta(hours=int(os.getenv('SESSION_LIFETIME_HOURS', '24')))
    SESSION_SWEEP_INTERVAL = timedelta(hours=int(os.getenv('SESSION_SWEEP_INTERVAL_HOURS', '24')))

    DEFAULT_LANGUAGE = os.getenv('DEFAULT_LANGUAGE', 'ar')
    SUPPORTED_LANGUAGES = ('ar', 'en')
    ITEMS_PER_PAGE = int(os.getenv('ITEMS_PER_PAGE', '12'))


class ProductionConfig(Config):
    APP_ENV = 'production'
    SESSION_COOKIE_SECURE = True


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SECRET_KEY = 'test-secret'
    SESSION_COOKIE_SECURE = False
    LOG_LEVEL = 'WARNING'
