"""
Application Configuration

Centralizes all Flask and application configuration settings.
Database connection parameters come from environment variables.
"""

import os
from urllib.parse import quote_plus

# Base directory of the application
BASE_DIR = os.path.dirname(os.path.abspath(__file__))


def build_database_uri(require_ssl=False):
    """
    Resolve the database URL.

    DATABASE_URL wins if set. Otherwise a PostgreSQL URL is built from
    POSTGRES_USER, POSTGRES_PASSWORD, POSTGRES_HOST, POSTGRES_DB and
    DB_PORT. Without POSTGRES_HOST, fall back to a local SQLite file.
    """
    url = os.environ.get('DATABASE_URL')
    if url:
        return url

    host = os.environ.get('POSTGRES_HOST')
    if not host:
        return 'sqlite:///' + os.path.join(BASE_DIR, 'kitchen.db')

    user = quote_plus(os.environ.get('POSTGRES_USER', ''))
    password = quote_plus(os.environ.get('POSTGRES_PASSWORD', ''))
    database = os.environ.get('POSTGRES_DB', '')
    port = int(os.environ.get('DB_PORT', '5432'))

    credentials = f'{user}:{password}@' if password else (f'{user}@' if user else '')
    url = f'postgresql://{credentials}{host}:{port}/{database}'

    sslmode = os.environ.get('DB_SSLMODE') or ('require' if require_ssl else None)
    if sslmode:
        url += f'?sslmode={sslmode}'
    return url


class Config:
    """Base configuration class."""

    # Flask settings
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-only-change-in-production')

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # SQLAlchemy settings
    SQLALCHEMY_DATABASE_URI = build_database_uri()
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Check pooled connections before handing them to a request
    SQLALCHEMY_ENGINE_OPTIONS = {'pool_pre_ping': True}


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = build_database_uri(require_ssl=True)


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SQLALCHEMY_ENGINE_OPTIONS = {}
    LOG_LEVEL = 'WARNING'


# Configuration dictionary for easy access
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


def get_config(env=None):
    """Get configuration based on environment."""
    if env is None:
        env = os.environ.get('FLASK_ENV', 'development')
    return config.get(env, config['default'])
