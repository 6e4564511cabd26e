import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


def _get(key, default=None):
    # Process environment overrides env.yaml
    return os.environ.get(key, data.get(key, default))


def _get_bool(key, default=False):
    value = _get(key, default)
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def _get_list(key, default=None):
    value = _get(key, default or [])
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return list(value)


class ApplicationConfig:
    DB_URI = _get("DB_URI", "sqlite+aiosqlite:///./natours.db")
    DB_CREATE_TABLES = _get_bool("DB_CREATE_TABLES", True)
    API_PREFIX = _get("API_PREFIX", "/api/v1")
    API_PORT = int(_get("API_PORT", 8000))
    API_HOST = _get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = _get_list("CORS_ORIGINS")
    CORS_ALLOW_CREDENTIALS = _get_bool("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = _get("LOG_LEVEL", "INFO")

    # Session tokens
    JWT_SECRET = _get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_EXPIRES_IN_DAYS = int(_get("JWT_EXPIRES_IN_DAYS", 90))
    JWT_COOKIE_NAME = _get("JWT_COOKIE_NAME", "jwt")
    JWT_COOKIE_EXPIRES_IN_DAYS = int(_get("JWT_COOKIE_EXPIRES_IN_DAYS", 90))

    PASSWORD_RESET_EXPIRES_MINUTES = int(_get("PASSWORD_RESET_EXPIRES_MINUTES", 10))

    # Outbound email
    EMAIL_BACKEND = _get("EMAIL_BACKEND", "console")
    EMAIL_HOST = _get("EMAIL_HOST", "localhost")
    EMAIL_PORT = int(_get("EMAIL_PORT", 587))
    EMAIL_USERNAME = _get("EMAIL_USERNAME", "")
    EMAIL_PASSWORD = _get("EMAIL_PASSWORD", "")
    EMAIL_USE_TLS = _get_bool("EMAIL_USE_TLS", True)
    EMAIL_FROM = _get("EMAIL_FROM", "hello@natours.io")
    EMAIL_FROM_NAME = _get("EMAIL_FROM_NAME", "Natours")
