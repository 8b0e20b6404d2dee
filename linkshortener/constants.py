import string
from enum import StrEnum


# Base62 alphabet for generated shortcodes: digits, upper case, lower case
ALPHABET = string.digits + string.ascii_uppercase + string.ascii_lowercase


class Defaults:
    """Default registry tuning values."""

    CODE_LENGTH = 6  # 62**6 ~ 56.8 billion generated codes
    MAX_ATTEMPTS = 1_000  # Random generation retry cap before GenerationExhaustedError
    SHARDS = 16  # Number of independently locked link table shards
    TIMEZONE = 'UTC'  # Calendar day bucketing for visit statistics
    TIMELINE_LIMIT = 10  # Number of most recent visits in a timeline


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        PROJECT_ROOT = 'PROJECT_ROOT'
        LOG_LEVEL = 'LOG_LEVEL'

    class Registry(StrEnum):
        CONFIG_PATH = 'LINKSHORTENER_CONFIG'
        CODE_LENGTH = 'LINKSHORTENER_CODE_LENGTH'
        MAX_ATTEMPTS = 'LINKSHORTENER_MAX_ATTEMPTS'
        TIMEZONE = 'LINKSHORTENER_TIMEZONE'

    class Redis(StrEnum):
        HOST = 'REDIS_HOST'
        PORT = 'REDIS_PORT'
        DB = 'REDIS_DB'
        USERNAME = 'REDIS_USERNAME'
        PASSWORD = 'REDIS_PASSWORD'  # noqa: S105


# Structured log event names
LINK_REGISTERED = 'LINK_REGISTERED'
LINK_RESOLVED = 'LINK_RESOLVED'
LINK_NOT_FOUND = 'LINK_NOT_FOUND'
REGISTRATION_ROLLED_BACK = 'REGISTRATION_ROLLED_BACK'
LINKS_LOADED = 'LINKS_LOADED'
