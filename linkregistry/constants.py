from enum import StrEnum


# Default generated code length (62**7 ~ 3.5e12 codes)
DEFAULT_CODE_LENGTH = 7

# Upper bound on code draws per create() before giving up
DEFAULT_MAX_ATTEMPTS = 10

# Public address used when composing full short URLs
DEFAULT_BASE_URL = 'http://localhost:3000'
SHORT_URL_PATH = 'r'


class Duration:
    """Unit durations in milliseconds."""

    MINUTE = 60_000  # 60 * 1000
    HOUR = 3_600_000  # 60 * 60 * 1000
    DAY = 86_400_000  # 24 * 60 * 60 * 1000


class Backend(StrEnum):
    MEMORY = 'memory'
    REDIS = 'redis'


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        AWS_SAM_LOCAL = 'AWS_SAM_LOCAL'
        LOG_LEVEL = 'LOG_LEVEL'

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'

    class Registry(StrEnum):
        BACKEND = 'LINKREGISTRY_BACKEND'
        BASE_URL = 'LINKREGISTRY_BASE_URL'
        PATH_SEGMENT = 'LINKREGISTRY_PATH_SEGMENT'
        CODE_LENGTH = 'LINKREGISTRY_CODE_LENGTH'
        MAX_ATTEMPTS = 'LINKREGISTRY_MAX_ATTEMPTS'

    class Redis(StrEnum):
        HOST = 'REDIS_HOST'
        PORT = 'REDIS_PORT'
        DB = 'REDIS_DB'
        USERNAME = 'REDIS_USERNAME'
        PASSWORD = 'REDIS_PASSWORD'  # noqa: S105


class LogEvent(StrEnum):
    """Values for the `event` field of structured log records."""

    LINK_CREATED = 'LINK_CREATED'
    CODE_COLLISION = 'CODE_COLLISION'
    CODE_UNAVAILABLE = 'CODE_UNAVAILABLE'
    GENERATION_EXHAUSTED = 'GENERATION_EXHAUSTED'
    LINK_RESOLVED = 'LINK_RESOLVED'
    LINK_NOT_FOUND = 'LINK_NOT_FOUND'
    RECORD_RECLAIMED = 'RECORD_RECLAIMED'
