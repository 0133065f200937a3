"""Utility functions for application configuration management.

This module provides a standardized interface for loading the registry's
settings document. Deployed processes read it from **AWS AppConfig**; each
environment (`APP_ENV`) has a dedicated AppConfig *Environment* within the
shared AppConfig *Application* identified by `APP_NAME`. Local processes (and
processes without AppConfig identifiers) build the same document from
environment variables.

The configuration JSON follows this structure:

    {
        "active_backend": "redis",
        "registry": {
            "base_url": "https://sho.rt",
            "path_segment": "s",
            "code_length": 7,
            "max_attempts": 10
        },
        "redis": {
            "host": "localhost",
            "port": 6379,
            "db": 0
        }
    }

Typical usage at process startup:
    >>> from linkregistry.utils.config import load_config
    >>> config = load_config()
    >>> config['active_backend']
    'memory'
"""

import os
import json
import functools
import logging
from collections.abc import Callable

import boto3

from linkregistry.types import RegistryConfig, AppConfigDataClient
from linkregistry.constants import (
    ENV,
    Backend,
    DEFAULT_BASE_URL,
    SHORT_URL_PATH,
    DEFAULT_CODE_LENGTH,
    DEFAULT_MAX_ATTEMPTS,
)
from linkregistry.exceptions import BadConfigurationError
from linkregistry.utils.helpers import require_environment
from linkregistry.utils.runtime import running_locally


logger = logging.getLogger(__name__)


def app_env() -> str:
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    return os.environ.get(ENV.App.APP_NAME)


def app_prefix() -> str | None:
    """Return key prefix for DAOs as <app name>:<app env>, or None if APP_NAME is not set."""
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def _int_env(name: str, default: int | None) -> int | None:
    raw = os.environ.get(name)
    if raw is None or raw == '':
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise BadConfigurationError(f'Environment variable {name} must be an integer (given value: {raw!r}).') from e


def environment_config() -> RegistryConfig:
    """Build the configuration document from environment variables.

    Environment variables used (all optional):
        LINKREGISTRY_BACKEND        : 'memory' (default) or 'redis'
        LINKREGISTRY_BASE_URL       : public base address (default: http://localhost:3000)
        LINKREGISTRY_PATH_SEGMENT   : path segment before the code (default: 'r')
        LINKREGISTRY_CODE_LENGTH    : generated code length (default: 7)
        LINKREGISTRY_MAX_ATTEMPTS   : code draws per create() (default: 10)
        REDIS_HOST / REDIS_PORT / REDIS_DB / REDIS_USERNAME / REDIS_PASSWORD
    """
    redis_config = {
        'host': os.environ.get(ENV.Redis.HOST, 'localhost'),
        'port': _int_env(ENV.Redis.PORT, 6379),
        'db': _int_env(ENV.Redis.DB, 0),
    }
    # Credentials are only passed when set
    for key, name in (('username', ENV.Redis.USERNAME), ('password', ENV.Redis.PASSWORD)):
        if os.environ.get(name):
            redis_config[key] = os.environ[name]

    return {
        'active_backend': os.environ.get(ENV.Registry.BACKEND, Backend.MEMORY).lower(),
        'registry': {
            'base_url': os.environ.get(ENV.Registry.BASE_URL, DEFAULT_BASE_URL),
            'path_segment': os.environ.get(ENV.Registry.PATH_SEGMENT, SHORT_URL_PATH),
            'code_length': _int_env(ENV.Registry.CODE_LENGTH, DEFAULT_CODE_LENGTH),
            'max_attempts': _int_env(ENV.Registry.MAX_ATTEMPTS, DEFAULT_MAX_ATTEMPTS),
        },
        'redis': redis_config,
    }


def _load_local_config(func: Callable) -> Callable:
    """Decorator: build the configuration from environment variables when AppConfig is unavailable.

    Behavior:
        - If the application is running locally, or any AppConfig identifier
          is missing, return `environment_config()`.
        - Else, call the wrapped function (which pulls from AWS AppConfig via boto3).
    """

    @functools.wraps(func)
    def wrapper() -> RegistryConfig:
        appconfig_ids = [os.environ.get(name) for name in ENV.AppConfig]
        if running_locally() or not all(appconfig_ids):
            logger.debug('Loading configuration from environment variables.', extra={'appEnv': app_env()})
            return environment_config()
        return func()

    return wrapper


def _appconfig_client() -> AppConfigDataClient:
    return boto3.client('appconfigdata')


@_load_local_config
@require_environment(ENV.AppConfig.APP_ID, ENV.AppConfig.ENV_ID, ENV.AppConfig.PROFILE_ID)
def load_config() -> RegistryConfig:
    """Load the registry configuration document from AWS AppConfig.

    Environment variables required:
        APPCONFIG_APP_ID       : AppConfig Application ID
        APPCONFIG_ENV_ID       : AppConfig Environment ID
        APPCONFIG_PROFILE_ID   : AppConfig Configuration Profile ID

    Returns:
        dict: The configuration document as a Python dictionary.

    Raises:
        BadConfigurationError:
            If the AppConfig document is not valid JSON.
        botocore.exceptions.ClientError:
            If AppConfig rejects the request.
    """
    logger.debug('Trying to load configuration from AWS AppConfig.', extra={'appEnv': app_env()})

    appconfig = _appconfig_client()

    # Start an AppConfig data session
    session_token = appconfig.start_configuration_session(
        ApplicationIdentifier=os.environ[ENV.AppConfig.APP_ID],
        EnvironmentIdentifier=os.environ[ENV.AppConfig.ENV_ID],
        ConfigurationProfileIdentifier=os.environ[ENV.AppConfig.PROFILE_ID],
    )['InitialConfigurationToken']

    # Fetch the configuration
    response = appconfig.get_latest_configuration(ConfigurationToken=session_token)
    content = response['Configuration'].read()
    try:
        config = json.loads(content.decode('utf-8'))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise BadConfigurationError('AppConfig document is not valid JSON.') from e

    logger.debug('Loaded configuration from AWS AppConfig.', extra={'activeBackend': config.get('active_backend')})
    return config
