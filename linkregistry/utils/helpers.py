"""Helper utilities shared across the registry.

Functions:
    utc_now() -> datetime
        Current instant as a timezone-aware UTC datetime
    get_short_url(code, base_url, path_segment) -> str
        Get string representation of short URL for a given code
    require_environment(*names: str) -> Callable
        Decorator: Ensure required environment variables are present

Example:
    >>> from linkregistry.utils.helpers import get_short_url
    >>> get_short_url('abc123', 'https://sho.rt/', 'r')
    'https://sho.rt/r/abc123'
"""

import os
import functools
from datetime import datetime, UTC
from collections.abc import Callable

from linkregistry.exceptions import MissingEnvironmentVariableError


def utc_now() -> datetime:
    """Return the current instant in UTC.

    Looks `datetime` up at call time so clock-freezing tools apply.
    """
    return datetime.now(UTC)


def get_short_url(code: str, base_url: str, path_segment: str | None = None) -> str:
    """Get string representation of shortened URL

    Args:
        code (str): short code
        base_url (str): public base address of the service
        path_segment (str | None): fixed path segment placed before the code

    Returns:
        str: short url string representation, always ending with '/<code>'

    Example:
        >>> get_short_url('abc123', 'https://sho.rt', 'r')
        'https://sho.rt/r/abc123'
        >>> get_short_url('abc123', 'https://sho.rt/')
        'https://sho.rt/abc123'
    """
    base = base_url.rstrip('/')
    segment = (path_segment or '').strip('/')
    if segment:
        return f'{base}/{segment}/{code}'
    return f'{base}/{code}'


def require_environment(*names: str) -> Callable:
    """Decorator ensuring required environment variables are present.

    Args:
        *names (str):
            Names of required environment variables.

    Raises:
        MissingEnvironmentVariableError:
            If any required environment variable is missing or empty.

    Example:
        >>> @require_environment('APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID')
        ... def my_function():
        ...     pass
        >>> my_function()
        MissingEnvironmentVariableError: Missing required environment variables: 'APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID'
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            missing = [name for name in names if not os.environ.get(name)]
            if missing:
                missing_list = ', '.join(f"'{name}'" for name in missing)
                raise MissingEnvironmentVariableError(f'Missing required environment variables: {missing_list}')
            return func(*args, **kwargs)

        return wrapper

    return decorator
