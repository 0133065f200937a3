"""Syntactic validation of target URLs and custom codes.

All functions are pure: no network access, no registry lookups.

Functions:
    is_valid_url(value) -> bool
        True for absolute http(s) URLs with a non-empty host.
    is_valid_custom_code(code) -> bool
        True for non-empty strings made of [A-Za-z0-9_-].
    normalize_url(value) -> str
        Strip surrounding whitespace and default the scheme to https.

Example:
    >>> from linkregistry.utils.validators import normalize_url, is_valid_url
    >>> normalize_url('example.com')
    'https://example.com'
    >>> is_valid_url('ftp://example.com')
    False
"""

import re
from urllib.parse import urlsplit


ALLOWED_SCHEMES = frozenset({'http', 'https'})

_CUSTOM_CODE_PATTERN = re.compile(r'[A-Za-z0-9_-]+')
_SCHEME_PREFIX_PATTERN = re.compile(r'^https?://', re.IGNORECASE)
_WHITESPACE_OR_CONTROL = re.compile(r'[\s\x00-\x1f\x7f]')


def is_valid_url(value) -> bool:
    """Return True iff `value` is an absolute http(s) URL with a host.

    Example:
        >>> is_valid_url('https://example.com/path?q=1')
        True
        >>> is_valid_url('https://')
        False
        >>> is_valid_url('javascript:alert(1)')
        False
    """
    if not isinstance(value, str) or not value:
        return False
    if _WHITESPACE_OR_CONTROL.search(value):
        return False

    try:
        components = urlsplit(value)
        hostname = components.hostname
        components.port  # raises ValueError on out-of-range or non-numeric ports
    except ValueError:
        return False

    # 'https://ftp://host' splits into host 'ftp' with an empty port
    if components.netloc.endswith(':'):
        return False

    return components.scheme.lower() in ALLOWED_SCHEMES and bool(hostname)


def is_valid_custom_code(code) -> bool:
    """Return True iff `code` is non-empty and made solely of [A-Za-z0-9_-].

    Example:
        >>> is_valid_custom_code('summer_sale-2025')
        True
        >>> is_valid_custom_code('a/b')
        False
        >>> is_valid_custom_code('')
        False
    """
    if not isinstance(code, str):
        return False
    return _CUSTOM_CODE_PATTERN.fullmatch(code) is not None


def normalize_url(value: str) -> str:
    """Strip surrounding whitespace and prepend 'https://' when no http(s) prefix is present.

    Example:
        >>> normalize_url('  example.com/page ')
        'https://example.com/page'
        >>> normalize_url('HTTP://example.com')
        'HTTP://example.com'
    """
    value = value.strip()
    if not _SCHEME_PREFIX_PATTERN.match(value):
        value = f'https://{value}'
    return value
