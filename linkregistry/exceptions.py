class LinkRegistryError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:link_registry_error'


class InvalidUrlError(LinkRegistryError):
    """Raised when a target URL is not an absolute http(s) URL."""

    error_code = 'link:invalid_url'


class InvalidCodeFormatError(LinkRegistryError):
    """Raised when a custom code contains characters outside [A-Za-z0-9_-] or is empty."""

    error_code = 'link:invalid_code_format'


class CodeUnavailableError(LinkRegistryError):
    """Raised when a custom code is already taken by a live record."""

    error_code = 'link:code_unavailable'


class InvalidDurationError(LinkRegistryError):
    """Raised when an expiration value, unit or instant is unusable."""

    error_code = 'link:invalid_duration'


class GenerationExhaustedError(LinkRegistryError):
    """Raised when no free code was found within the retry ceiling.

    Signals that the code length or alphabet needs widening.
    """

    error_code = 'link:generation_exhausted'


class NotFoundError(LinkRegistryError):
    """Raised when a code does not resolve to a live record."""

    error_code = 'link:not_found'


class ConfigurationError(LinkRegistryError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
