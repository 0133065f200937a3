from linkregistry.utils.config import app_env, app_name, app_prefix, load_config
from linkregistry.utils.helpers import utc_now, get_short_url, require_environment
from linkregistry.utils.validators import is_valid_url, is_valid_custom_code, normalize_url
from linkregistry.utils.shortener import CodeGenerator
from linkregistry.utils.expiration import ExpirationPolicy, ExpirationUnit
from linkregistry.utils.logging import initialize_logging


__all__ = [
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'utc_now',
    'get_short_url',
    'require_environment',
    'is_valid_url',
    'is_valid_custom_code',
    'normalize_url',
    'CodeGenerator',
    'ExpirationPolicy',
    'ExpirationUnit',
    'initialize_logging',
]
