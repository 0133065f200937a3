"""Process-wide wiring of the registry.

Build the store, service and resolver once at process startup and inject
them where needed; no module-level registry state exists.

Example:
    >>> from linkregistry.bootstrap import build_registry
    >>> registry = build_registry()
    >>> record = registry.service.create('example.com', custom_code='home')
    >>> registry.resolver.resolve('home')
    'https://example.com'
"""

import logging
from dataclasses import dataclass

from linkregistry.types import RegistryConfig
from linkregistry.constants import Backend, DEFAULT_BASE_URL, SHORT_URL_PATH, DEFAULT_CODE_LENGTH, DEFAULT_MAX_ATTEMPTS
from linkregistry.exceptions import BadConfigurationError
from linkregistry.dao.base import LinkRecordBaseDAO
from linkregistry.dao.memory import LinkRecordMemoryDAO
from linkregistry.dao.redis import LinkRecordRedisDAO
from linkregistry.services import LinkService, Resolver
from linkregistry.utils import load_config, app_prefix, CodeGenerator, ExpirationPolicy


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Registry:
    store: LinkRecordBaseDAO
    service: LinkService
    resolver: Resolver


def _positive_int(settings: dict, key: str, default: int) -> int:
    value = settings.get(key, default)
    if not isinstance(value, int) or isinstance(value, bool) or value < 1:
        raise BadConfigurationError(f"Registry setting '{key}' must be a positive integer (given value: {value!r}).")
    return value


def create_store(config: RegistryConfig, policy: ExpirationPolicy | None = None) -> LinkRecordBaseDAO:
    """Create the registry store selected by `config['active_backend']`.

    Raises:
        BadConfigurationError:
            If the backend is unknown.
        DataStoreError:
            If the Redis backend is selected and unreachable.
    """
    backend = config.get('active_backend', Backend.MEMORY)

    if backend == Backend.MEMORY:
        return LinkRecordMemoryDAO(policy=policy)

    if backend == Backend.REDIS:
        redis_config = {f'redis_{k}': v for k, v in config.get('redis', {}).items()}
        return LinkRecordRedisDAO(policy=policy, **redis_config, prefix=app_prefix())

    allowed = ', '.join(b.value for b in Backend)
    raise BadConfigurationError(f'Unknown registry backend {backend!r} (expected one of: {allowed}).')


def build_registry(config: RegistryConfig | None = None, policy: ExpirationPolicy | None = None) -> Registry:
    """Build the store, LinkService and Resolver from a configuration document.

    Args:
        config (dict | None):
            Configuration document (see `linkregistry.utils.config`).
            Loaded via `load_config()` when None.
        policy (ExpirationPolicy | None):
            Shared expiration policy. Defaults to a UTC wall-clock policy.

    Returns:
        Registry: store, service and resolver sharing one store instance
    """
    config = load_config() if config is None else config
    policy = policy if policy is not None else ExpirationPolicy()
    settings = config.get('registry', {})

    generator = CodeGenerator(length=_positive_int(settings, 'code_length', DEFAULT_CODE_LENGTH))
    store = create_store(config, policy)
    service = LinkService(
        store,
        policy=policy,
        generator=generator,
        base_url=settings.get('base_url', DEFAULT_BASE_URL),
        path_segment=settings.get('path_segment', SHORT_URL_PATH),
        max_attempts=_positive_int(settings, 'max_attempts', DEFAULT_MAX_ATTEMPTS),
    )
    resolver = Resolver(store, policy=policy)

    logger.info(
        'Link registry initialized.',
        extra={'backend': config.get('active_backend', Backend.MEMORY), 'codeLength': generator.length},
    )
    return Registry(store=store, service=service, resolver=resolver)
