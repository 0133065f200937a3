"""Link creation and lookup.

The LinkService is the write path of the registry: it validates input,
claims a custom code or generates a free one, attaches an expiry and writes
exactly one record. It also formats full short URLs for clients.

Procedure followed by `create()`:
    - Step 1: Normalize the target URL (default scheme https)
    - Step 2: Validate the target URL
    - Step 3: Resolve the expiry instant (absolute, or value + unit)
    - Step 4: Claim the custom code, or generate an unused code
    - Step 5: Build the record and insert it (retrying generated codes on conflict)

Example:
    >>> from linkregistry.dao.memory import LinkRecordMemoryDAO
    >>> service = LinkService(LinkRecordMemoryDAO(), base_url='https://sho.rt')
    >>> record = service.create('example.com')
    >>> record.target_url
    'https://example.com'
    >>> service.get_full_short_url('sale')
    'https://sho.rt/r/sale'
"""

import logging
from datetime import datetime

from beartype import beartype

from linkregistry.models import LinkRecord
from linkregistry.constants import LogEvent, DEFAULT_BASE_URL, SHORT_URL_PATH, DEFAULT_MAX_ATTEMPTS
from linkregistry.dao.base import LinkRecordBaseDAO
from linkregistry.dao.exceptions import ConflictError
from linkregistry.exceptions import (
    InvalidUrlError,
    InvalidCodeFormatError,
    CodeUnavailableError,
    InvalidDurationError,
    GenerationExhaustedError,
    NotFoundError,
)
from linkregistry.utils.helpers import get_short_url
from linkregistry.utils.shortener import CodeGenerator
from linkregistry.utils.expiration import ExpirationPolicy
from linkregistry.utils.validators import is_valid_url, is_valid_custom_code, normalize_url


logger = logging.getLogger(__name__)


class LinkService:
    """Orchestrates validation, code selection, expiry and storage of short links.

    Attributes:
        store (LinkRecordBaseDAO):
            Registry store the records are written to.
        policy (ExpirationPolicy):
            Clock and expiry rules. Defaults to the store's policy.
        generator (CodeGenerator):
            Source of candidate codes when no custom code is requested.
        base_url (str):
            Public base address used by `get_full_short_url()`.
        path_segment (str):
            Fixed path segment placed between the base address and the code.
        max_attempts (int):
            Upper bound on code draws per `create()` call.
    """

    is_valid_url = staticmethod(is_valid_url)
    is_valid_custom_code = staticmethod(is_valid_custom_code)

    def __init__(
        self,
        store: LinkRecordBaseDAO,
        policy: ExpirationPolicy | None = None,
        generator: CodeGenerator | None = None,
        base_url: str = DEFAULT_BASE_URL,
        path_segment: str = SHORT_URL_PATH,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ):
        if max_attempts < 1:
            raise ValueError(f'max_attempts must be a positive integer (given value: {max_attempts}).')

        self.store = store
        self.policy = policy if policy is not None else store.policy
        self.generator = generator if generator is not None else CodeGenerator()
        self.base_url = base_url
        self.path_segment = path_segment
        self.max_attempts = max_attempts

    @beartype
    def create(
        self,
        target_url: str,
        custom_code: str | None = None,
        expires_at: datetime | None = None,
        expires_in: tuple | None = None,
    ) -> LinkRecord:
        """Register a new short link.

        Args:
            target_url (str):
                URL to shorten. 'https://' is prepended when no http(s) prefix is present.
            custom_code (str | None):
                Caller-chosen code. None means "generate one".
            expires_at (datetime | None):
                Absolute, timezone-aware expiry instant.
            expires_in (tuple[int, str] | None):
                Relative expiry as (value, unit), e.g. (7, 'days').
                Mutually exclusive with `expires_at`.

        Returns:
            LinkRecord: the stored record

        Raises:
            InvalidUrlError:
                If the (normalized) target URL is not an absolute http(s) URL.
            InvalidDurationError:
                If the expiry is malformed, naive, not in the future, or both
                `expires_at` and `expires_in` are given.
            InvalidCodeFormatError:
                If `custom_code` is empty or contains characters outside [A-Za-z0-9_-].
            CodeUnavailableError:
                If `custom_code` is held by a live record.
            GenerationExhaustedError:
                If no free code was found within `max_attempts` draws.
            DataStoreError:
                If the store backend fails.
        """
        # 1- Normalize and validate the target URL
        if not target_url.strip():
            raise InvalidUrlError('Please enter a URL.')
        url = normalize_url(target_url)
        if not is_valid_url(url):
            raise InvalidUrlError(f'Invalid URL: {url!r}.')

        # 2- Resolve the expiry instant
        now = self.policy.now()
        expires_at = self._resolve_expiry(now, expires_at, expires_in)

        # 3- Claim the requested custom code
        if custom_code is not None:
            return self._create_custom(url, custom_code, now, expires_at)

        # 4- Otherwise draw codes until one is stored
        return self._create_generated(url, now, expires_at)

    def _resolve_expiry(self, now: datetime, expires_at: datetime | None, expires_in: tuple | None) -> datetime | None:
        if expires_at is not None and expires_in is not None:
            raise InvalidDurationError('Specify either an expiry instant or a duration, not both.')

        if expires_in is not None:
            if len(expires_in) != 2:
                raise InvalidDurationError(f'Duration must be a (value, unit) pair (given value: {expires_in!r}).')
            value, unit = expires_in
            return self.policy.compute_expiry(now, value, unit)

        if expires_at is not None:
            if expires_at.tzinfo is None or expires_at.utcoffset() is None:
                raise InvalidDurationError('Expiry instant must be timezone-aware.')
            if expires_at <= now:
                raise InvalidDurationError(f'Expiry instant {expires_at.isoformat()} is not in the future.')

        return expires_at

    def _create_custom(self, url: str, code: str, now: datetime, expires_at: datetime | None) -> LinkRecord:
        if not is_valid_custom_code(code):
            raise InvalidCodeFormatError('Custom code can only contain letters, numbers, hyphens and underscores.')
        if self.store.contains_live(code):
            logger.info('Custom code already in use.', extra={'code': code, 'event': LogEvent.CODE_UNAVAILABLE})
            raise CodeUnavailableError(f"Custom code '{code}' is already in use.")

        record = LinkRecord(code=code, target_url=url, created_at=now, expires_at=expires_at, is_custom=True)
        try:
            self.store.put(record)
        except ConflictError as e:
            # Another caller claimed the code between the availability check and the insert
            logger.info(
                'Custom code claimed concurrently.',
                extra={'code': code, 'event': LogEvent.CODE_UNAVAILABLE},
            )
            raise CodeUnavailableError(f"Custom code '{code}' is already in use.") from e

        logger.info('Short link created.', extra={'code': code, 'isCustom': True, 'event': LogEvent.LINK_CREATED})
        return record

    def _create_generated(self, url: str, now: datetime, expires_at: datetime | None) -> LinkRecord:
        for attempt in range(1, self.max_attempts + 1):
            code = self.generator.generate()
            if self.store.contains_live(code):
                logger.debug(
                    'Generated code already taken.',
                    extra={'code': code, 'attempt': attempt, 'event': LogEvent.CODE_COLLISION},
                )
                continue

            record = LinkRecord(code=code, target_url=url, created_at=now, expires_at=expires_at, is_custom=False)
            try:
                self.store.put(record)
            except ConflictError:
                logger.debug(
                    'Generated code claimed concurrently.',
                    extra={'code': code, 'attempt': attempt, 'event': LogEvent.CODE_COLLISION},
                )
                continue

            logger.info(
                'Short link created.',
                extra={'code': code, 'isCustom': False, 'attempt': attempt, 'event': LogEvent.LINK_CREATED},
            )
            return record

        logger.error(
            'No free code found within the retry ceiling.',
            extra={
                'attempts': self.max_attempts,
                'codeSpace': self.generator.space_size(),
                'event': LogEvent.GENERATION_EXHAUSTED,
            },
        )
        raise GenerationExhaustedError(f'No free code found after {self.max_attempts} attempts; widen the code length or alphabet.')

    def is_custom_code_available(self, code: str) -> bool:
        """Return True iff `code` is a valid custom code not held by a live record.

        Advisory: `create()` re-checks atomically.
        """
        return is_valid_custom_code(code) and not self.store.contains_live(code)

    def lookup(self, code: str) -> LinkRecord:
        """Return the live record for `code`.

        Raises:
            NotFoundError: if the code never existed or has expired.
        """
        record = self.store.get(code) if isinstance(code, str) else None
        if record is None or not self.policy.is_live(record):
            raise NotFoundError(f"Short link '{code}' not found.")
        return record

    def get_full_short_url(self, code: str) -> str:
        """Return '<base_url>/<path_segment>/<code>'. Pure formatting, no I/O."""
        return get_short_url(code, self.base_url, self.path_segment)
