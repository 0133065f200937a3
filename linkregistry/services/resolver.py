"""Read path consulted by redirect handlers.

Example:
    >>> resolver = Resolver(store)
    >>> resolver.resolve('sale')
    'https://example.com/spring'
    >>> resolver.resolve('gone')
    Traceback (most recent call last):
        ...
    linkregistry.exceptions.NotFoundError: Short link 'gone' not found.
"""

import logging

from beartype import beartype

from linkregistry.constants import LogEvent
from linkregistry.dao.base import LinkRecordBaseDAO
from linkregistry.exceptions import NotFoundError
from linkregistry.utils.expiration import ExpirationPolicy


logger = logging.getLogger(__name__)


class Resolver:
    """Resolve codes to target URLs.

    Expired and never-existed codes raise the same NotFoundError with the same message.
    """

    def __init__(self, store: LinkRecordBaseDAO, policy: ExpirationPolicy | None = None):
        self.store = store
        self.policy = policy if policy is not None else store.policy

    @beartype
    def resolve(self, code: str) -> str:
        """Return the target URL of the live record stored under `code`.

        Raises:
            NotFoundError:
                If no record exists for `code` or the record has expired.
            DataStoreError:
                If the store backend fails.
        """
        record = self.store.get(code)
        if record is None or not self.policy.is_live(record):
            logger.info(
                'Short link not found.',
                extra={'code': code, 'expired': record is not None, 'event': LogEvent.LINK_NOT_FOUND},
            )
            raise NotFoundError(f"Short link '{code}' not found.")

        logger.debug('Resolved short link.', extra={'code': code, 'event': LogEvent.LINK_RESOLVED})
        return record.target_url
