"""In-process registry store backed by a dictionary.

Suitable for single-process deployments and tests. Every `put` holds a lock
across the liveness check and the insert; reads are lock-free.

Classes:
    LinkRecordMemoryDAO:
        DAO for storing and retrieving LinkRecord in process memory.

Example:
    >>> dao = LinkRecordMemoryDAO()
    >>> dao.put(record)
    <LinkRecordMemoryDAO>
    >>> dao.get(record.code) is record
    True
"""

import logging
import threading

from beartype import beartype

from linkregistry.models import LinkRecord
from linkregistry.constants import LogEvent
from linkregistry.dao.base import LinkRecordBaseDAO
from linkregistry.dao.exceptions import ConflictError
from linkregistry.utils.expiration import ExpirationPolicy


logger = logging.getLogger(__name__)


class LinkRecordMemoryDAO(LinkRecordBaseDAO):
    """Dictionary-based Data Access Object (DAO) for link records.

    Attributes:
        policy (ExpirationPolicy):
            Judges record liveness on insert, eviction and `contains_live`.
    """

    def __init__(self, policy: ExpirationPolicy | None = None):
        self.policy = policy if policy is not None else ExpirationPolicy()
        self._records: dict[str, LinkRecord] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f'<{type(self).__name__}>'

    @beartype
    def put(self, record: LinkRecord, **kwargs) -> 'LinkRecordMemoryDAO':
        """Insert a link record, reclaiming the code if its current holder has expired.

        Raises:
            ConflictError:
                If a live record already holds `record.code`.
        """
        with self._lock:
            existing = self._records.get(record.code)
            if existing is not None:
                if self.policy.is_live(existing):
                    raise ConflictError(f"Live link with code '{record.code}' already exists.")
                logger.debug(
                    'Reclaiming code from expired record.',
                    extra={'code': record.code, 'event': LogEvent.RECORD_RECLAIMED},
                )
            self._records[record.code] = record
        return self

    @beartype
    def get(self, code: str, **kwargs) -> LinkRecord | None:
        return self._records.get(code)

    def evict_expired(self) -> int:
        """Remove every expired record and return how many were removed."""
        with self._lock:
            now = self.policy.now()
            expired = [code for code, record in self._records.items() if not self.policy.is_live(record, now)]
            for code in expired:
                del self._records[code]

        if expired:
            logger.info('Evicted expired link records.', extra={'evicted': len(expired)})
        return len(expired)
