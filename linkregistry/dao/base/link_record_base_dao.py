"""Abstract base class for LinkRecord data access objects (DAOs).

This class establishes a consistent contract for all registry store
implementations, regardless of the underlying storage mechanism
(e.g., in-process dictionary, Redis, DynamoDB).

Responsibilities:
    - Provide an interface for inserting and retrieving LinkRecord objects.
    - Make insertion the single atomic check-then-insert point on `code`.
    - Standardize error handling across multiple data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from linkregistry.models import LinkRecord
        >>> from linkregistry.dao.memory import LinkRecordMemoryDAO

        >>> dao = LinkRecordMemoryDAO()
        >>> dao.put(LinkRecord(code='a1b2c3', target_url='https://example.com', created_at=now))
        <LinkRecordMemoryDAO>

        >>> dao.get('a1b2c3').target_url
        'https://example.com'

        >>> dao.contains_live('a1b2c3')
        True
"""

from abc import ABC, abstractmethod

from linkregistry.models import LinkRecord
from linkregistry.utils.expiration import ExpirationPolicy


class LinkRecordBaseDAO(ABC):
    """Interface for LinkRecord data access objects (DAOs).

    Attributes:
        policy (ExpirationPolicy):
            Judges whether a stored record is still live.

    Methods:
        put(record: LinkRecord, **kwargs) -> LinkRecordBaseDAO:
            Insert a new LinkRecord keyed by its code.
            Raises ConflictError if a live record with the same code exists.
            Raises DataStoreError on connection or write failure.

        get(code: str, **kwargs) -> LinkRecord | None:
            Retrieve a LinkRecord by code regardless of its expiry state.
            Returns None if not found.
            Raises DataStoreError on connection or read failure.

        contains_live(code: str, **kwargs) -> bool:
            True iff a record exists for code and is still live.

    Subclassing:
        Datastore-specific implementations must set `self.policy` and
        implement `put` and `get`. Implementations of `put` must make the
        liveness check and the insert indivisible for concurrent callers.

    NOTE:
        - Records are never updated. Expired records may be reclaimed by a
          later `put` on the same code, or evicted by the backend.
    """

    policy: ExpirationPolicy

    @abstractmethod
    def put(self, record: LinkRecord, **kwargs) -> 'LinkRecordBaseDAO':
        """Insert a new LinkRecord into the data store.

        Args:
            record (LinkRecord):
                The LinkRecord instance to be inserted.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            LinkRecordBaseDAO: self (for method chaining)

        Raises:
            ConflictError:
                If a live LinkRecord with the same code already exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, code: str, **kwargs) -> LinkRecord | None:
        """Retrieve a LinkRecord from the data store by its code.

        Args:
            code (str):
                The code of the LinkRecord to be retrieved.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            LinkRecord | None: The LinkRecord if found (live or expired), otherwise None.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    def contains_live(self, code: str, **kwargs) -> bool:
        """Return True iff a live LinkRecord is stored under code.

        Used for availability checks before accepting a custom code. This is
        advisory only: `put` performs the authoritative check.
        """
        record = self.get(code, **kwargs)
        return record is not None and self.policy.is_live(record)
