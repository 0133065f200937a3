"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    ConflictError:
        Raised when inserting a LinkRecord whose code is held by a live record.

    DataStoreError:
        Raised when there is an error in the data store (e.g., connection issues, timeouts, OOM, etc.).

Example:
    >>> from linkregistry.dao.exceptions import ConflictError
    >>> raise ConflictError("Live link with code 'sale' already exists.")
    Traceback (most recent call last):
        ...
    linkregistry.dao.exceptions.ConflictError: Live link with code 'sale' already exists.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    pass


class ConflictError(DAOError):
    """Exception raised when inserting a LinkRecord whose code is held by a live record.

    Recovered inside LinkService.create(); never surfaced to its callers.
    """

    pass


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, timeouts, OOM, etc.
    """

    pass
