from linkregistry.services.link_service import LinkService
from linkregistry.services.resolver import Resolver


__all__ = [
    'LinkService',
    'Resolver',
]
