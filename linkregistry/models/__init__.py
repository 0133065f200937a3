from linkregistry.models.link_record_model import LinkRecord


__all__ = [
    'LinkRecord',
]
