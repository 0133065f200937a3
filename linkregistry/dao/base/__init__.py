from linkregistry.dao.base.link_record_base_dao import LinkRecordBaseDAO


__all__ = [
    'LinkRecordBaseDAO',
]
