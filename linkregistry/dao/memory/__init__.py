from linkregistry.dao.memory.link_record_memory_dao import LinkRecordMemoryDAO


__all__ = [
    'LinkRecordMemoryDAO',
]
