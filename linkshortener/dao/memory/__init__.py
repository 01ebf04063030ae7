from linkshortener.dao.memory.mixins import MemoryStoreMixin
from linkshortener.dao.memory.short_link_memory_dao import ShortLinkMemoryDAO
from linkshortener.dao.memory.user_memory_dao import UserMemoryDAO


__all__ = [
    'MemoryStoreMixin',
    'ShortLinkMemoryDAO',
    'UserMemoryDAO',
]
