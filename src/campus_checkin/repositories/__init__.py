"""数据访问层模块"""

from campus_checkin.repositories.base import KeyPage, KeyValueStore
from campus_checkin.repositories.kv_repository import PostgresKeyValueStore
from campus_checkin.repositories.user_repository import UserRepository, user_key

__all__ = [
    "KeyPage",
    "KeyValueStore",
    "PostgresKeyValueStore",
    "UserRepository",
    "user_key",
]
