"""User record data access layer"""

import logging
from collections.abc import AsyncIterator

from campus_checkin.config.constants import LIST_PAGE_SIZE, USER_KEY_PREFIX
from campus_checkin.core.encryption import decrypt_password, encrypt_password, encryption_enabled
from campus_checkin.core.errors import InvalidRecord, UserNotFound
from campus_checkin.models.user_record import UserRecord, dump_record, parse_record
from campus_checkin.repositories.base import KeyValueStore
from campus_checkin.repositories.kv_repository import PostgresKeyValueStore

logger = logging.getLogger(__name__)


def user_key(chat_id: int) -> str:
    """Storage key of a user record"""
    return f"{USER_KEY_PREFIX}{chat_id}"


class UserRepository:
    """User record repository over a key-value store"""

    def __init__(self, store: KeyValueStore | None = None):
        self.store = store if store is not None else PostgresKeyValueStore()

    async def get(self, chat_id: int) -> UserRecord:
        """
        Get user record

        Raises:
            UserNotFound: No record for this chat
            InvalidRecord: Stored value does not match the schema or the key
        """
        return await self._get_by_key(user_key(chat_id), chat_id)

    async def put(self, chat_id: int, record: UserRecord) -> None:
        """Overwrite the whole user record"""
        await self.store.put(user_key(chat_id), self._serialize(record))

    async def delete(self, chat_id: int) -> None:
        """Delete user record (idempotent)"""
        await self.store.delete(user_key(chat_id))

    async def list_all(self) -> AsyncIterator[UserRecord]:
        """
        Iterate over all user records, following the store's cursor

        A record that fails validation aborts the iteration.

        Raises:
            InvalidRecord: A stored record does not match the schema or its key
            UserNotFound: A listed key vanished before it was read
        """
        cursor = None
        while True:
            page = await self.store.list_keys(USER_KEY_PREFIX, cursor=cursor, limit=LIST_PAGE_SIZE)
            logger.debug(f"读取用户列表分页: {len(page.keys)} 条")

            for key in page.keys:
                yield await self._get_by_key(key, self._chat_id_of(key))

            if page.list_complete:
                break
            cursor = page.cursor

    async def _get_by_key(self, key: str, chat_id: int | str) -> UserRecord:
        raw = await self.store.get(key)
        if raw is None:
            raise UserNotFound(chat_id)
        record = self._deserialize(raw, key)
        # 写回时按 record.chat_id 定位，必须与读取的键一致
        if record.chat_id != chat_id:
            raise InvalidRecord(key, [("chat_id", f"does not match key {key}")])
        return record

    @staticmethod
    def _chat_id_of(key: str) -> int | str:
        suffix = key[len(USER_KEY_PREFIX):]
        try:
            return int(suffix)
        except ValueError:
            return suffix

    @staticmethod
    def _serialize(record: UserRecord) -> str:
        if encryption_enabled():
            record = record.model_copy(update={"password": encrypt_password(record.password)})
        return dump_record(record)

    @staticmethod
    def _deserialize(raw: str, key: str) -> UserRecord:
        record = parse_record(raw, key)
        if encryption_enabled():
            try:
                password = decrypt_password(record.password)
            except ValueError as e:
                raise InvalidRecord(key, [("password", str(e))]) from e
            record = record.model_copy(update={"password": password})
        return record
