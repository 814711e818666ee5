"""Tests for campus_checkin.repositories.user_repository — CRUD and paginated listing."""

import json

import pytest

from campus_checkin.core.errors import InvalidRecord, UserNotFound
from campus_checkin.models.user_record import dump_record
from campus_checkin.repositories.user_repository import user_key


async def _collect(user_repo):
    return [record async for record in user_repo.list_all()]


class TestCrud:
    @pytest.mark.asyncio
    async def test_put_then_get(self, user_repo, make_record):
        record = make_record(skip_count=1)
        await user_repo.put(record.chat_id, record)
        assert await user_repo.get(record.chat_id) == record

    @pytest.mark.asyncio
    async def test_key_layout(self, user_repo, kv_store, make_record):
        await user_repo.put(1001, make_record())
        assert list(kv_store.data) == ["user:1001"]
        assert user_key(1001) == "user:1001"

    @pytest.mark.asyncio
    async def test_put_overwrites(self, user_repo, make_record):
        await user_repo.put(1001, make_record(skip_count=4))
        await user_repo.put(1001, make_record())
        assert (await user_repo.get(1001)).skip_count == 0

    @pytest.mark.asyncio
    async def test_get_missing(self, user_repo):
        with pytest.raises(UserNotFound) as exc_info:
            await user_repo.get(5)
        assert exc_info.value.chat_id == 5

    @pytest.mark.asyncio
    async def test_get_corrupt(self, user_repo, kv_store):
        kv_store.data["user:5"] = json.dumps({"username": "x"})
        with pytest.raises(InvalidRecord):
            await user_repo.get(5)

    @pytest.mark.asyncio
    async def test_chat_id_must_match_key(self, user_repo, kv_store, make_record):
        kv_store.data["user:5"] = dump_record(make_record(6))
        with pytest.raises(InvalidRecord) as exc_info:
            await user_repo.get(5)
        assert exc_info.value.key == "user:5"
        assert exc_info.value.issues[0][0] == "chat_id"

    @pytest.mark.asyncio
    async def test_delete_is_idempotent(self, user_repo, make_record):
        await user_repo.put(1001, make_record())
        await user_repo.delete(1001)
        await user_repo.delete(1001)
        with pytest.raises(UserNotFound):
            await user_repo.get(1001)


class TestListAll:
    @pytest.mark.asyncio
    async def test_follows_cursor(self, user_repo, kv_store, make_record):
        for chat_id in range(1, 6):
            await user_repo.put(chat_id, make_record(chat_id))
        kv_store.data["other:1"] = "ignored"

        records = await _collect(user_repo)

        assert sorted(r.chat_id for r in records) == [1, 2, 3, 4, 5]
        # page size 2 -> 3 pages
        assert kv_store.list_calls == 3

    @pytest.mark.asyncio
    async def test_empty(self, user_repo):
        assert await _collect(user_repo) == []

    @pytest.mark.asyncio
    async def test_aborts_on_corrupt_record(self, user_repo, kv_store, make_record):
        for chat_id in (1, 3, 4):
            await user_repo.put(chat_id, make_record(chat_id))
        kv_store.data["user:2"] = "{broken"

        seen = []
        with pytest.raises(InvalidRecord) as exc_info:
            async for record in user_repo.list_all():
                seen.append(record.chat_id)

        assert exc_info.value.key == "user:2"
        assert seen == [1]

    @pytest.mark.asyncio
    async def test_aborts_on_record_under_foreign_key(self, user_repo, kv_store, make_record):
        await user_repo.put(1, make_record(1))
        kv_store.data["user:2"] = dump_record(make_record(3))

        with pytest.raises(InvalidRecord) as exc_info:
            await _collect(user_repo)

        assert exc_info.value.key == "user:2"


class TestEncryption:
    @pytest.mark.asyncio
    async def test_password_encrypted_at_rest(self, user_repo, kv_store, make_record, encryption_key):
        record = make_record()
        await user_repo.put(1001, record)

        stored = json.loads(kv_store.data["user:1001"])
        assert stored["password"] != "secret"
        assert await user_repo.get(1001) == record

    @pytest.mark.asyncio
    async def test_plaintext_record_with_key_is_invalid(self, user_repo, make_record, encryption_key, kv_store):
        kv_store.data["user:1001"] = dump_record(make_record())
        with pytest.raises(InvalidRecord) as exc_info:
            await user_repo.get(1001)
        assert exc_info.value.issues[0][0] == "password"
