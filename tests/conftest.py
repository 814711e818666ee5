"""Shared test fixtures and configuration.

Sets fake environment variables so Settings can load, and provides an
in-memory key-value store, a recording notifier and mocked portal/geocoder.
"""

import os

# Patch env vars BEFORE any campus_checkin imports
os.environ.setdefault("BOT_TOKEN", "fake-token-for-tests")
os.environ.setdefault("AMAP_KEY", "fake-amap-key")
os.environ.setdefault("DATABASE_URL", "postgresql://localhost/test")
os.environ["ENCRYPTION_KEY"] = ""

import pytest
from unittest.mock import AsyncMock, MagicMock

from campus_checkin.config.settings import get_settings
from campus_checkin.repositories.base import KeyPage, KeyValueStore
from campus_checkin.repositories.user_repository import UserRepository
from campus_checkin.services.commands import CommandService
from campus_checkin.services.geocoding import Address
from campus_checkin.services.portal import CheckinResult
from campus_checkin.services.record_updates import new_record


class MemoryKeyValueStore(KeyValueStore):
    """In-memory store with small pages so cursors get exercised."""

    def __init__(self, page_size: int = 2):
        self.data: dict[str, str] = {}
        self.page_size = page_size
        self.list_calls = 0

    async def get(self, key):
        return self.data.get(key)

    async def put(self, key, value):
        self.data[key] = value

    async def delete(self, key):
        self.data.pop(key, None)

    async def list_keys(self, prefix, cursor=None, limit=1000):
        self.list_calls += 1
        size = min(limit, self.page_size)
        keys = sorted(k for k in self.data if k.startswith(prefix) and k > (cursor or ""))
        page = keys[:size]
        if len(keys) > size:
            return KeyPage(keys=page, cursor=page[-1], list_complete=False)
        return KeyPage(keys=page, cursor=None, list_complete=True)


class FakeNotifier:
    """Records every message instead of sending it."""

    def __init__(self):
        self.sent: list[tuple[int, str, bool]] = []

    async def send(self, chat_id, text, markdown=False):
        self.sent.append((chat_id, text, markdown))

    def texts(self, chat_id):
        return [text for cid, text, _ in self.sent if cid == chat_id]


BEIJING_REGEOCODE = {
    "formatted_address": "北京市海淀区学院路街道北京航空航天大学",
    "addressComponent": {
        "province": "北京市",
        "city": [],
        "district": "海淀区",
    },
}


@pytest.fixture
def beijing_regeocode():
    return BEIJING_REGEOCODE


@pytest.fixture
def kv_store():
    return MemoryKeyValueStore()


@pytest.fixture
def user_repo(kv_store):
    return UserRepository(store=kv_store)


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def portal():
    mock = MagicMock()
    mock.authenticate = AsyncMock(return_value="eai-sess=abc")
    mock.submit_checkin = AsyncMock(return_value=CheckinResult(success=True, message="操作成功"))
    return mock


@pytest.fixture
def geocoder():
    mock = MagicMock()
    mock.reverse = AsyncMock(return_value=Address(
        province="上海市",
        city="上海市",
        district="闵行区",
        formatted_address="上海市闵行区东川路800号",
        raw={"formatted_address": "上海市闵行区东川路800号"},
    ))
    return mock


@pytest.fixture
def command_service(notifier, user_repo, portal, geocoder):
    return CommandService(notifier, user_repo=user_repo, portal=portal, geocoder=geocoder)


@pytest.fixture
def checkin_service(command_service):
    return command_service.checkin_service


@pytest.fixture
def make_record():
    """Build a default record, optionally overriding fields."""
    def _make(chat_id=1001, **changes):
        record = new_record(chat_id, f"by{chat_id}", "secret")
        if changes:
            record = record.model_copy(update=changes)
        return record
    return _make


@pytest.fixture
def encryption_key():
    """Enable password encryption for the duration of a test."""
    settings = get_settings()
    settings.encryption_key = "k" * 32
    yield settings.encryption_key
    settings.encryption_key = ""
