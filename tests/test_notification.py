"""Tests for campus_checkin.services.notification."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from telegram.constants import ParseMode
from telegram.error import NetworkError

from campus_checkin.services.notification import NotificationService


@pytest.fixture
def bot():
    mock = MagicMock()
    mock.send_message = AsyncMock()
    return mock


@pytest.mark.asyncio
async def test_plain_text(bot):
    await NotificationService(bot).send(1001, "hi")
    bot.send_message.assert_awaited_once_with(chat_id=1001, text="hi", parse_mode=None)


@pytest.mark.asyncio
async def test_markdown(bot):
    await NotificationService(bot).send(1001, "```json\n{}\n```", markdown=True)
    assert bot.send_message.await_args.kwargs["parse_mode"] == ParseMode.MARKDOWN_V2


@pytest.mark.asyncio
async def test_send_failure_is_logged_not_raised(bot, caplog):
    bot.send_message.side_effect = NetworkError("timed out")

    await NotificationService(bot).send(1001, "hi")

    assert "1001" in caplog.text
