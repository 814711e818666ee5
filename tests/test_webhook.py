"""Tests for campus_checkin.bot.webhook — inbound update validation and acknowledgement."""

import pytest

from campus_checkin.bot.webhook import parse_update, process_update
from campus_checkin.config.constants import Ack, HELP_TEXT
from campus_checkin.core.errors import NotARecognizedInboundMessage


def _update(**message):
    return {"update_id": 1, "message": {"message_id": 9, "chat": {"id": 1001, "type": "private"}, **message}}


class TestParseUpdate:
    def test_text_message(self):
        message = parse_update(_update(text="/info"))
        assert (message.chat_id, message.text, message.location) == (1001, "/info", None)

    def test_location_ignores_extra_fields(self):
        message = parse_update(_update(location={"longitude": 116.3, "latitude": 39.9, "horizontal_accuracy": 5}))
        assert message.location.longitude == 116.3

    @pytest.mark.parametrize("payload", [
        {},
        {"update_id": 1, "edited_message": {}},
        {"message": {"text": "/info"}},
        "hello",
    ])
    def test_not_an_update(self, payload):
        with pytest.raises(NotARecognizedInboundMessage):
            parse_update(payload)


class TestProcessUpdate:
    @pytest.mark.asyncio
    async def test_success_ack(self, command_service, notifier):
        assert await process_update(_update(text="/start"), command_service) == Ack.SUCCESS
        assert notifier.texts(1001) == [HELP_TEXT]

    @pytest.mark.asyncio
    async def test_garbage_payload(self, command_service, notifier):
        assert await process_update({"foo": "bar"}, command_service) == Ack.ERROR
        assert notifier.sent == []

    @pytest.mark.asyncio
    async def test_unknown_command_still_notifies(self, command_service, notifier):
        assert await process_update(_update(text="/nope"), command_service) == Ack.ERROR
        assert "/nope" in notifier.texts(1001)[0]

    def test_ack_texts(self):
        assert Ack.SUCCESS.value == "Success"
        assert Ack.ERROR.value == "end with error"
