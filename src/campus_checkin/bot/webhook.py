"""入站更新处理"""

import logging

from pydantic import ValidationError

from campus_checkin.config.constants import Ack
from campus_checkin.core.errors import NotARecognizedInboundMessage
from campus_checkin.models.inbound import InboundMessage, TelegramUpdate
from campus_checkin.services.commands import CommandService

logger = logging.getLogger(__name__)


def parse_update(payload: object) -> InboundMessage:
    """
    校验入站 JSON 是否为 Telegram 消息更新

    Raises:
        NotARecognizedInboundMessage: 不是消息更新
    """
    try:
        update = TelegramUpdate.model_validate(payload)
    except ValidationError as e:
        raise NotARecognizedInboundMessage(payload) from e
    return InboundMessage.from_update(update)


async def process_update(payload: object, command_service: CommandService) -> Ack:
    """
    处理一条入站更新

    命令层面的失败只通过通知告知用户，这里只返回固定应答。

    Args:
        payload: Update JSON
        command_service: 命令解释服务

    Returns:
        固定应答
    """
    try:
        message = parse_update(payload)
    except NotARecognizedInboundMessage as e:
        logger.error(f"请求不是 Telegram 消息更新: {e}")
        return Ack.ERROR

    ok = await command_service.handle(message)
    return Ack.SUCCESS if ok else Ack.ERROR
