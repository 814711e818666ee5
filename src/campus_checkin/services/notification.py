"""通知服务"""

import logging

from telegram import Bot
from telegram.constants import ParseMode
from telegram.error import TelegramError

logger = logging.getLogger(__name__)


class NotificationService:
    """通知服务（发送失败只记录日志）"""

    def __init__(self, bot: Bot):
        self.bot = bot

    async def send(self, chat_id: int, text: str, markdown: bool = False) -> None:
        """
        发送消息

        Args:
            chat_id: 会话 ID
            text: 消息内容
            markdown: 是否按 MarkdownV2 解析
        """
        try:
            await self.bot.send_message(
                chat_id=chat_id,
                text=text,
                parse_mode=ParseMode.MARKDOWN_V2 if markdown else None,
            )
        except TelegramError as e:
            logger.error(f"发送消息失败 (会话 {chat_id}): {e}")
