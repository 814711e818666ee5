"""消息处理器（文本命令与位置）"""

import logging

from telegram import Update
from telegram.ext import ContextTypes, MessageHandler, filters

from campus_checkin.bot.webhook import process_update

logger = logging.getLogger(__name__)


async def message_callback(
    update: Update,
    context: ContextTypes.DEFAULT_TYPE,
):
    """将 Telegram 更新交给命令解释服务"""
    if not update.message:
        return

    command_service = context.bot_data["command_service"]
    ack = await process_update(update.to_dict(), command_service)
    logger.debug(f"更新 {update.update_id} 处理完成: {ack.value}")


message_handler = MessageHandler(filters.TEXT | filters.LOCATION, message_callback)
