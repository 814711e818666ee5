"""Bot 处理器模块"""

from campus_checkin.bot.handlers.message import message_handler

__all__ = [
    "message_handler",
]
