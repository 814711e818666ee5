"""格式化工具"""

import json
from collections.abc import Callable
from datetime import datetime

from telegram.helpers import escape_markdown

from campus_checkin.config.constants import HELP_TEXT
from campus_checkin.core.errors import CheckinBotError, ErrorKind
from campus_checkin.models.user_record import UserRecord

PASSWORD_MASK = "******"


def format_record(record: UserRecord) -> str:
    """
    格式化用户记录为 MarkdownV2 代码块（密码打码）

    Args:
        record: 用户记录

    Returns:
        MarkdownV2 文本
    """
    data = record.model_dump(mode="json")
    data["password"] = PASSWORD_MASK
    body = json.dumps(data, ensure_ascii=False, indent=2)
    return f"```json\n{escape_markdown(body, version=2, entity_type='pre')}\n```"


def format_current_time(dt: datetime) -> str:
    """格式化当前时间"""
    return f"⏰ 当前时间: {dt.strftime('%H:%M')}"


def format_checkin_result(result) -> str:
    """格式化打卡结果"""
    emoji = "✅" if result.success else "❌"
    return f"{emoji} {result.message}"


ERROR_MESSAGES: dict[ErrorKind, Callable[..., str]] = {
    ErrorKind.AUTHENTICATION: lambda e: f"❌ {e.reason}",
    ErrorKind.USER_NOT_FOUND: lambda e: f"💥 用户 {e.chat_id} 不存在，请先使用 /login 登录",
    ErrorKind.INVALID_RECORD: lambda e: "💥 保存的信息已损坏，请使用 /login 重新登录",
    ErrorKind.UNRECOGNIZED_COMMAND: lambda e: f"❓ 无效命令: {e.command}\n\n{HELP_TEXT}",
    ErrorKind.INVALID_SCHEDULE_TIME: lambda e: (
        f"❌ 打卡时间错误: {e.value}，小时应为 16-19，分钟应为 0 或 30"
    ),
    ErrorKind.MALFORMED_UPSTREAM_RESPONSE: lambda e: f"❌ 服务响应异常 ({e.source})，请稍后再试",
    ErrorKind.NOT_INBOUND_MESSAGE: lambda e: "❓ 无法识别的消息",
}


def format_error(error: CheckinBotError) -> str:
    """
    格式化业务异常为用户可读消息

    Args:
        error: 业务异常

    Returns:
        消息文本
    """
    return ERROR_MESSAGES[error.kind](error)
