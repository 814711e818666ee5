"""业务异常定义

每种失败对应一个 ErrorKind，异常只携带该类失败需要的数据，
在捕获边界按 kind 查表处理。
"""

from enum import Enum


class ErrorKind(str, Enum):
    """异常类型枚举"""
    AUTHENTICATION = "authentication"
    USER_NOT_FOUND = "user_not_found"
    INVALID_RECORD = "invalid_record"
    UNRECOGNIZED_COMMAND = "unrecognized_command"
    INVALID_SCHEDULE_TIME = "invalid_schedule_time"
    MALFORMED_UPSTREAM_RESPONSE = "malformed_upstream_response"
    NOT_INBOUND_MESSAGE = "not_inbound_message"


class CheckinBotError(Exception):
    """业务异常基类"""

    kind: ErrorKind


class AuthenticationError(CheckinBotError):
    """门户登录失败"""

    kind = ErrorKind.AUTHENTICATION

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class UserNotFound(CheckinBotError):
    """用户记录不存在"""

    kind = ErrorKind.USER_NOT_FOUND

    def __init__(self, chat_id: int):
        super().__init__(f"user {chat_id} not found")
        self.chat_id = chat_id


class InvalidRecord(CheckinBotError):
    """存储的用户记录不符合结构"""

    kind = ErrorKind.INVALID_RECORD

    def __init__(self, key: str, issues: list[tuple[str, str]]):
        super().__init__(f"invalid record {key}: {issues}")
        self.key = key
        self.issues = issues


class UnrecognizedCommand(CheckinBotError):
    """无法识别或格式错误的命令"""

    kind = ErrorKind.UNRECOGNIZED_COMMAND

    def __init__(self, command: str):
        super().__init__(command)
        self.command = command


class InvalidScheduleTime(CheckinBotError):
    """打卡时间不在允许范围内"""

    kind = ErrorKind.INVALID_SCHEDULE_TIME

    def __init__(self, value: str):
        super().__init__(value)
        self.value = value


class MalformedUpstreamResponse(CheckinBotError):
    """门户或高德返回了无法解析的响应"""

    kind = ErrorKind.MALFORMED_UPSTREAM_RESPONSE

    def __init__(self, source: str, body: str):
        super().__init__(f"{source}: {body[:200]}")
        self.source = source
        self.body = body


class NotARecognizedInboundMessage(CheckinBotError):
    """入站请求不是 Telegram 消息更新"""

    kind = ErrorKind.NOT_INBOUND_MESSAGE

    def __init__(self, payload: object):
        super().__init__(str(payload)[:200])
        self.payload = payload


def validation_issues(error) -> list[tuple[str, str]]:
    """
    将 pydantic ValidationError 转为有序的 (字段路径, 原因) 列表

    Args:
        error: pydantic.ValidationError

    Returns:
        问题列表
    """
    return [
        (".".join(str(part) for part in item["loc"]) or "<root>", item["msg"])
        for item in error.errors()
    ]
