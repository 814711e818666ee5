"""验证工具"""

from campus_checkin.config.constants import CHECKIN_HOURS, CHECKIN_MINUTES
from campus_checkin.core.errors import InvalidScheduleTime, UnrecognizedCommand


def split_args(text: str, expected: int, redact: bool = False) -> list[str]:
    """
    拆分命令参数

    Args:
        text: 命令文本
        expected: 期望的参数个数（不含命令本身）
        redact: 参数含敏感信息时，异常中只保留命令本身

    Returns:
        参数列表

    Raises:
        UnrecognizedCommand: 参数个数不符
    """
    parts = text.strip().split()
    if len(parts) != expected + 1:
        if redact and parts:
            raise UnrecognizedCommand(f"{parts[0]} <已隐藏>")
        raise UnrecognizedCommand(text)
    return parts[1:]


def parse_checkin_time(value: str) -> tuple[int, int]:
    """
    解析打卡时间 HH:MM

    Args:
        value: 时间字符串

    Returns:
        (小时, 分钟)

    Raises:
        InvalidScheduleTime: 格式错误或不在允许范围内
    """
    parts = value.split(":")
    if len(parts) != 2:
        raise InvalidScheduleTime(value)

    try:
        hour, minute = int(parts[0]), int(parts[1])
    except ValueError as e:
        raise InvalidScheduleTime(value) from e

    if hour not in CHECKIN_HOURS or minute not in CHECKIN_MINUTES:
        raise InvalidScheduleTime(value)
    return hour, minute
