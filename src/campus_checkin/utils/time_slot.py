"""时段工具"""

from datetime import datetime

from campus_checkin.config.constants import CHECKIN_WINDOW_MINUTES


def minutes_since_midnight(dt: datetime) -> int:
    """
    计算一天中的分钟数

    Args:
        dt: 日期时间（本地时间）

    Returns:
        0-1439
    """
    return dt.hour * 60 + dt.minute


def in_checkin_window(
    hour: int,
    minute: int,
    current_minutes: int,
    tolerance: int = CHECKIN_WINDOW_MINUTES,
) -> bool:
    """
    判断当前时间是否落在打卡时间窗口内（含边界）

    Args:
        hour: 目标小时
        minute: 目标分钟
        current_minutes: 当前时间（一天中的分钟数）
        tolerance: 容差（分钟）

    Returns:
        是否命中
    """
    expected = hour * 60 + minute
    return abs(expected - current_minutes) <= tolerance


def seconds_until_next_sweep(dt: datetime, interval: int, offset: int) -> float:
    """
    计算距离下一个对齐巡检时刻的秒数

    巡检时刻为满足 (分钟数 - offset) % interval == 0 的整分钟。

    Args:
        dt: 当前时间
        interval: 巡检间隔（分钟）
        offset: 分钟偏移

    Returns:
        秒数（大于 0）
    """
    elapsed = minutes_since_midnight(dt) * 60 + dt.second + dt.microsecond / 1_000_000
    period = interval * 60
    phase = (elapsed - offset * 60) % period
    wait = period - phase
    return wait if wait > 0 else period
