"""时区处理模块"""

from datetime import datetime
from zoneinfo import ZoneInfo

from campus_checkin.config.settings import get_settings


def get_timezone():
    """获取配置的时区"""
    settings = get_settings()
    return ZoneInfo(settings.timezone)


def now() -> datetime:
    """获取当前时区的当前时间（返回 naive datetime）"""
    return datetime.now(get_timezone()).replace(tzinfo=None)
