"""用户记录状态变更

每个命令对应一个纯函数 (旧记录, 输入) -> 新记录，结果经过完整校验后才会写回存储。
"""

from campus_checkin.config.constants import (
    DEFAULT_ADDRESS,
    DEFAULT_AREA,
    DEFAULT_CHECKIN_HOUR,
    DEFAULT_CHECKIN_MINUTE,
    DEFAULT_CITY,
    DEFAULT_LATITUDE,
    DEFAULT_LONGITUDE,
    DEFAULT_PROVINCE,
)
from campus_checkin.models.user_record import Location, UserRecord


def _replace(record: UserRecord, **changes) -> UserRecord:
    return UserRecord.model_validate({**record.model_dump(), **changes})


def new_record(chat_id: int, username: str, password: str) -> UserRecord:
    """登录后创建的默认记录"""
    return UserRecord(
        username=username,
        password=password,
        chat_id=chat_id,
        checkin_hour=DEFAULT_CHECKIN_HOUR,
        checkin_minute=DEFAULT_CHECKIN_MINUTE,
        skip_count=0,
        province=DEFAULT_PROVINCE,
        city=DEFAULT_CITY,
        area=DEFAULT_AREA,
        address=DEFAULT_ADDRESS,
        location=Location(longitude=DEFAULT_LONGITUDE, latitude=DEFAULT_LATITUDE),
        in_campus=True,
    )


def with_checkin_time(record: UserRecord, hour: int, minute: int) -> UserRecord:
    return _replace(record, checkin_hour=hour, checkin_minute=minute)


def with_skip_added(record: UserRecord) -> UserRecord:
    return _replace(record, skip_count=record.skip_count + 1)


def with_skip_removed(record: UserRecord) -> UserRecord:
    """减少一天跳过，已为 0 时不变"""
    if record.skip_count == 0:
        return record
    return _replace(record, skip_count=record.skip_count - 1)


def with_campus(record: UserRecord, in_campus: bool) -> UserRecord:
    return _replace(record, in_campus=in_campus)


def with_address(record: UserRecord, address, location: Location) -> UserRecord:
    """
    更新位置信息

    Args:
        record: 旧记录
        address: 逆地理编码得到的地址（geocoding.Address）
        location: 用户发送的坐标
    """
    return _replace(
        record,
        province=address.province,
        city=address.city,
        area=address.area,
        address=address.formatted_address,
        location=location.model_dump(),
    )
