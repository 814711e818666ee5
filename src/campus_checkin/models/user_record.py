"""用户记录数据模型"""

import json
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from campus_checkin.core.errors import InvalidRecord, validation_issues


class Location(BaseModel):
    """经纬度"""

    model_config = ConfigDict(frozen=True, extra="forbid")

    longitude: float
    latitude: float


class UserRecord(BaseModel):
    """用户记录（每个会话一条，整条读写；数值与布尔字段不做类型转换）"""

    model_config = ConfigDict(frozen=True, extra="forbid")

    username: str
    password: str
    chat_id: int = Field(strict=True)
    checkin_hour: Literal[16, 17, 18, 19] = Field(strict=True)
    checkin_minute: Literal[0, 30] = Field(strict=True)
    skip_count: int = Field(ge=0, strict=True)
    province: str
    city: str
    area: str
    address: str
    location: Location
    in_campus: bool = Field(default=True, strict=True)


def parse_record(raw: str, key: str) -> UserRecord:
    """
    解析并校验存储的 JSON 字符串

    Args:
        raw: JSON 字符串
        key: 存储键（用于错误信息）

    Returns:
        用户记录

    Raises:
        InvalidRecord: JSON 无法解析或结构不符
    """
    try:
        data = json.loads(raw)
    except ValueError as e:
        raise InvalidRecord(key, [("<root>", f"invalid json: {e}")]) from e

    try:
        return UserRecord.model_validate(data)
    except ValidationError as e:
        raise InvalidRecord(key, validation_issues(e)) from e


def dump_record(record: UserRecord) -> str:
    """序列化用户记录为 JSON 字符串"""
    return json.dumps(record.model_dump(mode="json"), ensure_ascii=False)
