"""数据模型模块"""

from campus_checkin.models.inbound import InboundMessage, TelegramUpdate
from campus_checkin.models.user_record import Location, UserRecord, dump_record, parse_record

__all__ = [
    "UserRecord",
    "Location",
    "InboundMessage",
    "TelegramUpdate",
    "parse_record",
    "dump_record",
]
