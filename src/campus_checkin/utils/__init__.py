"""工具函数模块"""

from campus_checkin.utils.formatter import format_checkin_result, format_current_time, format_error, format_record
from campus_checkin.utils.validator import parse_checkin_time, split_args
from campus_checkin.utils.time_slot import in_checkin_window, minutes_since_midnight, seconds_until_next_sweep

__all__ = [
    "format_record",
    "format_current_time",
    "format_checkin_result",
    "format_error",
    "parse_checkin_time",
    "split_args",
    "in_checkin_window",
    "minutes_since_midnight",
    "seconds_until_next_sweep",
]
