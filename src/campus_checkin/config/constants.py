"""常量定义模块"""

from enum import Enum
from typing import Final


# ==================== HTTP 请求配置 ====================
PORTAL_HTTP_HEADERS: Final[dict[str, str]] = {
    "Accept": "application/json, text/javascript, */*; q=0.01",
    "accept-language": "zh-CN,zh;q=0.9,en;q=0.8,en-GB;q=0.7,en-US;q=0.6",
}


def get_form_headers(cookie: str | None = None) -> dict[str, str]:
    """
    获取表单请求的 HTTP 头

    Args:
        cookie: 会话 Cookie（可选）

    Returns:
        HTTP 头字典
    """
    headers = PORTAL_HTTP_HEADERS.copy()
    headers["Content-Type"] = "application/x-www-form-urlencoded; charset=UTF-8"
    if cookie:
        headers["Cookie"] = cookie
    return headers


# ==================== 请求超时配置 ====================
DEFAULT_TIMEOUT: Final[int] = 15  # 默认超时 15 秒
LOGIN_TIMEOUT: Final[int] = 30  # 登录超时 30 秒


# ==================== 外部服务地址 ====================
PORTAL_LOGIN_URL: Final[str] = "https://app.buaa.edu.cn/uc/wap/minigram/check"
PORTAL_CHECKIN_URL: Final[str] = "https://app.buaa.edu.cn/buaaxsncov/wap/default/save"
AMAP_REGEO_URL: Final[str] = "https://restapi.amap.com/v3/geocode/regeo"


# ==================== 存储配置 ====================
USER_KEY_PREFIX: Final[str] = "user:"
LIST_PAGE_SIZE: Final[int] = 1000


# ==================== 签到时间 ====================
CHECKIN_HOURS: Final[tuple[int, ...]] = (16, 17, 18, 19)
CHECKIN_MINUTES: Final[tuple[int, ...]] = (0, 30)
DEFAULT_CHECKIN_HOUR: Final[int] = 17
DEFAULT_CHECKIN_MINUTE: Final[int] = 30

# 巡检时间与目标时间相差不超过该值即视为命中
CHECKIN_WINDOW_MINUTES: Final[int] = 10


# ==================== 默认位置（学院路校区大运村） ====================
DEFAULT_PROVINCE: Final[str] = "北京市"
DEFAULT_CITY: Final[str] = "北京市"
DEFAULT_AREA: Final[str] = "北京市 海淀区"
DEFAULT_ADDRESS: Final[str] = "北京市海淀区花园路街道北京航空航天大学大运村学生公寓"
DEFAULT_LONGITUDE: Final[float] = 116.343699
DEFAULT_LATITUDE: Final[float] = 39.977847


# ==================== 健康打卡固定字段 ====================
# 无症状、无旅居史、无接触史
DECLARATION_FORM: Final[dict[str, str]] = {
    "brsfzc": "1",
    "tw": "",
    "sfcxzz": "",
    "zdjg": "",
    "zdjg_other": "",
    "sfgl": "",
    "gldd": "",
    "gldd_other": "",
    "glyy": "",
    "glyy_other": "",
    "gl_start": "",
    "gl_end": "",
    "sfmqjc": "",
    "sfzc_14": "1",
    "sfqw_14": "0",
    "sfqw_14_remark": "",
    "sfzgfx": "0",
    "sfzgfx_remark": "",
    "sfjc_14": "0",
    "sfjc_14_remark": "",
    "sfjcqz_14": "0",
    "sfjcqz_14_remark": "",
    "sfgtjz_14": "0",
    "sfgtjz_14_remark": "",
    "szsqqz": "0",
    "sfyqk": "",
    "szdd": "1",
    "gwdz": "",
    "is_move": "0",
    "move_reason": "",
    "move_remark": "",
}

# 不在校原因：2 = 其他
OFF_CAMPUS_REASON: Final[str] = "2"


# ==================== Webhook 应答 ====================
class Ack(str, Enum):
    """Webhook 固定应答"""
    SUCCESS = "Success"
    ERROR = "end with error"


# ==================== 帮助信息 ====================
HELP_TEXT: Final[str] = """📖 使用帮助

- /start: 显示帮助信息
- /info: 查看当前时间与已保存的信息
- /login <学号> <密码>: 保存统一认证账号并开启每日自动打卡
- /checkin_at <时间>: 设置打卡时间，小时为 16-19，分钟为 0 或 30，默认 17:30，例如 /checkin_at 18:30
- /checkin: 立即打卡一次
- /skip: 增加一天跳过
- /no_skip: 取消一天跳过
- /in_campus: 声明在校
- /out_of_campus: 声明不在校
- /delete: 删除已保存的信息
- /schedule: 立即执行一次定时巡检

发送位置即可更新打卡地址。

修改信息的命令会回复当前保存的信息（JSON 格式，密码已隐藏）。"""


# ==================== 浏览器指纹选项 ====================
FINGERPRINT_OPTIONS: Final[list[str]] = [
    "chrome99",
    "chrome100",
    "chrome101",
    "chrome104",
    "chrome107",
    "chrome110",
    "chrome116",
    "chrome119",
    "chrome120",
    "chrome123",
    "chrome124",
    "chrome131",
    "chrome133a",
    "chrome136",
]
