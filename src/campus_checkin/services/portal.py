"""统一认证门户服务（登录与健康打卡提交）"""

import json
import logging
import random
from dataclasses import dataclass

from curl_cffi.requests import AsyncSession
from pydantic import BaseModel, ValidationError

from campus_checkin.config.constants import (
    DECLARATION_FORM,
    DEFAULT_TIMEOUT,
    FINGERPRINT_OPTIONS,
    LOGIN_TIMEOUT,
    OFF_CAMPUS_REASON,
    PORTAL_CHECKIN_URL,
    PORTAL_LOGIN_URL,
    get_form_headers,
)
from campus_checkin.config.settings import get_settings
from campus_checkin.core.errors import AuthenticationError, MalformedUpstreamResponse
from campus_checkin.models.user_record import UserRecord

logger = logging.getLogger(__name__)


class PortalResponse(BaseModel):
    """门户接口统一响应 {e: 状态码, m: 消息}"""

    e: int
    m: str


@dataclass
class CheckinResult:
    """打卡结果"""

    success: bool
    message: str


def build_declaration_form(record: UserRecord, geo_info: dict) -> dict[str, str]:
    """
    构造健康打卡表单

    Args:
        record: 用户记录
        geo_info: 高德逆地理编码 regeocode 对象

    Returns:
        表单字典
    """
    form = dict(DECLARATION_FORM)
    form.update({
        "sfzs": "1" if record.in_campus else "0",
        "bzxyy": "" if record.in_campus else OFF_CAMPUS_REASON,
        "bzxyy_other": "",
        "area": record.area,
        "city": record.city,
        "province": record.province,
        "address": record.address,
        "geo_api_info": json.dumps(geo_info, ensure_ascii=False),
    })
    return form


def _parse_portal_response(text: str, source: str) -> PortalResponse:
    try:
        return PortalResponse.model_validate_json(text)
    except ValidationError as e:
        raise MalformedUpstreamResponse(source, text) from e


class PortalService:
    """门户服务"""

    def __init__(self):
        self.settings = get_settings()

    def _session(self) -> AsyncSession:
        """创建新的 HTTP 会话（随机浏览器指纹）"""
        fingerprint = self.settings.impersonate_browser
        if fingerprint == "random":
            fingerprint = random.choice(FINGERPRINT_OPTIONS)
        logger.debug(f"使用浏览器指纹: {fingerprint}")
        proxy_kwargs = self.settings.curl_proxy or {}
        return AsyncSession(impersonate=fingerprint, **proxy_kwargs)

    async def authenticate(self, username: str, password: str) -> str:
        """
        登录门户并获取会话 Cookie

        Args:
            username: 学号
            password: 密码

        Returns:
            Cookie 字符串

        Raises:
            AuthenticationError: 响应格式错误、登录失败或未返回 Cookie
        """
        logger.debug(f"开始登录门户: {username}")

        async with self._session() as session:
            response = await session.post(
                PORTAL_LOGIN_URL,
                data={"username": username, "password": password},
                headers=get_form_headers(),
                timeout=LOGIN_TIMEOUT,
            )
            logger.debug(f"登录响应状态: {response.status_code}")

            try:
                resp = PortalResponse.model_validate_json(response.text)
            except ValidationError as e:
                logger.warning(f"登录响应无效: 用户 {username}")
                raise AuthenticationError("登录响应无效") from e

            if resp.e != 0:
                logger.warning(f"登录失败: 用户 {username} - {resp.m}")
                raise AuthenticationError(f"登录失败: {resp.m}")

            cookies = session.cookies.get_dict()

        if not cookies:
            logger.warning(f"登录响应缺少 Cookie: 用户 {username}")
            raise AuthenticationError("登录响应缺少 Cookie")

        logger.info(f"登录成功: 用户 {username}")
        return "; ".join(f"{k}={v}" for k, v in cookies.items())

    async def submit_checkin(
        self,
        cookie: str,
        record: UserRecord,
        geo_info: dict,
    ) -> CheckinResult:
        """
        提交健康打卡

        Args:
            cookie: 登录获得的 Cookie
            record: 用户记录
            geo_info: 高德逆地理编码 regeocode 对象

        Returns:
            打卡结果（门户返回的消息）

        Raises:
            MalformedUpstreamResponse: 响应不是预期的 JSON 结构
        """
        form = build_declaration_form(record, geo_info)

        async with self._session() as session:
            response = await session.post(
                PORTAL_CHECKIN_URL,
                data=form,
                headers=get_form_headers(cookie),
                timeout=DEFAULT_TIMEOUT,
            )

        logger.debug(f"打卡响应状态: {response.status_code}")
        resp = _parse_portal_response(response.text, "portal")

        if resp.e == 0:
            logger.info(f"打卡成功: 用户 {record.username} - {resp.m}")
        else:
            logger.warning(f"打卡失败: 用户 {record.username} - {resp.m}")
        return CheckinResult(success=resp.e == 0, message=resp.m)
