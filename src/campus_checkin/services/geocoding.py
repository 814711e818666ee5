"""高德逆地理编码服务"""

import logging
from dataclasses import dataclass, field

from curl_cffi.requests import AsyncSession
from pydantic import BaseModel, ConfigDict, ValidationError

from campus_checkin.config.constants import AMAP_REGEO_URL, DEFAULT_TIMEOUT
from campus_checkin.config.settings import get_settings
from campus_checkin.core.errors import MalformedUpstreamResponse
from campus_checkin.models.user_record import Location

logger = logging.getLogger(__name__)


class AddressComponent(BaseModel):
    """地址组成（直辖市的 city 返回空列表）"""

    model_config = ConfigDict(extra="ignore")

    province: str
    city: str | list[str]
    district: str


class Regeocode(BaseModel):
    model_config = ConfigDict(extra="ignore")

    formatted_address: str
    addressComponent: AddressComponent


class RegeoResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    regeocode: Regeocode


@dataclass
class Address:
    """归一化后的地址"""

    province: str
    city: str
    district: str
    formatted_address: str
    raw: dict = field(default_factory=dict)

    @property
    def area(self) -> str:
        return f"{self.city} {self.district}"


def parse_regeo(data: object) -> Address:
    """
    解析逆地理编码响应

    Args:
        data: 响应 JSON

    Returns:
        归一化地址，city 不是字符串时使用 province

    Raises:
        MalformedUpstreamResponse: 响应结构不符
    """
    try:
        resp = RegeoResponse.model_validate(data)
    except ValidationError as e:
        raise MalformedUpstreamResponse("amap", str(data)) from e

    component = resp.regeocode.addressComponent
    city = component.city if isinstance(component.city, str) else component.province
    return Address(
        province=component.province,
        city=city,
        district=component.district,
        formatted_address=resp.regeocode.formatted_address,
        raw=data["regeocode"],
    )


class GeocodingService:
    """逆地理编码服务"""

    def __init__(self):
        self.settings = get_settings()

    async def reverse(self, location: Location) -> Address:
        """
        坐标转地址

        Args:
            location: 经纬度

        Returns:
            归一化地址

        Raises:
            MalformedUpstreamResponse: 响应不是预期结构
        """
        proxy_kwargs = self.settings.curl_proxy or {}
        params = {
            "key": self.settings.amap_key,
            "location": f"{location.longitude},{location.latitude}",
        }

        async with AsyncSession(**proxy_kwargs) as session:
            logger.debug(f"逆地理编码: {params['location']}")
            response = await session.get(AMAP_REGEO_URL, params=params, timeout=DEFAULT_TIMEOUT)

        try:
            data = response.json()
        except ValueError as e:
            logger.warning(f"逆地理编码响应无法解析: HTTP {response.status_code}")
            raise MalformedUpstreamResponse("amap", response.text) from e

        address = parse_regeo(data)
        logger.info(f"逆地理编码成功: {address.formatted_address}")
        return address
