"""配置管理模块"""

import logging

from pydantic import Field, ConfigDict, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """应用配置类"""

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==================== Bot 配置 ====================
    bot_token: str = Field(..., description="Telegram Bot Token")
    webhook_url: str = Field(default="", description="Webhook 公网地址（为空时使用轮询）")
    webhook_listen: str = Field(default="0.0.0.0", description="Webhook 监听地址")
    webhook_port: int = Field(default=8443, description="Webhook 监听端口")
    webhook_secret: str = Field(default="", description="Webhook 密钥")

    # ==================== 高德地图配置 ====================
    amap_key: str = Field(..., description="高德逆地理编码 API Key")

    # ==================== 请求配置 ====================
    impersonate_browser: str = Field(default="random", description="curl_cffi 浏览器指纹（random 为每次随机）")

    # ==================== 数据库配置 ====================
    database_url: str = Field(..., description="PostgreSQL 连接字符串")
    encryption_key: str = Field(default="", description="AES-256-GCM 加密密钥（为空时明文存储密码）")

    # ==================== 运行时配置 ====================
    timezone: str = Field(default="Asia/Shanghai", description="时区配置")
    sweep_interval_minutes: int = Field(default=20, gt=0, description="签到巡检间隔（分钟）")
    sweep_offset_minutes: int = Field(default=5, ge=0, description="巡检对齐的分钟偏移")

    # ==================== SOCKS5 代理配置 ====================
    socks5_proxy: str = Field(default="", alias="SOCKS5_PROXY", description="SOCKS5 代理地址")

    # ==================== 日志配置 ====================
    log_level_str: str = Field(default="INFO", alias="LOG_LEVEL", description="日志级别: DEBUG, INFO, WARNING, ERROR")

    @field_validator("log_level_str")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """验证日志级别"""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}, got '{v}'")
        return v_upper

    @property
    def log_level(self) -> int:
        """获取日志级别常量"""
        return getattr(logging, self.log_level_str)

    @property
    def use_webhook(self) -> bool:
        """是否以 Webhook 模式运行"""
        return bool(self.webhook_url)

    @property
    def curl_proxy(self) -> dict | None:
        """
        获取用于 curl_cffi 的代理配置

        使用 socks5h:// 协议（对应 curl 的 --socks5-hostname），
        让代理服务器进行 DNS 解析。

        Returns:
            代理配置字典，未配置时返回 None
        """
        if not self.socks5_proxy:
            return None

        proxy_url = self.socks5_proxy
        if proxy_url.startswith("socks5://"):
            proxy_url = proxy_url.replace("socks5://", "socks5h://", 1)

        return {"proxies": {"http": proxy_url, "https": proxy_url}}


# 全局配置实例
_settings: Settings | None = None


def get_settings() -> Settings:
    """获取配置实例（单例模式）"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
