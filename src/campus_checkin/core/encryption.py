"""AES-256-GCM 加密工具"""

import base64
import logging
import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from campus_checkin.config.settings import get_settings

logger = logging.getLogger(__name__)


def encryption_enabled() -> bool:
    """是否配置了加密密钥"""
    return bool(get_settings().encryption_key)


def _get_key() -> bytes:
    """
    获取加密密钥（32 字节）

    Raises:
        ValueError: 如果密钥无效（不是有效的 32 字节密钥）
    """
    key_str = get_settings().encryption_key

    # 32 字节的原始密钥，直接使用
    if len(key_str) == 32:
        return key_str.encode()

    # 否则尝试 base64 解码
    try:
        key_bytes = base64.b64decode(key_str, validate=True)
    except ValueError as e:
        logger.error(f"无效的加密密钥配置: {type(e).__name__}: {e}")
        raise ValueError(
            "无效的加密密钥配置。密钥应为 32 字节的原始密钥，或 32 字节密钥的 Base64 编码。"
        ) from e

    if len(key_bytes) != 32:
        raise ValueError(f"Base64 解码后的密钥长度为 {len(key_bytes)} 字节，应为 32 字节")
    return key_bytes


def encrypt_password(password: str) -> str:
    """
    加密密码

    Args:
        password: 明文密码

    Returns:
        Base64 编码的加密数据（nonce + ciphertext）
    """
    key = _get_key()

    # 96 位随机 nonce
    nonce = os.urandom(12)
    ciphertext = AESGCM(key).encrypt(nonce, password.encode(), None)

    return base64.b64encode(nonce + ciphertext).decode()


def decrypt_password(encrypted_data: str) -> str:
    """
    解密密码

    Args:
        encrypted_data: Base64 编码的加密数据（nonce + ciphertext）

    Returns:
        明文密码

    Raises:
        ValueError: 数据无法解密
    """
    key = _get_key()

    try:
        combined = base64.b64decode(encrypted_data, validate=True)
        nonce, ciphertext = combined[:12], combined[12:]
        plaintext = AESGCM(key).decrypt(nonce, ciphertext, None)
    except (ValueError, InvalidTag) as e:
        raise ValueError("密码密文无效或密钥不匹配") from e

    return plaintext.decode()
