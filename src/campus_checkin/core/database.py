"""数据库连接池管理"""

import logging

import asyncpg
from asyncpg import Pool
from typing import Optional

from campus_checkin.config.settings import get_settings

logger = logging.getLogger(__name__)

_pool: Optional[Pool] = None


async def _init_connection(conn):
    """初始化数据库连接（设置时区）"""
    settings = get_settings()
    await conn.execute(f"SET TIME ZONE '{settings.timezone}';")


async def get_pool() -> Pool:
    """获取数据库连接池（单例模式）"""
    global _pool
    if _pool is None:
        settings = get_settings()
        _pool = await asyncpg.create_pool(
            settings.database_url,
            min_size=1,
            max_size=5,
            command_timeout=60,
            init=_init_connection,
        )
    return _pool


async def close_pool():
    """关闭数据库连接池"""
    global _pool
    if _pool:
        await _pool.close()
        _pool = None


class DatabaseConnection:
    """数据库连接上下文管理器"""

    def __init__(self):
        self._conn = None
        self._acquire_context = None

    async def __aenter__(self):
        pool = await get_pool()
        # acquire() 返回上下文管理器，需要通过 __aenter__ 获取实际连接
        self._acquire_context = pool.acquire()
        self._conn = await self._acquire_context.__aenter__()
        return self._conn

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self._acquire_context:
            await self._acquire_context.__aexit__(exc_type, exc_val, exc_tb)
            self._acquire_context = None
            self._conn = None


# ==================== 数据库自动初始化 ====================

_INIT_SQL = """
CREATE TABLE IF NOT EXISTS kv_store (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TIMESTAMP NOT NULL DEFAULT NOW()
);
"""


async def check_and_init_database():
    """检查键值表是否存在，不存在则创建"""
    async with DatabaseConnection() as conn:
        exists = await conn.fetchval(
            "SELECT EXISTS (SELECT FROM information_schema.tables WHERE table_name = 'kv_store')"
        )
        if exists:
            logger.debug("数据库表已存在")
            return

        logger.warning("数据库表不存在，正在初始化...")
        await conn.execute(_INIT_SQL)
        logger.info("数据库表初始化成功")
