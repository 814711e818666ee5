"""PostgreSQL key-value store"""

from campus_checkin.core.database import DatabaseConnection
from campus_checkin.core.timezone import now
from campus_checkin.repositories.base import KeyPage, KeyValueStore


class PostgresKeyValueStore(KeyValueStore):
    """Key-value store backed by the kv_store table"""

    async def get(self, key: str) -> str | None:
        """Get value by key"""
        async with DatabaseConnection() as conn:
            return await conn.fetchval(
                "SELECT value FROM kv_store WHERE key = $1",
                key,
            )

    async def put(self, key: str, value: str) -> None:
        """Upsert value"""
        async with DatabaseConnection() as conn:
            await conn.execute(
                """
                INSERT INTO kv_store (key, value, updated_at)
                VALUES ($1, $2, $3)
                ON CONFLICT (key) DO UPDATE
                SET value = EXCLUDED.value, updated_at = EXCLUDED.updated_at
                """,
                key,
                value,
                now(),
            )

    async def delete(self, key: str) -> None:
        """Delete value"""
        async with DatabaseConnection() as conn:
            await conn.execute("DELETE FROM kv_store WHERE key = $1", key)

    async def list_keys(
        self,
        prefix: str,
        cursor: str | None = None,
        limit: int = 1000,
    ) -> KeyPage:
        """List keys by prefix (keyset pagination, cursor is the last key of the page)"""
        async with DatabaseConnection() as conn:
            records = await conn.fetch(
                """
                SELECT key FROM kv_store
                WHERE left(key, length($1)) = $1 AND key > $2
                ORDER BY key
                LIMIT $3
                """,
                prefix,
                cursor or "",
                limit + 1,
            )

        keys = [record["key"] for record in records]
        if len(keys) > limit:
            keys = keys[:limit]
            return KeyPage(keys=keys, cursor=keys[-1], list_complete=False)
        return KeyPage(keys=keys, cursor=None, list_complete=True)
