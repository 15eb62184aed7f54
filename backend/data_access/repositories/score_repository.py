"""
Key/value repository backing the persisted best score.
"""

from typing import Optional

from .base import BaseRepository


class ScoreRepository(BaseRepository):
    """
    Repository for key_value_store operations.

    Values are stored as text so a corrupt entry can be detected on read
    rather than rejected on write.
    """

    def get_value(self, key: str) -> Optional[str]:
        """Return the raw stored value for key, or None if absent."""
        with self.read() as cursor:
            cursor.execute("SELECT value FROM key_value_store WHERE key = ?", (key,))
            row = cursor.fetchone()
            return row['value'] if row else None

    def set_value(self, key: str, value: str) -> None:
        """Insert or overwrite key."""
        with self.transaction() as cursor:
            cursor.execute(
                """
                INSERT INTO key_value_store (key, value, updated_at)
                VALUES (?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (key, value)
            )

    def delete_value(self, key: str) -> bool:
        """Delete key. Returns True if a row was removed."""
        with self.transaction() as cursor:
            cursor.execute("DELETE FROM key_value_store WHERE key = ?", (key,))
            return cursor.rowcount > 0
