"""
Shared connection handling for SQLite repositories.
"""

from contextlib import closing, contextmanager
from typing import Iterator
import sqlite3

from database import get_connection


class BaseRepository:
    """
    Subclasses run their SQL inside transaction() or read().

    Both close the connection on exit; sqlite3's own connection context
    manager decides between commit and rollback.
    """

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Cursor]:
        """
        Yield a cursor inside one transaction: committed when the block
        exits normally, rolled back when it raises.
        """
        with closing(get_connection()) as conn:
            with conn:
                yield conn.cursor()

    @contextmanager
    def read(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor on a read-only connection."""
        with closing(get_connection(read_only=True)) as conn:
            yield conn.cursor()
