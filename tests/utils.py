from unittest.mock import AsyncMock, MagicMock

from newdb import session


async def open_db(path):
    result = await session.connect(path)
    assert result.ok, result.error
    return result.value


def user_tables(names):
    # engines may keep their own bookkeeping tables in sqlite_master
    return [name for name in names if not name.startswith(("sqlite_", "libsql_"))]


def fake_cursor(*rows):
    cursor = MagicMock()
    cursor.fetchone = AsyncMock(side_effect=list(rows))
    cursor.close = AsyncMock()
    return cursor


def fake_connection(cursor=None):
    conn = MagicMock()
    conn.execute = AsyncMock(return_value=cursor)
    conn.commit = AsyncMock()
    conn.rollback = AsyncMock()
    return conn
