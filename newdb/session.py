"""Operations on the ``newdb`` database: connect, ping, create, list, insert.

Each operation takes the open ``aiolibsql`` connection explicitly and returns
a :class:`~newdb.errors.Result`.  Driver exceptions are caught at the
operation boundary and wrapped in the matching
:class:`~newdb.errors.SessionError` subclass; nothing here decides whether a
failure ends the run.
"""

import logging
from contextlib import asynccontextmanager
from typing import Sequence

import aiolibsql

from .errors import (
    ConnectivityError,
    OpenError,
    Result,
    ScanError,
    SchemaError,
    TransactionError,
)
from .transaction import Transaction

logger = logging.getLogger(__name__)

TABLE_NAME = "TEST_TABLE"

CREATE_TABLE = """CREATE TABLE TEST_TABLE(
    id INTEGER PRIMARY KEY,
    fname VARCHAR(25),
    lname VARCHAR(25),
    address VARCHAR(100),
    bio TEXT
);"""

# sqlite_master is the engine's own catalog; one row per schema object.
LIST_TABLES = "SELECT name FROM sqlite_master WHERE type='table';"

INSERT_ROW = "INSERT INTO TEST_TABLE (id, fname, lname, address, bio) VALUES (?,?,?,?,?)"

SEED_ROW = (1, "Humfried", "Ritelli", "6 Center Road", "repurpose extensible systems")


async def connect(path: str, **options) -> Result:
    """Open ``path`` and return the connection as the result value.

    ``options`` go straight to :func:`aiolibsql.connect` (``timeout``,
    ``encryption_key`` and so on).  The caller owns the connection and should
    close it with ``async with result.value as conn``.
    """
    try:
        conn = await aiolibsql.connect(path, **options)
    except Exception as exc:
        return Result(error=OpenError("open", exc))
    logger.debug("opened %s", path)
    return Result(value=conn)


async def ping(conn) -> Result:
    try:
        cursor = await conn.execute("SELECT 1")
        await cursor.fetchone()
    except Exception as exc:
        return Result(error=ConnectivityError("ping", exc))
    return Result(value=True)


async def create_table(conn, ddl: str = CREATE_TABLE) -> Result:
    # no IF NOT EXISTS: running against an existing table is expected to fail
    try:
        await conn.execute(ddl)
    except Exception as exc:
        return Result(error=SchemaError("create table", exc))
    logger.debug("table created")
    return Result(value=True)


@asynccontextmanager
async def scoped_cursor(cursor):
    try:
        yield cursor
    finally:
        await cursor.close()


def _scan_name(row) -> str:
    (name,) = row
    if not isinstance(name, str):
        raise TypeError(f"expected a table name, got {name!r}")
    return name


async def list_tables(conn) -> Result:
    """Read every table name from the catalog, in catalog order.

    Rows are read one at a time.  A row that is not a single string stops the
    scan with a ``ScanError`` at stage ``scan``; an error while advancing the
    cursor stops it at stage ``cursor``.  The cursor is closed either way.
    """
    try:
        cursor = await conn.execute(LIST_TABLES)
    except Exception as exc:
        return Result(error=ScanError("query", exc))

    names = []
    async with scoped_cursor(cursor):
        while True:
            try:
                row = await cursor.fetchone()
            except Exception as exc:
                return Result(error=ScanError("cursor", exc))
            if row is None:
                break
            try:
                names.append(_scan_name(row))
            except (TypeError, ValueError) as exc:
                return Result(error=ScanError("scan", exc))
    return Result(value=names)


async def insert_row(conn, values: Sequence = SEED_ROW) -> Result:
    """Write one row to ``TEST_TABLE`` inside its own transaction.

    ``values`` are bound positionally in column order: id, fname, lname,
    address, bio.  On success the value is ``TransactionState.COMMITTED``.
    """
    async with Transaction(conn) as tx:
        try:
            await tx.begin()
        except Exception as exc:
            return Result(error=TransactionError("begin", exc))

        try:
            await tx.execute(INSERT_ROW, tuple(values))
        except Exception as exc:
            try:
                await tx.rollback()
            except Exception as rollback_exc:
                logger.warning("rollback after failed insert: %s", rollback_exc)
            return Result(error=TransactionError("insert", exc))

        try:
            await tx.commit()
        except Exception as exc:
            # left open; rolled back when the scope exits
            return Result(error=TransactionError("commit", exc))
    return Result(value=tx.state)


async def count_rows(conn, table: str = TABLE_NAME) -> Result:
    quoted = '"' + table.replace('"', '""') + '"'
    try:
        cursor = await conn.execute(f"SELECT COUNT(*) FROM {quoted}")
        (count,) = await cursor.fetchone()
    except Exception as exc:
        return Result(error=SchemaError("count", exc))
    return Result(value=count)
