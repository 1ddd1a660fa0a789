"""🗃️ **newdb/main.py**

Walks through the basic life of a local database file with ``aiolibsql``:

1. open ``newdb.sqlite`` (or ``$NEWDB_DATABASE``) and ping it
2. create ``TEST_TABLE``
3. list the tables the engine knows about via ``sqlite_master``
4. insert one row inside an explicit transaction and commit it

Run it with ``python -m newdb``.  A second run against the same file shows
the two kinds of failure: creating the table again is logged and the run
carries on, while inserting the same ``id`` again rolls the transaction back
and ends the run with exit code 1.

Set ``NEWDB_LOG_LEVEL=DEBUG`` to see every step the session takes.
"""

import asyncio
import logging
import os
import sys

from . import session

logger = logging.getLogger(__name__)

DEFAULT_DATABASE = "newdb.sqlite"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging():
    level = os.getenv("NEWDB_LOG_LEVEL", "INFO").upper()
    # getLevelName maps unknown names to "Level <name>" rather than an int
    if not isinstance(logging.getLevelName(level), int):
        level = "INFO"
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


def _report(result) -> bool:
    """Log a failed step; return True when the run has to stop."""
    if result.ok:
        return False
    logger.error("%s", result.error)
    return result.error.fatal


async def main(path=None) -> int:
    path = path or os.getenv("NEWDB_DATABASE", DEFAULT_DATABASE)

    opened = await session.connect(path)
    if not opened.ok:
        # nothing below can run without a connection
        logger.error("%s", opened.error)
        return 1

    # async with closes the connection on every way out of this block.
    async with opened.value as conn:
        # make sure the database actually answers before using it
        pinged = await session.ping(conn)
        _report(pinged)
        if pinged.ok:
            print("Connected!")

        # fails on every run after the first; that is logged, not fatal
        created = await session.create_table(conn)
        _report(created)
        if created.ok:
            print(f"Table `{session.TABLE_NAME}` created.")

        tables = await session.list_tables(conn)
        if _report(tables):
            return 1
        print(tables.value)

        # everything in the transaction is applied, or nothing is
        inserted = await session.insert_row(conn, session.SEED_ROW)
        if not inserted.ok:
            logger.error("%s", inserted.error)
            if inserted.error.stage == "insert":
                logger.error("transaction failed")
            return 1
        print("transaction committed!")

    return 0


def run():
    configure_logging()
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
