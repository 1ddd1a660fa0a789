"""Explicit transaction scope over an ``aiolibsql`` connection.

``aiolibsql`` normally opens a transaction implicitly on the first write and
leaves ``commit``/``rollback`` to the caller (see the libsql transaction
example).  :class:`Transaction` makes the boundaries explicit and tracks
where the unit of work stands::

    IDLE -> OPEN -> COMMITTED
                 -> ROLLED_BACK

Used as ``async with Transaction(conn) as tx``, a transaction that is still
``OPEN`` when the block exits is rolled back, so abandoned writes are never
applied.
"""

import enum
import logging

logger = logging.getLogger(__name__)


class TransactionState(enum.Enum):
    IDLE = "idle"
    OPEN = "open"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled back"


class Transaction:
    def __init__(self, conn):
        self.conn = conn
        self.state = TransactionState.IDLE

    def _expect(self, state: TransactionState, action: str):
        if self.state is not state:
            raise RuntimeError(f"cannot {action} a transaction that is {self.state.value}")

    async def begin(self):
        self._expect(TransactionState.IDLE, "begin")
        await self.conn.execute("BEGIN")
        self.state = TransactionState.OPEN
        logger.debug("transaction opened")

    async def execute(self, sql: str, parameters: tuple = ()):
        self._expect(TransactionState.OPEN, "write to")
        return await self.conn.execute(sql, parameters)

    async def commit(self):
        self._expect(TransactionState.OPEN, "commit")
        await self.conn.commit()
        self.state = TransactionState.COMMITTED
        logger.debug("transaction committed")

    async def rollback(self):
        self._expect(TransactionState.OPEN, "roll back")
        try:
            await self.conn.rollback()
        finally:
            # never retried, even when the driver call fails
            self.state = TransactionState.ROLLED_BACK
        logger.debug("transaction rolled back")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if self.state is TransactionState.OPEN:
            logger.debug("transaction left open, rolling back")
            await self.rollback()
        return False
