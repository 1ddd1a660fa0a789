"""newdb: create a table in an embedded libSQL database and write one row to it.

Run ``python -m newdb``; see :mod:`newdb.main` for the sequence it performs.
"""

from .errors import (
    ConnectivityError,
    OpenError,
    Result,
    ScanError,
    SchemaError,
    SessionError,
    TransactionError,
)
from .session import (
    SEED_ROW,
    TABLE_NAME,
    connect,
    count_rows,
    create_table,
    insert_row,
    list_tables,
    ping,
)
from .transaction import Transaction, TransactionState

__all__ = [
    "ConnectivityError",
    "OpenError",
    "Result",
    "ScanError",
    "SchemaError",
    "SessionError",
    "TransactionError",
    "SEED_ROW",
    "TABLE_NAME",
    "connect",
    "count_rows",
    "create_table",
    "insert_row",
    "list_tables",
    "ping",
    "Transaction",
    "TransactionState",
]
