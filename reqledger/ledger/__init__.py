"""
ReqLedger Ledger Modules - Record Store Adapter.

Purpose:
    - store: RecordStore, MemoryStore, LedgerStore (append-only)
    - query: Patient-scoped range queries

Receipt: ledger_receipt
"""

from reqledger.ledger.store import (
    RangeIterator,
    RecordStore,
    MemoryStore,
    LedgerStore,
    get_ledger_status,
)
from reqledger.ledger.query import (
    filter_by_patient,
    render_query_results,
)

__all__ = [
    # store
    "RangeIterator", "RecordStore", "MemoryStore", "LedgerStore", "get_ledger_status",
    # query
    "filter_by_patient", "render_query_results",
]
