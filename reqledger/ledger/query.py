"""
Ledger Query Module

Purpose: Patient-scoped range queries over stored requests

Result text: [{"Key":"<key>", "Record":<stored bytes>}, ...]

Receipt: ledger_query_receipt
"""

import json

from reqledger.constants import QUERY_END_KEY, QUERY_START_KEY
from reqledger.core import emit_receipt, TENANT_ID
from reqledger.ledger.store import RecordStore
from reqledger.requests.model import decode_request


def closed_end(end_key: str) -> str:
    """Smallest key sorting after end_key, so a scan includes end_key itself."""
    return end_key + "\x00"


def filter_by_patient(
    store: RecordStore,
    patient_id: str,
    start_key: str = QUERY_START_KEY,
    end_key: str | None = QUERY_END_KEY
) -> list[tuple[str, bytes]]:
    """
    Entries in the window whose decoded PatientID equals patient_id.

    Stored bytes are returned untouched. Entries that fail to decode are
    treated as zero-valued records and skipped unless patient_id is "".

    Args:
        store: Record store
        patient_id: Patient to match
        start_key: First key of the window
        end_key: Last key of the window, None for no upper bound

    Returns:
        Matching (key, value) pairs in scan order
    """
    end = closed_end(end_key) if end_key is not None else ""
    scanned = 0
    matching = []

    with store.range_scan(start_key, end) as results:
        for key, value in results:
            scanned += 1
            if decode_request(value).patient_id == patient_id:
                matching.append((key, value))

    emit_receipt("ledger_query", {
        "tenant_id": TENANT_ID,
        "query_type": "by_patient",
        "start_key": start_key,
        "end_key": end_key,
        "scanned_records": scanned,
        "matching_records": len(matching)
    })

    return matching


def render_query_results(matches: list[tuple[str, bytes]]) -> bytes:
    """
    Render matches as a JSON array, embedding each stored record
    byte-for-byte.
    """
    members = [
        b'{"Key":' + json.dumps(key, ensure_ascii=False).encode("utf-8")
        + b', "Record":' + value + b"}"
        for key, value in matches
    ]
    return b"[" + b",".join(members) + b"]"
