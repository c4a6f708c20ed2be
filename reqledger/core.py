"""
ReqLedger Core Module - receipts, hashing and stop rules.
Every other file imports this.

Receipt: reqledger_core
SLO: dual_hash_latency <= 10ms
"""

import hashlib
import json
from datetime import datetime, timezone

import blake3

# ═══════════════════════════════════════════════════════════════════
# CONSTANTS
# ═══════════════════════════════════════════════════════════════════

TENANT_ID = "reqledger"

RECEIPT_SCHEMA = {
    "receipt_type": "str",
    "ts": "ISO8601",
    "tenant_id": "str",
    "payload_hash": "SHA256:BLAKE3",
}


# ═══════════════════════════════════════════════════════════════════
# CORE FUNCTIONS
# ═══════════════════════════════════════════════════════════════════

def utc_now() -> str:
    """ISO8601 UTC timestamp with Z suffix."""
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def dual_hash(data: bytes | str) -> str:
    """
    SHA256:BLAKE3 digest of data.
    Pure function.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    sha = hashlib.sha256(data).hexdigest()
    b3 = blake3.blake3(data).hexdigest()
    return f"{sha}:{b3}"


def emit_receipt(receipt_type: str, data: dict) -> dict:
    """
    Creates receipt with ts, tenant_id, payload_hash.
    Prints JSON to stdout. Every operation calls this.
    """
    receipt = {
        "receipt_type": receipt_type,
        "ts": utc_now(),
        "tenant_id": data.get("tenant_id", TENANT_ID),
        "payload_hash": dual_hash(json.dumps(data, sort_keys=True)),
        **data
    }
    print(json.dumps(receipt), flush=True)
    return receipt


def merkle(items: list) -> str:
    """
    Compute Merkle root using dual_hash.
    Empty list hashes b"empty"; odd levels duplicate the last hash.
    """
    if not items:
        return dual_hash(b"empty")
    hashes = [dual_hash(json.dumps(i, sort_keys=True)) for i in items]
    while len(hashes) > 1:
        if len(hashes) % 2:
            hashes.append(hashes[-1])
        hashes = [dual_hash(hashes[i] + hashes[i + 1])
                  for i in range(0, len(hashes), 2)]
    return hashes[0]


# ═══════════════════════════════════════════════════════════════════
# STOPRULES
# ═══════════════════════════════════════════════════════════════════

class StopRule(Exception):
    """Raised when stoprule triggers. Never catch silently."""
    pass


class StoreError(StopRule):
    """Record store I/O fault. The message is the fault, verbatim."""
    pass


def stoprule_store_fault(operation: str, reason: str) -> None:
    """Emit anomaly and halt on a record store I/O fault."""
    emit_receipt("anomaly", {
        "tenant_id": TENANT_ID,
        "metric": "store_fault",
        "operation": operation,
        "baseline": 0,
        "delta": -1,
        "classification": "degradation",
        "action": "halt"
    })
    raise StoreError(reason)


def stoprule_invalid_record(reason: str) -> None:
    """Emit anomaly and halt on a record that cannot be encoded."""
    emit_receipt("anomaly", {
        "tenant_id": TENANT_ID,
        "metric": "invalid_record",
        "baseline": 0,
        "delta": -1,
        "classification": "violation",
        "action": "halt"
    })
    raise StopRule(f"Invalid record: {reason}")
