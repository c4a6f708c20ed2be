"""
ReqLedger v1 - Patient data request records on a key-value ledger

Requests move pending -> accepted | denied, and accepted -> revoked.
"""

from reqledger.core import (
    dual_hash,
    emit_receipt,
    merkle,
    StopRule,
    StoreError,
    TENANT_ID,
)

__version__ = "1.0.0"
__all__ = ["dual_hash", "emit_receipt", "merkle", "StopRule", "StoreError", "TENANT_ID"]
