#!/usr/bin/env python3
"""
ReqLedger CLI - Patient data request ledger

Usage:
    python cli.py --test                                  # Emit test receipt
    python cli.py --status                                # Ledger status
    python cli.py --invoke initLedger                     # Seed REQ0..REQ9
    python cli.py --invoke publishRequest K PR PA cat     # Publish a request
    python cli.py --invoke queryPatientRequests PA3       # Query a patient
    python cli.py --history REQ0                          # Every write to a key

Receipt: reqledger_cli
"""

import argparse
import sys

# Add project root to path for imports
sys.path.insert(0, ".")

from reqledger.constants import DEFAULT_LEDGER_PATH
from reqledger.contract import OPERATIONS, RequestLedger, invoke
from reqledger.core import emit_receipt, TENANT_ID
from reqledger.ledger import LedgerStore, get_ledger_status


def test_receipt() -> dict:
    """Emit a test receipt to verify system is working."""
    return emit_receipt("test", {
        "tenant_id": TENANT_ID,
        "message": "ReqLedger v1 operational",
        "operations": sorted(OPERATIONS),
        "statuses": ["pending", "accepted", "denied", "revoked"]
    })


def status(path: str) -> dict:
    """Emit ledger status receipt."""
    return get_ledger_status(LedgerStore(path))


def history(path: str, key: str) -> dict:
    """Emit every ledger write made to key, oldest first."""
    entries = LedgerStore(path).history(key)
    return emit_receipt("ledger_history", {
        "tenant_id": TENANT_ID,
        "key": key,
        "write_count": len(entries),
        "entries": entries
    })


def run(path: str, function: str, args: list[str]) -> dict:
    """Invoke one operation against the ledger file and emit the result."""
    ledger = RequestLedger(LedgerStore(path))
    response = invoke(ledger, function, args)
    return emit_receipt("cli_result", {
        "tenant_id": TENANT_ID,
        "function": function,
        **response.to_dict()
    })


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="ReqLedger - Patient data request ledger",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python cli.py --test                            # Verify system is working
    python cli.py --invoke initLedger               # Seed the ledger
    python cli.py --invoke response REQ0 accepted PA3
    python cli.py --invoke queryPatientRequests PA3

Functions: publishRequest, initLedger, response, revoke,
           queryPatientRequests, queryRequest
        """
    )

    parser.add_argument("--ledger", type=str, metavar="PATH",
                        default=DEFAULT_LEDGER_PATH,
                        help="Ledger file (default: $REQLEDGER_PATH or requests.jsonl)")
    parser.add_argument("--test", action="store_true",
                        help="Emit test receipt to verify system")
    parser.add_argument("--status", action="store_true",
                        help="Show ledger status")
    parser.add_argument("--history", type=str, metavar="KEY",
                        help="Show every write made to a key")
    parser.add_argument("--invoke", nargs="+", metavar=("FUNCTION", "ARG"),
                        help="Invoke a contract function with string arguments")

    args = parser.parse_args(argv)

    if args.test:
        test_receipt()
    elif args.status:
        status(args.ledger)
    elif args.history:
        history(args.ledger, args.history)
    elif args.invoke:
        result = run(args.ledger, args.invoke[0], args.invoke[1:])
        return 0 if result["status"] == 200 else 1
    else:
        parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
