"""
Contract Dispatch Module

Purpose: Route a host invocation (function name, string args) to its
RequestLedger operation.

Receipt: contract_invoke_receipt
"""

from typing import Callable

from reqledger.constants import MSG_INVALID_FUNCTION
from reqledger.contract.manager import RequestLedger
from reqledger.contract.response import Response, error
from reqledger.core import emit_receipt, TENANT_ID

Operation = Callable[[RequestLedger, list[str]], Response]

OPERATIONS: dict[str, Operation] = {
    "publishRequest": RequestLedger.publish_request,
    "initLedger": RequestLedger.init_ledger,
    "response": RequestLedger.update_status,
    "revoke": RequestLedger.revoke_request,
    "queryPatientRequests": RequestLedger.query_patient_requests,
    "queryRequest": RequestLedger.query_request,
}


def invoke(ledger: RequestLedger, function: str, args: list[str]) -> Response:
    """
    Run one contract operation.

    Args:
        ledger: Manager bound to a store
        function: Wire name of the operation
        args: Positional string arguments

    Returns:
        The operation's Response, or an error for unknown names
    """
    handler = OPERATIONS.get(function)
    if handler is None:
        response = error(MSG_INVALID_FUNCTION)
    else:
        response = handler(ledger, list(args))

    emit_receipt("contract_invoke", {
        "tenant_id": TENANT_ID,
        "function": function,
        "arg_count": len(args),
        "status": response.status,
        "message": response.message
    })
    return response
