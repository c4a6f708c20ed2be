"""
ReqLedger Contract Modules - operations and host dispatch.

Purpose:
    - response: Response, success, error
    - manager: RequestLedger operations
    - dispatch: function name -> operation routing

Receipt: contract_receipt
"""

from reqledger.contract.response import Response, success, error
from reqledger.contract.manager import RequestLedger, check_arg_count
from reqledger.contract.dispatch import OPERATIONS, invoke

__all__ = [
    # response
    "Response", "success", "error",
    # manager
    "RequestLedger", "check_arg_count",
    # dispatch
    "OPERATIONS", "invoke",
]
