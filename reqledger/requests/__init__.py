"""
ReqLedger Request Modules - the Request record and its codec.

Receipt: request_receipt
"""

from reqledger.requests.model import (
    Request,
    RequestNotFound,
    build_request,
    new_request,
    is_valid_status,
    can_transition,
    encode_request,
    parse_request,
    decode_request,
    load_request,
    seed_key,
    seed_requests,
)

__all__ = [
    "Request", "RequestNotFound",
    "build_request", "new_request", "is_valid_status", "can_transition",
    "encode_request", "parse_request", "decode_request", "load_request",
    "seed_key", "seed_requests",
]
