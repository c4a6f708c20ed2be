"""
Contract Response Module

Purpose: Success/error result returned by every contract operation
"""

import json
from typing import Any

from reqledger.constants import STATUS_ERROR, STATUS_OK


class Response:
    """
    Result of a contract operation: a status code plus either a payload
    (success) or a message (error).
    """

    def __init__(self, status: int, message: str = "", payload: bytes = b""):
        self.status = status
        self.message = message
        self.payload = payload

    @property
    def ok(self) -> bool:
        return self.status == STATUS_OK

    def json(self) -> Any:
        """Decode the payload as JSON."""
        return json.loads(self.payload.decode("utf-8"))

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "message": self.message,
            "payload": self.payload.decode("utf-8", errors="replace"),
        }

    def __eq__(self, other):
        if not isinstance(other, Response):
            return NotImplemented
        return (self.status, self.message, self.payload) == (
            other.status, other.message, other.payload
        )

    def __repr__(self):
        return f"Response(status={self.status}, message={self.message!r}, payload={self.payload!r})"


def success(payload: bytes = b"") -> Response:
    return Response(STATUS_OK, payload=payload)


def error(message: str) -> Response:
    return Response(STATUS_ERROR, message=message)
