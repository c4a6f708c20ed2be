"""
Request Model Module

Purpose: The Request record, its wire codec and the status state machine.

Wire format: JSON object with keys ProviderID, PatientID, Category, Status.

Receipt: request_decode_receipt
"""

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from reqledger.constants import (
    FIELD_CATEGORY,
    FIELD_PATIENT_ID,
    FIELD_PROVIDER_ID,
    FIELD_STATUS,
    REQUEST_KEY_PREFIX,
    SEED_REQUESTS,
    STATUS_PENDING,
    STATUS_TRANSITIONS,
    STATUSES,
)
from reqledger.core import emit_receipt, stoprule_invalid_record, TENANT_ID


class RequestNotFound(LookupError):
    """No record is stored under the key."""

    def __init__(self, key: str):
        super().__init__(key)
        self.key = key


class Request(BaseModel):
    """
    A provider's request for a category of a patient's data.

    Only status changes after creation; use with_status to derive the
    updated record. Fields default to "" so a missing record decodes to the
    zero-valued Request. Validation accepts the wire names only; build
    instances with build_request.
    """

    provider_id: str = Field("", alias=FIELD_PROVIDER_ID)
    patient_id: str = Field("", alias=FIELD_PATIENT_ID)
    category: str = Field("", alias=FIELD_CATEGORY)
    status: str = Field("", alias=FIELD_STATUS)

    model_config = ConfigDict(
        frozen=True,
    )

    def with_status(self, status: str) -> "Request":
        return self.model_copy(update={"status": status})

    def is_zero(self) -> bool:
        return self == Request()


def build_request(
    provider_id: str, patient_id: str, category: str, status: str = ""
) -> Request:
    return Request.model_validate({
        FIELD_PROVIDER_ID: provider_id,
        FIELD_PATIENT_ID: patient_id,
        FIELD_CATEGORY: category,
        FIELD_STATUS: status,
    })


def new_request(provider_id: str, patient_id: str, category: str) -> Request:
    """Freshly published requests start out pending."""
    return build_request(provider_id, patient_id, category, STATUS_PENDING)


def is_valid_status(status: str) -> bool:
    return status in STATUSES


def can_transition(src: str, dst: str) -> bool:
    """True if the state machine allows src -> dst."""
    return dst in STATUS_TRANSITIONS.get(src, ())


# ═══════════════════════════════════════════════════════════════════
# CODEC
# ═══════════════════════════════════════════════════════════════════

def encode_request(request: Request) -> bytes:
    """
    Serialize to compact JSON bytes with the wire field names, in
    declaration order.
    """
    return request.model_dump_json(by_alias=True).encode("utf-8")


def parse_request(raw: bytes | None) -> Request | None:
    """
    Decode stored bytes, None if they are absent or not a valid Request.
    """
    if not raw:
        return None
    try:
        return Request.model_validate_json(raw)
    except ValidationError as e:
        emit_receipt("request_decode", {
            "tenant_id": TENANT_ID,
            "decoded": False,
            "error_count": e.error_count(),
            "fallback": "zero_record"
        })
        return None


def decode_request(raw: bytes | None) -> Request:
    """
    Decode stored bytes.

    Absent or malformed bytes decode to the zero-valued Request rather than
    raising. Use load_request when absence must be reported.
    """
    request = parse_request(raw)
    return request if request is not None else Request()


def load_request(store, key: str) -> Request:
    """
    Read and strictly decode the record at key.

    Raises:
        RequestNotFound: nothing stored under key
        StopRule: stored bytes are not a valid Request
    """
    raw = store.get(key)
    if raw is None:
        raise RequestNotFound(key)
    try:
        return Request.model_validate_json(raw)
    except ValidationError as e:
        stoprule_invalid_record(f"{key}: {e.error_count()} validation error(s)")


def seed_key(index: int) -> str:
    return f"{REQUEST_KEY_PREFIX}{index}"


def seed_requests() -> list[tuple[str, Request]]:
    """The ten seed records keyed REQ0..REQ9, in index order."""
    return [
        (seed_key(i), build_request(provider_id, patient_id, category, status))
        for i, (provider_id, patient_id, category, status) in enumerate(SEED_REQUESTS)
    ]
