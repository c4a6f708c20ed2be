"""
Request Ledger Manager

Purpose: Publish, seed, update, revoke and query patient data requests
over a RecordStore.

Every operation takes the host's positional string arguments and returns
a Response. Store faults never escape an operation; they come back as
error responses carrying the fault message.

Receipt: request_publish_receipt, ledger_seed_receipt, status_update_receipt,
         request_revoke_receipt, patient_query_receipt, contract_error_receipt
"""

from reqledger.constants import (
    MSG_CANNOT_REVOKE,
    MSG_INVALID_STATUS,
    MSG_NOT_FOUND,
    MSG_WRONG_ARG_COUNT,
    QUERY_END_KEY,
    QUERY_START_KEY,
    STATUS_REVOKED,
)
from reqledger.contract.response import Response, error, success
from reqledger.core import emit_receipt, StopRule, TENANT_ID
from reqledger.ledger.query import filter_by_patient, render_query_results
from reqledger.ledger.store import RecordStore
from reqledger.requests.model import (
    Request,
    RequestNotFound,
    can_transition,
    decode_request,
    encode_request,
    is_valid_status,
    load_request,
    new_request,
    parse_request,
    seed_requests,
)


def check_arg_count(args: list[str], expected: int) -> Response | None:
    """Error response if args does not hold exactly expected values."""
    if len(args) != expected:
        return error(MSG_WRONG_ARG_COUNT.format(expected=expected))
    return None


class RequestLedger:
    """
    Stateless manager bound to a record store.

    Args:
        store: Backing record store
        window: Closed key window (start, end) scanned by patient queries;
            end None scans every key from start on
        strict_lookup: Skip status updates whose key is absent or whose
            record does not decode, instead of guarding against the
            zero-valued record
    """

    def __init__(
        self,
        store: RecordStore,
        window: tuple[str, str | None] = (QUERY_START_KEY, QUERY_END_KEY),
        strict_lookup: bool = False
    ):
        self.store = store
        self.window = window
        self.strict_lookup = strict_lookup

    def _fault(self, operation: str, exc: StopRule) -> Response:
        emit_receipt("contract_error", {
            "tenant_id": TENANT_ID,
            "operation": operation,
            "message": str(exc)
        })
        return error(str(exc))

    def init(self, args: list[str] | None = None) -> Response:
        """Instantiation hook. Seeding is a separate call, see init_ledger."""
        return success()

    def publish_request(self, args: list[str]) -> Response:
        """
        Store a new pending request.

        Args:
            args: [key, providerID, patientID, category]

        Any previous value under key is overwritten.
        """
        rejected = check_arg_count(args, 4)
        if rejected:
            return rejected

        key, provider_id, patient_id, category = args
        request = new_request(provider_id, patient_id, category)
        try:
            self.store.put(key, encode_request(request))
        except StopRule as e:
            return self._fault("publishRequest", e)

        emit_receipt("request_publish", {
            "tenant_id": TENANT_ID,
            "key": key,
            "provider_id": provider_id,
            "patient_id": patient_id,
            "category": category,
            "status": request.status
        })
        return success()

    def init_ledger(self, args: list[str] | None = None) -> Response:
        """
        Seed REQ0..REQ9 with the fixed seed records, one put each.

        Not transactional: a fault partway leaves the earlier keys written.
        """
        written = []
        try:
            for key, request in seed_requests():
                self.store.put(key, encode_request(request))
                written.append(key)
        except StopRule as e:
            emit_receipt("ledger_seed", {
                "tenant_id": TENANT_ID,
                "seeded_keys": written,
                "complete": False
            })
            return self._fault("initLedger", e)

        emit_receipt("ledger_seed", {
            "tenant_id": TENANT_ID,
            "seeded_keys": written,
            "complete": True
        })
        return success()

    def update_status(self, args: list[str]) -> Response:
        """
        Set a request's status if the stored PatientID matches.

        Args:
            args: [key, newStatus, expectedPatientID]

        An absent or malformed record is guarded as the zero-valued record,
        so an empty expectedPatientID matches it and the write happens.
        Succeeds whether or not the guard passed; the receipt records
        "applied", where the record came from, and why a write was skipped.
        """
        rejected = check_arg_count(args, 3)
        if rejected:
            return rejected

        key, new_status, expected_patient_id = args
        if not is_valid_status(new_status):
            return error(MSG_INVALID_STATUS.format(status=new_status))

        try:
            raw = self.store.get(key)
            parsed = parse_request(raw)
            request = parsed if parsed is not None else Request()
            if raw is None:
                source = "absent"
            elif parsed is None:
                source = "malformed"
            else:
                source = "stored"

            if self.strict_lookup and source != "stored":
                applied, reason = False, source
            elif request.patient_id != expected_patient_id:
                applied, reason = False, "patient_mismatch"
            else:
                self.store.put(key, encode_request(request.with_status(new_status)))
                applied, reason = True, None
        except StopRule as e:
            return self._fault("response", e)

        emit_receipt("status_update", {
            "tenant_id": TENANT_ID,
            "key": key,
            "from_status": request.status,
            "to_status": new_status,
            "source": source,
            "applied": applied,
            "reason": reason
        })
        return success()

    def revoke_request(self, args: list[str]) -> Response:
        """
        Revoke an accepted request.

        Args:
            args: [key]

        Any status other than accepted fails with "Cannot revoke."
        """
        rejected = check_arg_count(args, 1)
        if rejected:
            return rejected

        key = args[0]
        try:
            request = decode_request(self.store.get(key))
            if not can_transition(request.status, STATUS_REVOKED):
                emit_receipt("request_revoke", {
                    "tenant_id": TENANT_ID,
                    "key": key,
                    "from_status": request.status,
                    "revoked": False
                })
                return error(MSG_CANNOT_REVOKE)

            self.store.put(key, encode_request(request.with_status(STATUS_REVOKED)))
        except StopRule as e:
            return self._fault("revoke", e)

        emit_receipt("request_revoke", {
            "tenant_id": TENANT_ID,
            "key": key,
            "from_status": request.status,
            "revoked": True
        })
        return success()

    def query_patient_requests(self, args: list[str]) -> Response:
        """
        All requests in the query window for one patient.

        Args:
            args: [patientID]

        Returns:
            Success with payload [{"Key":..., "Record":...}, ...], "[]"
            when nothing matches
        """
        rejected = check_arg_count(args, 1)
        if rejected:
            return rejected

        patient_id = args[0]
        start_key, end_key = self.window
        try:
            matches = filter_by_patient(self.store, patient_id, start_key, end_key)
        except StopRule as e:
            return self._fault("queryPatientRequests", e)

        payload = render_query_results(matches)
        emit_receipt("patient_query", {
            "tenant_id": TENANT_ID,
            "patient_id": patient_id,
            "keys": [key for key, _ in matches]
        })
        return success(payload)

    def query_request(self, args: list[str]) -> Response:
        """Read one request. Absent keys fail with "Request not found: <key>"."""
        rejected = check_arg_count(args, 1)
        if rejected:
            return rejected

        key = args[0]
        try:
            request = load_request(self.store, key)
        except RequestNotFound:
            return error(MSG_NOT_FOUND.format(key=key))
        except StopRule as e:
            return self._fault("queryRequest", e)

        return success(encode_request(request))
