"""
ReqLedger Constants - seed records, status vocabulary, wire contract.

Receipt: reqledger_constants
"""

import os

# ═══════════════════════════════════════════════════════════════════
# STORAGE CONFIGURATION
# ═══════════════════════════════════════════════════════════════════

DEFAULT_LEDGER_PATH = os.getenv("REQLEDGER_PATH", "requests.jsonl")

# ═══════════════════════════════════════════════════════════════════
# REQUEST WIRE CONTRACT (field names fixed for compatibility)
# ═══════════════════════════════════════════════════════════════════

FIELD_PROVIDER_ID = "ProviderID"
FIELD_PATIENT_ID = "PatientID"
FIELD_CATEGORY = "Category"
FIELD_STATUS = "Status"

WIRE_FIELDS = (FIELD_PROVIDER_ID, FIELD_PATIENT_ID, FIELD_CATEGORY, FIELD_STATUS)

# ═══════════════════════════════════════════════════════════════════
# STATUS VOCABULARY
# ═══════════════════════════════════════════════════════════════════

STATUS_PENDING = "pending"
STATUS_ACCEPTED = "accepted"
STATUS_DENIED = "denied"
STATUS_REVOKED = "revoked"

STATUSES = (STATUS_PENDING, STATUS_ACCEPTED, STATUS_DENIED, STATUS_REVOKED)

# src -> allowed destinations
STATUS_TRANSITIONS = {
    STATUS_PENDING: (STATUS_ACCEPTED, STATUS_DENIED),
    STATUS_ACCEPTED: (STATUS_REVOKED,),
    STATUS_DENIED: (),
    STATUS_REVOKED: (),
}

# ═══════════════════════════════════════════════════════════════════
# SEED LEDGER
# ═══════════════════════════════════════════════════════════════════

REQUEST_KEY_PREFIX = "REQ"

# (ProviderID, PatientID, Category, Status), written to REQ0..REQ9 in order
SEED_REQUESTS = [
    ("PR0", "PA3", "lifestyle", "pending"),
    ("PR1", "PA2", "history", "accepted"),
    ("PR2", "PA1", "medication", "denied"),
    ("PR3", "PA0", "history", "pending"),
    ("PR0", "PA3", "lifestyle", "accepted"),
    ("PR1", "PA2", "history", "accepted"),
    ("PR2", "PA1", "medication", "accepted"),
    ("PR3", "PA0", "lifestyle", "denied"),
    ("PR0", "PA3", "history", "pending"),
    ("PR1", "PA2", "medication", "pending"),
]

# Closed window scanned by queryPatientRequests
QUERY_START_KEY = "REQ0"
QUERY_END_KEY = "REQ9"

# ═══════════════════════════════════════════════════════════════════
# RESPONSE PROTOCOL
# ═══════════════════════════════════════════════════════════════════

STATUS_OK = 200
STATUS_ERROR = 500

MSG_WRONG_ARG_COUNT = "Incorrect number of arguments. Expecting {expected}"
MSG_CANNOT_REVOKE = "Cannot revoke."
MSG_INVALID_FUNCTION = "Invalid Smart Contract function name."
MSG_INVALID_STATUS = "Invalid status: {status}"
MSG_NOT_FOUND = "Request not found: {key}"
