"""
Pytest configuration and fixtures for ReqLedger tests.
"""

import os
import sys
import tempfile

import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from reqledger.contract import RequestLedger
from reqledger.ledger import LedgerStore, MemoryStore


@pytest.fixture
def temp_ledger():
    """Create temporary ledger file."""
    fd, path = tempfile.mkstemp(suffix=".jsonl")
    os.close(fd)
    yield path
    if os.path.exists(path):
        os.unlink(path)


@pytest.fixture
def memory_store():
    """Empty in-memory store."""
    return MemoryStore()


@pytest.fixture
def ledger_store(temp_ledger):
    """Append-only store on a temporary file."""
    return LedgerStore(temp_ledger)


@pytest.fixture
def ledger(memory_store):
    """Manager over an empty in-memory store."""
    return RequestLedger(memory_store)


@pytest.fixture
def seeded_ledger(ledger):
    """Manager whose store holds REQ0..REQ9."""
    assert ledger.init_ledger().ok
    return ledger


@pytest.fixture
def sample_request_args():
    """publishRequest arguments."""
    return ["REQ42", "PR7", "PA9", "medication"]
