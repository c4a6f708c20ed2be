"""
Tests for core module.
"""

import json
import time

import pytest

from reqledger.core import (
    dual_hash,
    emit_receipt,
    merkle,
    StopRule,
    StoreError,
    TENANT_ID,
    stoprule_store_fault,
    stoprule_invalid_record,
)


class TestDualHash:
    """Tests for dual_hash function."""

    def test_dual_hash_string(self):
        """Test dual_hash with string input."""
        result = dual_hash("test")
        parts = result.split(":")
        assert len(parts) == 2
        assert len(parts[0]) == 64  # SHA256 hex length
        assert len(parts[1]) == 64  # BLAKE3 hex length

    def test_dual_hash_bytes_matches_string(self):
        """Test bytes and str of the same text hash alike."""
        assert dual_hash(b"test") == dual_hash("test")

    def test_dual_hash_halves_differ(self):
        """Test the two halves come from different algorithms."""
        sha, b3 = dual_hash("test").split(":")
        assert sha != b3

    def test_dual_hash_different_inputs(self):
        """Test that different inputs produce different hashes."""
        assert dual_hash("test1") != dual_hash("test2")

    def test_dual_hash_latency(self):
        """SLO: dual_hash_latency <= 10ms."""
        t0 = time.time()
        for _ in range(100):
            dual_hash("test data for latency check")
        elapsed = (time.time() - t0) * 1000 / 100
        assert elapsed <= 10, f"Latency {elapsed}ms > 10ms SLO"


class TestEmitReceipt:
    """Tests for emit_receipt function."""

    def test_emit_receipt_basic(self, capsys):
        """Test basic receipt emission."""
        receipt = emit_receipt("test", {"tenant_id": TENANT_ID, "data": "value"})

        assert receipt["receipt_type"] == "test"
        assert receipt["tenant_id"] == TENANT_ID
        assert receipt["ts"].endswith("Z")
        assert ":" in receipt["payload_hash"]
        assert receipt["data"] == "value"

    def test_emit_receipt_default_tenant(self, capsys):
        """Test tenant_id defaults when absent from data."""
        receipt = emit_receipt("test", {"key": "REQ0"})
        assert receipt["tenant_id"] == TENANT_ID

    def test_emit_receipt_json_valid(self, capsys):
        """Test receipt is printed as one JSON line."""
        emit_receipt("test", {"tenant_id": TENANT_ID})
        captured = capsys.readouterr()
        receipt = json.loads(captured.out.strip())
        assert receipt["receipt_type"] == "test"


class TestMerkle:
    """Tests for merkle function."""

    def test_merkle_empty(self):
        """Test merkle with empty list."""
        assert merkle([]) == dual_hash(b"empty")

    def test_merkle_odd_count(self):
        """Test odd counts duplicate the last leaf."""
        items = [{"a": 1}, {"b": 2}, {"c": 3}]
        assert merkle(items) == merkle(items + [{"c": 3}])

    def test_merkle_order_matters(self):
        """Test different order produces different root."""
        assert merkle([{"a": 1}, {"b": 2}]) != merkle([{"b": 2}, {"a": 1}])


class TestStopRule:
    """Tests for stoprule functions."""

    def test_store_error_is_stoprule(self):
        """Test StoreError is caught by StopRule handlers."""
        assert issubclass(StoreError, StopRule)

    def test_stoprule_store_fault_message_verbatim(self, capsys):
        """Test store fault keeps the reason as its message."""
        with pytest.raises(StoreError) as excinfo:
            stoprule_store_fault("put", "disk full")
        assert str(excinfo.value) == "disk full"

        anomaly = json.loads(capsys.readouterr().out.strip())
        assert anomaly["receipt_type"] == "anomaly"
        assert anomaly["metric"] == "store_fault"
        assert anomaly["operation"] == "put"

    def test_stoprule_invalid_record(self):
        """Test invalid record stoprule."""
        with pytest.raises(StopRule) as excinfo:
            stoprule_invalid_record("REQ0: bad json")
        assert "Invalid record" in str(excinfo.value)
