"""
Tests for contract dispatch and the CLI.
"""

import json

import pytest

from cli import main
from reqledger.contract import OPERATIONS, Response, invoke
from reqledger.requests import decode_request


class TestDispatch:
    """Tests for invoke."""

    def test_operation_names(self):
        """Test the wire names routed by invoke."""
        assert set(OPERATIONS) == {
            "publishRequest", "initLedger", "response", "revoke",
            "queryPatientRequests", "queryRequest",
        }

    def test_unknown_function(self, ledger, capsys):
        """Test unknown names are rejected."""
        response = invoke(ledger, "deleteRequest", ["REQ0"])
        assert not response.ok
        assert response.message == "Invalid Smart Contract function name."

    def test_invoke_receipt(self, ledger, capsys):
        """Test every invocation emits a contract_invoke receipt."""
        invoke(ledger, "initLedger", [])
        receipt = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert receipt["receipt_type"] == "contract_invoke"
        assert receipt["function"] == "initLedger"
        assert receipt["status"] == 200

    def test_lifecycle(self, ledger, capsys):
        """Test publish, accept, revoke and query through the wire names."""
        assert invoke(ledger, "publishRequest", ["R1", "PR0", "PA5", "history"]).ok
        assert invoke(ledger, "response", ["R1", "accepted", "PA5"]).ok
        assert invoke(ledger, "revoke", ["R1"]).ok
        assert decode_request(ledger.store.get("R1")).status == "revoked"
        assert invoke(ledger, "revoke", ["R1"]) == Response(500, message="Cannot revoke.")

    def test_seed_then_query(self, ledger, capsys):
        """Test the seeded query through invoke."""
        invoke(ledger, "initLedger", [])
        results = invoke(ledger, "queryPatientRequests", ["PA0"]).json()
        assert [r["Key"] for r in results] == ["REQ3", "REQ7"]

    def test_args_not_mutated(self, ledger, capsys):
        """Test the caller's argument list is left untouched."""
        args = ["R1", "PR0", "PA5", "history"]
        invoke(ledger, "publishRequest", args)
        assert args == ["R1", "PR0", "PA5", "history"]


class TestCli:
    """Tests for cli.main."""

    def last_receipt(self, capsys):
        return json.loads(capsys.readouterr().out.strip().splitlines()[-1])

    def test_test_receipt(self, capsys):
        """Test --test emits the test receipt."""
        assert main(["--test"]) == 0
        receipt = self.last_receipt(capsys)
        assert receipt["receipt_type"] == "test"
        assert "queryPatientRequests" in receipt["operations"]

    def test_invoke_and_query(self, temp_ledger, capsys):
        """Test state persists across CLI runs on one ledger file."""
        assert main(["--ledger", temp_ledger, "--invoke", "initLedger"]) == 0
        assert main(["--ledger", temp_ledger, "--invoke", "queryPatientRequests", "PA3"]) == 0
        receipt = self.last_receipt(capsys)
        assert receipt["receipt_type"] == "cli_result"
        assert [r["Key"] for r in json.loads(receipt["payload"])] == ["REQ0", "REQ4", "REQ8"]

    def test_invoke_error_exit_code(self, temp_ledger, capsys):
        """Test failed invocations exit non-zero."""
        assert main(["--ledger", temp_ledger, "--invoke", "revoke", "REQ0"]) == 1
        assert self.last_receipt(capsys)["message"] == "Cannot revoke."

    def test_status(self, temp_ledger, capsys):
        """Test --status reports the ledger file."""
        main(["--ledger", temp_ledger, "--invoke", "initLedger"])
        main(["--ledger", temp_ledger, "--status"])
        receipt = self.last_receipt(capsys)
        assert receipt["receipt_type"] == "ledger_status"
        assert receipt["record_count"] == 10

    @pytest.mark.parametrize("argv", [["--invoke", "bogus"]])
    def test_unknown_function(self, temp_ledger, argv, capsys):
        """Test unknown functions exit non-zero."""
        assert main(["--ledger", temp_ledger] + argv) == 1

    def test_history(self, temp_ledger, capsys):
        """Test --history lists every write to one key, oldest first."""
        main(["--ledger", temp_ledger, "--invoke", "initLedger"])
        main(["--ledger", temp_ledger, "--invoke", "response", "REQ0", "accepted", "PA3"])
        assert main(["--ledger", temp_ledger, "--history", "REQ0"]) == 0
        receipt = self.last_receipt(capsys)
        assert receipt["receipt_type"] == "ledger_history"
        assert receipt["write_count"] == 2
        statuses = [json.loads(e["value"])["Status"] for e in receipt["entries"]]
        assert statuses == ["pending", "accepted"]
