"""
Ledger Store Module

Purpose: Key-value record store over an append-only ledger
    - get(key) -> bytes | None
    - put(key, value)
    - range_scan(start, end) -> RangeIterator over [start, end)

Receipt: ledger_status_receipt
"""

import json
import os
import threading

from reqledger.constants import DEFAULT_LEDGER_PATH
from reqledger.core import (
    emit_receipt,
    merkle,
    stoprule_store_fault,
    utc_now,
    StoreError,
    TENANT_ID,
)


class RangeIterator:
    """
    Cursor over a range scan result.

    Yields (key, value) pairs in ascending key order. Must be closed after
    use; use it as a context manager so the cursor is released on every
    exit path.
    """

    def __init__(self, entries: list[tuple[str, bytes]]):
        self._entries = iter(entries)
        self.closed = False

    def __iter__(self):
        return self

    def __next__(self) -> tuple[str, bytes]:
        if self.closed:
            raise StoreError("range iterator is closed")
        return next(self._entries)

    def close(self) -> None:
        self.closed = True
        self._entries = iter(())

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


class RecordStore:
    """
    Base record store. Subclasses provide _read_state and _write.

    Writes are serialised through a per-store lock; there is no versioning,
    so concurrent read-modify-write callers race last-write-wins.
    """

    def __init__(self):
        self._lock = threading.Lock()

    def _read_state(self) -> dict[str, bytes]:
        raise NotImplementedError

    def _write(self, key: str, value: bytes) -> None:
        raise NotImplementedError

    def get(self, key: str) -> bytes | None:
        """Raw stored value for key, or None if never set."""
        return self._read_state().get(key)

    def put(self, key: str, value: bytes) -> None:
        """Upsert value for key."""
        if not isinstance(key, str) or not key:
            stoprule_store_fault("put", "key must be a non-empty string")
        if not isinstance(value, (bytes, bytearray)):
            stoprule_store_fault("put", f"value for {key} must be bytes")
        with self._lock:
            self._write(key, bytes(value))

    def range_scan(self, start_key: str, end_key: str) -> RangeIterator:
        """
        Scan entries with start_key <= key < end_key.

        Keys compare as UTF-8 bytes. An empty end_key leaves the range
        unbounded above. The snapshot is taken when the scan is opened.
        """
        start = start_key.encode("utf-8")
        end = end_key.encode("utf-8") if end_key else None
        if end is not None and end < start:
            stoprule_store_fault(
                "range_scan", f"end key {end_key} sorts before start key {start_key}"
            )

        state = self._read_state()
        entries = [
            (k, state[k])
            for k in sorted(state, key=lambda k: k.encode("utf-8"))
            if start <= k.encode("utf-8") and (end is None or k.encode("utf-8") < end)
        ]
        return RangeIterator(entries)

    def keys(self) -> list[str]:
        """All stored keys in byte order."""
        return sorted(self._read_state(), key=lambda k: k.encode("utf-8"))

    def count(self) -> int:
        """Get record count."""
        return len(self._read_state())

    def get_merkle_root(self) -> str:
        """Get Merkle root of the current key/value state."""
        state = self._read_state()
        return merkle([
            {"key": k, "value": state[k].decode("utf-8", errors="replace")}
            for k in self.keys()
        ])


class MemoryStore(RecordStore):
    """
    In-memory record store.
    """

    def __init__(self, initial: dict[str, bytes] | None = None):
        super().__init__()
        self._data = dict(initial or {})

    def _read_state(self) -> dict[str, bytes]:
        return dict(self._data)

    def _write(self, key: str, value: bytes) -> None:
        self._data[key] = value


class LedgerStore(RecordStore):
    """
    Append-only ledger store. Every put appends one JSONL entry; the
    current state is the last write per key.
    """

    def __init__(self, path: str = DEFAULT_LEDGER_PATH):
        """
        Initialize ledger store.

        Args:
            path: Path to ledger file
        """
        super().__init__()
        self.path = path
        self._ensure_file()

    def _ensure_file(self) -> None:
        """Create ledger file if it doesn't exist."""
        if not os.path.exists(self.path):
            try:
                open(self.path, "a").close()
            except OSError as e:
                stoprule_store_fault("open", str(e))

    def _write(self, key: str, value: bytes) -> None:
        try:
            text = value.decode("utf-8")
        except UnicodeDecodeError:
            stoprule_store_fault("put", f"value for {key} is not UTF-8")

        entry = {"key": key, "value": text, "ts": utc_now()}
        try:
            with open(self.path, "a") as f:
                f.write(json.dumps(entry, sort_keys=True) + "\n")
        except OSError as e:
            stoprule_store_fault("put", str(e))

    def read_all(self) -> list[dict]:
        """
        Read all ledger entries, oldest first.

        Returns:
            List of {"key", "value", "ts"} entries
        """
        entries = []

        if not os.path.exists(self.path):
            return entries

        try:
            with open(self.path, "r") as f:
                for line in f:
                    line = line.strip()
                    if not line:
                        continue
                    try:
                        entry = json.loads(line)
                    except json.JSONDecodeError:
                        continue
                    if isinstance(entry, dict) and "key" in entry and "value" in entry:
                        entries.append(entry)
        except OSError as e:
            stoprule_store_fault("read", str(e))

        return entries

    def _read_state(self) -> dict[str, bytes]:
        state = {}
        for entry in self.read_all():
            state[entry["key"]] = entry["value"].encode("utf-8")
        return state

    def history(self, key: str) -> list[dict]:
        """Every write ever made to key, oldest first."""
        return [e for e in self.read_all() if e["key"] == key]

    def get_latest(self, n: int = 10) -> list[dict]:
        """Get latest n ledger entries."""
        return self.read_all()[-n:]


def get_ledger_status(store: RecordStore) -> dict:
    """
    Get ledger status.

    Args:
        store: Record store

    Returns:
        Status dict
    """
    status = {
        "backend": type(store).__name__,
        "record_count": store.count(),
        "merkle_root": store.get_merkle_root(),
    }

    if isinstance(store, LedgerStore):
        entries = store.read_all()
        latest = store.get_latest(1)
        status["path"] = store.path
        status["file_size_bytes"] = (
            os.path.getsize(store.path) if os.path.exists(store.path) else 0
        )
        status["entry_count"] = len(entries)
        status["latest_ts"] = latest[0].get("ts") if latest else None

    emit_receipt("ledger_status", {
        "tenant_id": TENANT_ID,
        **status
    })

    return status
