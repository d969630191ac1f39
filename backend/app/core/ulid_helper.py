"""ULID generation helper utilities."""

import threading

from ulid import ULID

_lock = threading.Lock()
_last_value = 0


def generate_ulid() -> str:
    """
    Generate a new ULID string.

    Values are strictly increasing within the process, so ordering by id
    gives creation order even for rows created in the same millisecond.
    """
    global _last_value
    with _lock:
        candidate = int(ULID())
        if candidate <= _last_value:
            candidate = _last_value + 1
        _last_value = candidate
        return str(ULID.from_int(candidate))

