"""Domain Types — identity types and the identifier generator.

Invariants:
    - UserId, PostId, AccountId wrap str — never use bare str ids in domain logic
    - Identifiers are 20 lowercase base32hex chars: 4-byte timestamp, 5 per-process
      random bytes, 3-byte per-second sequence
    - Ids from one process strictly increase in creation order, across second
      boundaries, sequence exhaustion and clock steps backwards
    - UNSET is the only "field absent" marker; "" is a real value

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - base32hex alphabet preserves byte order, so ids sort like their timestamps
"""

import base64
import os
import threading
import time
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", str)
PostId = NewType("PostId", str)
AccountId = NewType("AccountId", str)

ID_LENGTH = 20

# Fixed per process, like xid's machine+pid segment.
_PROCESS_BYTES = os.urandom(5)
_MAX_SEQUENCE = 0xFFFFFF

_lock = threading.Lock()
_second = 0
_sequence = 0


def _next_slot() -> tuple[int, int]:
    """(second, sequence) pairs that strictly increase within this process.

    The sequence restarts at 0 each new second. If it runs out (more than
    2**24 ids in one second) or the wall clock steps back, the second is
    carried forward instead of reusing an earlier slot.
    """
    global _second, _sequence
    with _lock:
        now = int(time.time())
        if now > _second:
            _second, _sequence = now, 0
        elif _sequence < _MAX_SEQUENCE:
            _sequence += 1
        else:
            _second, _sequence = _second + 1, 0
        return _second, _sequence


def new_id() -> str:
    """Generate a fresh identifier (xid layout, base32hex, lowercase)."""
    second, sequence = _next_slot()
    raw = second.to_bytes(4, "big") + _PROCESS_BYTES + sequence.to_bytes(3, "big")
    return base64.b32hexencode(raw).decode("ascii").rstrip("=").lower()


# ─── Partial Updates ─────────────────────────────────────────────

class _Unset:
    """Marker for an optional field that was not supplied."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET = _Unset()
