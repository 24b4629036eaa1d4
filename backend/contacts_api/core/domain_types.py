"""Domain Types — identifiers and lifecycle enums shared across layers.

Invariants:
    - RecordId wraps the integer primary key assigned by the store
    - All request stages and operations encoded as Enums, no raw string matching
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

RecordId = NewType("RecordId", int)

# Largest value a SQLite INTEGER column can bind.
MAX_RECORD_ID = 2**63 - 1


# ─── Enums ───────────────────────────────────────────────────────

class RequestStage(str, Enum):
    """Per-request lifecycle. Error exits jump straight to RESPONDED."""
    RECEIVED = "received"
    VALIDATED = "validated"
    PERSISTED = "persisted"
    RESPONDED = "responded"


class Operation(str, Enum):
    """Logical persistence operations, one per request."""
    LIST = "list"
    GET = "get"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    IMPORT = "import"
