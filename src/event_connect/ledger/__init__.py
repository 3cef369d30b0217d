# ABOUTME: Connection ledger package for requests, approvals, and connection state.
# ABOUTME: Exports ConnectionLedger, ConnectionState, and the ledger exceptions.

from event_connect.ledger.exceptions import LedgerError, LedgerValidationError
from event_connect.ledger.service import ConnectionLedger
from event_connect.ledger.states import ConnectionState

__all__ = [
    "ConnectionLedger",
    "ConnectionState",
    "LedgerError",
    "LedgerValidationError",
]
