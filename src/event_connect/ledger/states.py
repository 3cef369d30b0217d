# ABOUTME: Connection state values reported by the ledger to its callers.
# ABOUTME: The same values drive the connect button and contact visibility.

from enum import Enum


class ConnectionState(str, Enum):
    """State of the relationship between a viewer and a target."""

    SELF = "self"
    CONNECTED = "connected"
    PENDING = "pending"
    IDLE = "idle"

    @property
    def reveals_contact(self) -> bool:
        """Return True if hidden contact details should be shown in this state."""
        return self in (ConnectionState.SELF, ConnectionState.CONNECTED)
