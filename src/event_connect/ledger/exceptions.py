# ABOUTME: Exceptions raised by the connection ledger.
# ABOUTME: Separates caller mistakes (validation) from store failures.

from event_connect.errors import EventConnectError


class LedgerError(EventConnectError):
    """Raised when the store fails while applying a ledger operation.

    The operation is not partially applied and is safe to retry.
    """

    pass


class LedgerValidationError(LedgerError):
    """Raised when a ledger call is rejected before any store mutation.

    Covers self-connection attempts, targets outside the event, and
    approvals by someone other than the request's recipient.
    """

    pass
