# ABOUTME: Connection ledger that turns connection requests into canonical connections.
# ABOUTME: Relies on store uniqueness constraints and the atomic approval routine for safety.

import logging
from collections.abc import Callable

from sqlalchemy.exc import SQLAlchemyError

from event_connect.config import Settings
from event_connect.database import (
    DatabaseError,
    DatabaseService,
    DuplicateRecordError,
    InvalidTransitionError,
)
from event_connect.ledger.exceptions import LedgerError, LedgerValidationError
from event_connect.ledger.states import ConnectionState
from event_connect.models import ConnectionRequest, RequestStatus
from event_connect.notify.service import Notifier

logger = logging.getLogger(__name__)

STORE_FAILURE_MESSAGE = "Could not complete the action, try again."


class ConnectionLedger:
    """Owns the connection request lifecycle for an event.

    The ledger is stateless. Concurrent requests for the same pair are
    serialised by the store's uniqueness constraints, and approval runs as
    one store transaction, so no in-process locking is needed.
    """

    def __init__(
        self,
        db_service: DatabaseService,
        settings: Settings,
        notifier: Notifier | None = None,
    ) -> None:
        """Initialize the ledger.

        Args:
            db_service: Database service holding requests and connections.
            settings: Application settings carrying the approval policy.
            notifier: Optional notifier for request and approval side effects.
        """
        self._db_service = db_service
        self._settings = settings
        self._notifier = notifier

    @property
    def requires_approval(self) -> bool:
        """Return True if recipients must approve requests manually."""
        return self._settings.connections_require_approval

    def request_connection(
        self, event_id: str, requester_id: str, target_id: str
    ) -> ConnectionState:
        """Ask to connect with another attendee.

        Repeating a request is safe: an existing connection or request for
        the same direction is reported instead of writing anything new.

        Args:
            event_id: Event the request belongs to.
            requester_id: Identity making the request.
            target_id: Identity being asked.

        Returns:
            ConnectionState.CONNECTED or ConnectionState.PENDING.

        Raises:
            LedgerValidationError: For self-connection or a target outside the event.
            LedgerError: If the store fails.
        """
        if requester_id == target_id:
            raise LedgerValidationError("You cannot connect with yourself.")

        require_approval = self.requires_approval

        try:
            target = self._db_service.get_profile(target_id)
            if target is None:
                raise LedgerValidationError("Profile not found.")
            if target.event_id != event_id:
                raise LedgerValidationError("This profile does not belong to the event.")

            if self._db_service.get_connection(event_id, requester_id, target_id):
                return ConnectionState.CONNECTED

            existing = self._db_service.find_request(event_id, requester_id, target_id)
            if existing is not None:
                if existing.status == RequestStatus.APPROVED:
                    return ConnectionState.CONNECTED
                return ConnectionState.PENDING

            request = ConnectionRequest(
                event_id=event_id,
                requester_id=requester_id,
                recipient_id=target_id,
                status=RequestStatus.PENDING if require_approval else RequestStatus.APPROVED,
            )
            try:
                request = self._db_service.insert_request(request)
            except DuplicateRecordError:
                logger.info(
                    "Concurrent request %s -> %s already recorded", requester_id, target_id
                )
                if require_approval:
                    return ConnectionState.PENDING
                self._db_service.upsert_connection(event_id, requester_id, target_id)
                return ConnectionState.CONNECTED

            if not require_approval:
                self._db_service.upsert_connection(event_id, requester_id, target_id)
                return ConnectionState.CONNECTED
        except (SQLAlchemyError, DatabaseError) as e:
            logger.error("Connection request %s -> %s failed: %s", requester_id, target_id, e)
            raise LedgerError(STORE_FAILURE_MESSAGE) from e

        self._notify(self._notifier.connection_requested if self._notifier else None, request)
        return ConnectionState.PENDING

    def approve_request(
        self, event_id: str, request_id: str, approver_id: str
    ) -> ConnectionState:
        """Approve a pending request addressed to the approver.

        Args:
            event_id: Event the request must belong to.
            request_id: Id of the request.
            approver_id: Identity approving; must be the request's recipient.

        Returns:
            ConnectionState.CONNECTED.

        Raises:
            LedgerValidationError: If the request is not the approver's to approve
                or was already declined.
            LedgerError: If the store fails.
        """
        request = self._load_request_for_recipient(event_id, request_id, approver_id)

        try:
            approval = self._db_service.approve_request_atomic(request_id)
        except InvalidTransitionError as e:
            raise LedgerValidationError("This request was already declined.") from e
        except (SQLAlchemyError, DatabaseError) as e:
            logger.error("Approval of request %s failed: %s", request_id, e)
            raise LedgerError(STORE_FAILURE_MESSAGE) from e

        if approval.approved_now:
            self._notify(
                self._notifier.connection_accepted if self._notifier else None, request
            )
        return ConnectionState.CONNECTED

    def decline_request(
        self, event_id: str, request_id: str, approver_id: str
    ) -> ConnectionState:
        """Decline a pending request addressed to the approver.

        No connection is created and the requester is not notified.

        Returns:
            The pair's state after declining, as seen by the approver.

        Raises:
            LedgerValidationError: If the request is not the approver's to decline
                or was already approved.
            LedgerError: If the store fails.
        """
        request = self._load_request_for_recipient(event_id, request_id, approver_id)

        try:
            declined = self._db_service.decline_request(request_id)
            if not declined:
                current = self._db_service.get_request(request_id)
                if current is not None and current.status == RequestStatus.APPROVED:
                    raise LedgerValidationError("This request was already approved.")
        except (SQLAlchemyError, DatabaseError) as e:
            logger.error("Decline of request %s failed: %s", request_id, e)
            raise LedgerError(STORE_FAILURE_MESSAGE) from e

        return self.query_state(event_id, approver_id, request.requester_id)

    def query_state(self, event_id: str, viewer_id: str, target_id: str) -> ConnectionState:
        """Report the relationship between a viewer and a target.

        Any request row between the pair that has not become a connection
        counts as pending, whichever direction it was sent in.

        Raises:
            LedgerError: If the store fails.
        """
        if viewer_id == target_id:
            return ConnectionState.SELF

        try:
            if self._db_service.get_connection(event_id, viewer_id, target_id):
                return ConnectionState.CONNECTED
            requests = self._db_service.find_requests_between(event_id, viewer_id, target_id)
        except (SQLAlchemyError, DatabaseError) as e:
            raise LedgerError(STORE_FAILURE_MESSAGE) from e

        if any(request.status == RequestStatus.APPROVED for request in requests):
            return ConnectionState.CONNECTED
        if requests:
            return ConnectionState.PENDING
        return ConnectionState.IDLE

    def _load_request_for_recipient(
        self, event_id: str, request_id: str, approver_id: str
    ) -> ConnectionRequest:
        try:
            request = self._db_service.get_request(request_id)
        except (SQLAlchemyError, DatabaseError) as e:
            raise LedgerError(STORE_FAILURE_MESSAGE) from e

        if request is None or request.recipient_id != approver_id or request.event_id != event_id:
            raise LedgerValidationError("Invalid request.")
        return request

    def _notify(
        self, send: Callable[[ConnectionRequest], None] | None, request: ConnectionRequest
    ) -> None:
        if send is None:
            return
        try:
            send(request)
        except Exception:
            logger.exception("Notification for request %s could not be dispatched", request.id)
