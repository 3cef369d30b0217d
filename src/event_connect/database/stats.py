# ABOUTME: Aggregate event metrics for the admin dashboard.
# ABOUTME: Counts attendees, connections, pending requests, and scans for one event.

from typing import Any

from sqlmodel import func, select

from event_connect.database.service import DatabaseService
from event_connect.models import Connection, ConnectionRequest, Profile, RequestStatus, Scan


def get_event_metrics(db_service: DatabaseService, event_id: str) -> dict[str, Any]:
    """Get aggregate metrics for an event.

    Args:
        db_service: The DatabaseService instance to query.
        event_id: The event to summarise.

    Returns:
        Dictionary containing:
            - total_attendees: Number of profiles in the event
            - avg_profile_completion: Rounded mean completion score (0 when empty)
            - total_connections: Number of confirmed connections
            - pending_requests: Number of requests still awaiting a decision
            - total_scans: Number of logged scans
            - scan_source_breakdown: Dict mapping scan source to count
    """
    with db_service.get_session() as session:
        attendees_stmt = (
            select(func.count()).select_from(Profile).where(Profile.event_id == event_id)
        )
        total_attendees = session.exec(attendees_stmt).one()

        completion_stmt = select(func.avg(Profile.completion_score)).where(
            Profile.event_id == event_id
        )
        avg_completion = session.exec(completion_stmt).one()

        connections_stmt = (
            select(func.count()).select_from(Connection).where(Connection.event_id == event_id)
        )
        total_connections = session.exec(connections_stmt).one()

        pending_stmt = (
            select(func.count())
            .select_from(ConnectionRequest)
            .where(
                ConnectionRequest.event_id == event_id,
                ConnectionRequest.status == RequestStatus.PENDING,
            )
        )
        pending_requests = session.exec(pending_stmt).one()

        scans_stmt = select(func.count()).select_from(Scan).where(Scan.event_id == event_id)
        total_scans = session.exec(scans_stmt).one()

        # Scans by source
        source_stmt = (
            select(Scan.source, func.count())
            .where(Scan.event_id == event_id)
            .group_by(Scan.source)  # type: ignore[arg-type]
        )
        scan_source_breakdown = {
            source.value: count for source, count in session.exec(source_stmt).all()
        }

    return {
        "total_attendees": total_attendees,
        "avg_profile_completion": round(avg_completion) if avg_completion is not None else 0,
        "total_connections": total_connections,
        "pending_requests": pending_requests,
        "total_scans": total_scans,
        "scan_source_breakdown": scan_source_breakdown,
    }
